"""
slashargs usage formatter.

Renders usage text as a list of lines; the dispatcher writes them, one call
per line, to the message sink.

Single action
    usage: tool path [/j:number] [/verbose]
        path         project path
        [/j:number]  parallel jobs
            default value: 1
        [/verbose]
            default value: False

Several actions, none selected
    usage: tool <subcommand> [args]
    Type 'tool help <subcommand>' for help on a specific subcommand.

    Available subcommands:
    build
    clean
"""
from .converters import normalize, hint, render

INDENT = " " * 4
GAP = 2


def display(parameter, /):
    """
    Token shown for a parameter in the usage line.

    Required parameters show their bare name; Optional ones show
    [/<first alternate name or name>:<hint>], without the hint for booleans.
    """
    if parameter.required:
        return parameter.name
    name = (parameter.names or [parameter.name])[0]
    if normalize(parameter.type) is not bool:
        name += ":" + hint(parameter.type)
    return "[/%s]" % name


def describe(action, prog, /, *, multi=False):
    """
    Usage lines of one action: the usage line, then one entry per Optional
    parameter (and per described Required one). Descriptions are padded to
    the longest token of the usage line, listed or not.
    Optional entries are followed by their rendered default value.
    """
    tokens = [display(parameter) for parameter in action.parameters]
    lines = [" ".join(["usage:", prog, *([action.name.lower()] if multi else []), *tokens])]

    listed = [(token, parameter) for token, parameter in zip(tokens, action.parameters)
              if parameter.optional or parameter.descr]
    width = max(map(len, tokens), default=0)

    for token, parameter in listed:
        lines.append((INDENT + token + " " * (width - len(token) + GAP) + parameter.descr).rstrip())
        if parameter.optional:
            lines.append(INDENT * 2 + "default value: " + render(parameter.default))

    return lines


def overview(registry, prog, /):
    """
    Usage lines of a multi-command target when no action is selected.

    Sub-command names are lower-cased; described ones are followed by their
    description, padded to the longest name.
    """
    names = [action.name.lower() for action in registry]
    width = max(map(len, names), default=0)
    return [
        "usage: %s <subcommand> [args]" % prog,
        "Type '%s help <subcommand>' for help on a specific subcommand." % prog,
        "",
        "Available subcommands:",
        *((name + " " * (width - len(name) + GAP) + action.descr).rstrip()
          for name, action in zip(names, registry)),
    ]


__all__ = (
    "display",
    "describe",
    "overview",
)
