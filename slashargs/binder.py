r"""
slashargs argument binder.

Matches a raw argument vector against one action's parameters and produces
the list of typed values to invoke it with.

Token grammar
- /-NAME        negated switch, the value is "false" (a trailing :VALUE is ignored)
- /NAME:VALUE   assignment
- /NAME         switch, the value is "true"
- anything else positional

Algorithm
1. skip `offset` leading tokens (the sub-command selector in multi-command mode).
2. walk the parameters in order: Required ones take the next positional slot,
   Optional ones register every alias and seed their slot with the default.
3. fewer tokens than Required parameters is a MissingRequiredError.
4. every token after the Required ones is a flag token; each must start with
   '/', must not repeat a parameter, and must name a known alias.
5. only then are the tokens converted, Required ones first, flag tokens next,
   each overwriting its parameter's slot.

Flag names are case-sensitive.
"""
import difflib
from enum import Enum
from typing import NamedTuple

from .converters import convert
from .faults import MissingRequiredError, MalformedTokenError, DuplicatedFlagError, UnknownFlagError

FLAG_MARKER = "/"
NEGATION_MARKER = "/-"
VALUE_MARKER = ":"


class TokenKind(Enum):
    POSITIONAL = "positional"
    ASSIGNMENT = "assignment"
    SWITCH = "switch"
    NEGATION = "negation"


class Token(NamedTuple):
    """
    One classified argument: the raw text, its kind, and for flag tokens the
    name and value text it carries.
    """
    text: str
    kind: TokenKind
    name: str | None = None
    value: str | None = None

    @property
    def flagged(self):
        return self.kind is not TokenKind.POSITIONAL


def classify(text, /):
    """
    Classify a raw token.

    Examples
    - classify("/-debug")     -> Token("/-debug", NEGATION, "debug", "false")
    - classify("/out:a.txt")  -> Token("/out:a.txt", ASSIGNMENT, "out", "a.txt")
    - classify("/debug")      -> Token("/debug", SWITCH, "debug", "true")
    - classify("file")        -> Token("file", POSITIONAL)
    """
    if not isinstance(text, str):
        raise TypeError("classify() argument must be a string")
    if text.startswith(NEGATION_MARKER):
        name, _, _ = text[len(NEGATION_MARKER):].partition(VALUE_MARKER)
        return Token(text, TokenKind.NEGATION, name, "false")
    if text.startswith(FLAG_MARKER):
        name, separator, value = text[len(FLAG_MARKER):].partition(VALUE_MARKER)
        if separator:
            return Token(text, TokenKind.ASSIGNMENT, name, value)
        return Token(text, TokenKind.SWITCH, name, "true")
    return Token(text, TokenKind.POSITIONAL)


def _check_tokens(tokens, aliases):
    """
    Validate flag tokens before any conversion happens.

    The first pass rejects positional leftovers and repeated parameters, the
    second rejects names that are not aliases of any Optional parameter.
    """
    passed = set()
    for token in tokens:
        if not token.flagged:
            raise MalformedTokenError(
                "Unknown parameter %s" % token.text,
                token=token.text,
                hint="optional parameters are passed as /name, /-name or /name:value",
            )
        key = aliases[token.name][1].name if token.name in aliases else token.name
        if key in passed:
            raise DuplicatedFlagError(
                "Parameter with name %s passed two times" % token.name,
                token=token.text,
                hint="pass each optional parameter once",
            )
        passed.add(key)

    for token in tokens:
        if token.name not in aliases:
            suggestions = difflib.get_close_matches(token.name, aliases.keys(), 5)
            raise UnknownFlagError(
                "Unknown parameter name %s" % token.text,
                token=token.text,
                suggestions=suggestions,
                hint="did you mean %r?" % suggestions[0] if suggestions else "run with /help to see all parameters",
            )


def bind(action, args, /, *, offset=0):
    """
    Bind `args` to the parameters of `action`.

    Parameters
    - action: Action
    - args: Sequence[str], the whole argument vector.
    - offset: number of leading tokens that do not belong to the action.

    Returns
    - list: one typed value per parameter, in declaration order; Optional
      parameters not named by a flag token keep their default.

    Raises
    - InputError subclasses (missing, malformed, duplicated, unknown,
      unconvertible), before the action is ever invoked.
    """
    args = list(args)
    for arg in args:
        if not isinstance(arg, str):
            raise TypeError("bind() arguments must be strings")

    values = []
    aliases = {}
    requireds = []

    for parameter in action.parameters:
        if parameter.required:
            requireds.append((len(values), parameter))
        else:
            for name in parameter.aliases:
                aliases[name] = (len(values), parameter)
        values.append(parameter.default)

    if len(args) - offset < len(requireds):
        raise MissingRequiredError("Not all required parameters are set", action=action)

    tokens = list(map(classify, args[offset + len(requireds):]))
    _check_tokens(tokens, aliases)

    for index, (position, parameter) in enumerate(requireds):
        values[position] = convert(args[offset + index], parameter.type)

    for token in tokens:
        position, parameter = aliases[token.name]
        values[position] = convert(token.value, parameter.type)

    return values


__all__ = (
    "FLAG_MARKER",
    "NEGATION_MARKER",
    "VALUE_MARKER",
    "TokenKind",
    "Token",
    "classify",
    "bind",
)
