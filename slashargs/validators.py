"""
slashargs metadata validator.

Runs once per dispatch over every action of the registry, before any token is
examined. Each check raises a MetadataError subclass naming the offending
action and parameter; the first failing check halts the run.

Checks (in order)
1. the target declares at least one action.
2. a lone action declares at least one parameter.
3. no parameter carries more than one qualifier.
4. no Required parameter follows an Optional one.
5. every Optional default is assignable to the declared type.
6. no name (parameter name or alternate name) is used twice in one action.
"""
import builtins
from typing import get_args, get_origin

from .converters import normalize
from .faults import (
    MissingActionsError,
    ParameterlessActionError,
    ConflictingQualifiersError,
    MisplacedRequiredError,
    UnassignableDefaultError,
    DuplicatedNameError,
)


def assignable(value, type, /, *, nullable=False):
    """
    Whether `value` can be bound to a parameter declared as `type`.

    Rules
    - None only when the parameter is nullable.
    - booleans are not integers (True is not a valid default for an int).
    - list[X] accepts a list or tuple whose every element is assignable to X.
    - otherwise isinstance() decides; non-class types accept nothing.
    """
    if value is None:
        return nullable
    type = normalize(type)
    if get_origin(type) is list:
        element, = get_args(type)
        return isinstance(value, list | tuple) and all(assignable(item, element) for item in value)
    if not isinstance(type, builtins.type) or get_origin(type) is not None:
        return False
    if isinstance(value, bool) and type is int:
        return False
    return isinstance(value, type)


def _check_any_action_exists(registry):
    if not len(registry):
        raise MissingActionsError(
            'Can not find any public method marked with @action in "%s"' % registry.name,
            hint="decorate at least one method with @action",
        )


def _check_single_action_has_parameters(registry):
    if len(registry) == 1 and not registry[0].parameters:
        raise ParameterlessActionError(
            '@action applied once to the method "%s" without parameters. '
            'In this case slashargs should not be used' % registry[0].name,
            action=registry[0],
        )


def _check_qualifiers_are_not_combined(action):
    for parameter in action.parameters:
        if len(parameter.qualifiers) > 1:
            raise ConflictingQualifiersError(
                'More than one qualifier is applied to the parameter "%s" in the method "%s"'
                % (parameter.name, action.name),
                action=action,
                parameter=parameter,
            )


def _check_optionals_follow_requireds(action):
    optional = False
    for parameter in action.parameters:
        if parameter.optional:
            optional = True
        elif optional:
            raise MisplacedRequiredError(
                "It is not allowed to write a parameter with a Required qualifier after a parameter "
                'with an Optional one. See method "%s" parameter "%s"' % (action.name, parameter.name),
                action=action,
                parameter=parameter,
            )


def _check_defaults_are_assignable(action):
    for parameter in action.parameters:
        if parameter.required:
            continue
        if not assignable(parameter.default, parameter.type, nullable=parameter.nullable):
            raise UnassignableDefaultError(
                'Default value for an optional parameter "%s" in method "%s" can not be assigned to the parameter'
                % (parameter.name, action.name),
                action=action,
                parameter=parameter,
            )


def _check_names_are_unique(action):
    names = []
    for parameter in action.parameters:
        for name in (parameter.name, *parameter.names):
            if name in names:
                raise DuplicatedNameError(
                    'Found duplicated parameter name "%s" in method "%s". '
                    "Please check alt names for optional parameters" % (name, action.name),
                    action=action,
                    parameter=parameter,
                )
            names.append(name)


def validate(registry, /):
    """
    Run every metadata check over `registry`; raise on the first failure.
    """
    _check_any_action_exists(registry)
    _check_single_action_has_parameters(registry)
    for action in registry:
        _check_qualifiers_are_not_combined(action)
        _check_optionals_follow_requireds(action)
        _check_defaults_are_assignable(action)
        _check_names_are_unique(action)


__all__ = (
    "assignable",
    "validate",
)
