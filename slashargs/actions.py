"""
slashargs actions: the @action marker, discovery, and the action registry.

What this module provides
- action(...): marks a function or method as an entry point of a target.
- Action: an invocable entry point (name, callback, ordered Parameter tuple).
- discover(target): builds the Action list of a class, an instance or a module.
- Registry: the discovered actions of one target for one dispatch; decides
  between single-command and multi-command mode.

Discovery rules
- Only members marked with @action count, in definition order (base classes
  first for class targets). For modules, only functions defined in the module.
- Each parameter becomes a Parameter descriptor:
  • qualifiers come from typing.Annotated metadata and from the default value
    (Required(...) / Optional(...)); all of them are recorded so the validator
    can reject conflicting declarations.
  • a plain default makes an implicit Optional with that default, a bare
    parameter an implicit Required.
  • the declared type is the annotation (T | None marks it nullable); without
    an annotation it is the default's type, else str.
- Instance methods discovered on a class target are bound to a fresh
  instance (built with no arguments) when invoked.
"""
import inspect
import types
from typing import Annotated, Union, get_args, get_origin, get_type_hints

from .arguments import ArgumentType, Kind, Qualifier, Required, Optional, Parameter
from .faults import VariadicParameterError, UnresolvedAnnotationError
from .utils import *

_MARKER = "__action__"


def action(source=Unset, /, *, name=Unset, descr=Unset):
    """
    Mark a callable as an action, or return a decorator doing so.

    Invocation modes
    - Bare decorator:
        @action
        def build(path): ...
    - Configured decorator:
        @action(name="make", descr="build the project")
        def build(path): ...

    Parameters
    - source: Unset | Callable | staticmethod | classmethod
    - name: Unset | str
      Sub-command name; defaults to the function name. Matching against the
      first token is case-insensitive.
    - descr: Unset | str
      Short description shown next to the name in the sub-command overview.

    Returns
    - the source unchanged (marked), so the method still works normally.
    """
    if not isinstance(name, str | Unset):
        raise TypeError("@action() 'name' must be a string")
    elif isinstance(name, str) and not (name := name.strip()):
        raise ValueError("@action() 'name' cannot be empty")
    if not isinstance(descr, str | Unset):
        raise TypeError("@action() 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError("@action() 'descr' cannot be empty")

    @rename("action")
    def wrapper(source, /):
        function = source.__func__ if isinstance(source, staticmethod | classmethod) else source
        if not inspect.isfunction(function):
            raise TypeError("@action() must be applied to a function")
        setattr(function, _MARKER, (coalesce(name, function.__name__), coalesce(descr, "")))
        return source

    return wrapper(source) if source is not Unset else wrapper


class Action(metaclass=ArgumentType):
    """
    An invocable entry point of a target.

    Fields
    - name: sub-command name.
    - callback: callable receiving the bound values.
    - parameters: Parameter descriptors in declaration order.
    - keywords: names of parameters passed by keyword (keyword-only ones).
    - descr: description for the sub-command overview ("" when absent).
    """
    __introspectable__ = ("name", "callback", "parameters", "keywords", "descr")
    __displayable__ = ("name", "parameters")

    def __new__(cls, name, callback, parameters=(), *, keywords=(), descr=""):
        if not isinstance(name, str) or not name:
            raise TypeError(f"{cls.__typename__} 'name' must be a non-empty string")
        if not callable(callback):
            raise TypeError(f"{cls.__typename__} 'callback' must be callable")
        for parameter in parameters:
            if not isinstance(parameter, Parameter):
                raise TypeError(f"{cls.__typename__} 'parameters' must contain parameters")
        if not isinstance(descr, str):
            raise TypeError(f"{cls.__typename__} 'descr' must be a string")
        self = super().__new__(cls)
        self._name = name
        self._callback = callback
        self._parameters = tuple(parameters)
        self._keywords = frozenset(keywords)
        self._descr = descr
        return self

    def __call__(self, values, /):
        """
        Invoke the callback with one bound value per parameter, in order.

        Errors raised by the callback propagate unchanged.
        """
        args = []
        kwargs = {}
        for parameter, value in zip(self._parameters, values, strict=True):
            if parameter.name in self._keywords:
                kwargs[parameter.name] = value
            else:
                args.append(value)
        return self._callback(*args, **kwargs)


def _resolve_type(annotation, default):
    """
    Return (type, nullable) for a parameter annotation.
    """
    if annotation is Unset:
        if default is Unset or default is None:
            return str, default is None
        return type(default), False

    if get_origin(annotation) in (Union, types.UnionType):
        arguments = tuple(argument for argument in get_args(annotation) if argument is not type(None))
        if len(arguments) == 1:
            return arguments[0], len(arguments) != len(get_args(annotation))

    return annotation, False


def _resolve_parameter(parameter, hints):
    """
    Build the Parameter descriptor of one inspect.Parameter.
    """
    annotation = hints.get(parameter.name, Unset)
    qualifiers = []

    if get_origin(annotation) is Annotated:
        annotation, *metadata = get_args(annotation)
        qualifiers.extend(item for item in metadata if isinstance(item, Qualifier))

    if isinstance(parameter.default, Qualifier):
        qualifiers.append(parameter.default)

    if qualifiers:
        primary = qualifiers[0]
    elif parameter.default is inspect.Parameter.empty:
        primary = Required()
    else:
        primary = Optional(parameter.default)

    if primary.kind is Kind.REQUIRED:
        type, nullable = _resolve_type(annotation, Unset)
        return Parameter(
            parameter.name,
            Kind.REQUIRED,
            type,
            descr=primary.descr,
            nullable=nullable,
            qualifiers=qualifiers,
        )

    type, nullable = _resolve_type(annotation, primary.default)
    return Parameter(
        parameter.name,
        Kind.OPTIONAL,
        type,
        primary.names,
        primary.default,
        primary.descr,
        nullable=nullable,
        qualifiers=qualifiers,
    )


def _resolve_action(name, function, callback, *, method, descr=""):
    """
    Build the Action of one marked function; `method` drops the bound first parameter.
    """
    signature = inspect.signature(function)
    try:
        hints = get_type_hints(function, include_extras=True)
    except NameError as error:
        raise UnresolvedAnnotationError(
            'Can not resolve the annotations of the method "%s": %s' % (name, error),
            hint="import every name used in the annotations at module level",
        ) from error

    parameters = []
    keywords = []
    for index, parameter in enumerate(signature.parameters.values()):
        if method and index == 0:
            continue
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            raise VariadicParameterError(
                'Variadic parameter "%s" is not allowed in method "%s"' % (parameter.name, name),
                hint="declare each argument as its own parameter",
            )
        if parameter.kind is inspect.Parameter.KEYWORD_ONLY:
            keywords.append(parameter.name)
        parameters.append(_resolve_parameter(parameter, hints))

    return Action(name, callback, parameters, keywords=keywords, descr=descr)


def _members(target):
    """
    Yield (attribute, member) pairs of a target in definition order.
    """
    if inspect.ismodule(target):
        for attribute, member in vars(target).items():
            if inspect.isfunction(member) and member.__module__ == target.__name__:
                yield attribute, member
        return

    members = {}
    for klass in reversed((target if isinstance(target, type) else type(target)).__mro__):
        members.update(vars(klass))
    yield from members.items()


def _instantiating(target, attribute):
    """
    Callback binding an instance method of a class target to a fresh instance.
    """
    @rename(attribute)
    def callback(*args, **kwargs):
        return getattr(target(), attribute)(*args, **kwargs)
    return callback


def discover(target, /):
    """
    Return the actions of a class, an instance or a module, in definition order.
    """
    actions = []

    for attribute, member in _members(target):
        function = member.__func__ if isinstance(member, staticmethod | classmethod) else member
        if not inspect.isfunction(function) or not hasattr(function, _MARKER):
            continue
        name, descr = getattr(function, _MARKER)

        if inspect.ismodule(target) or isinstance(member, staticmethod):
            actions.append(_resolve_action(name, function, function, method=False, descr=descr))
        elif isinstance(member, classmethod) or not isinstance(target, type):
            actions.append(_resolve_action(name, function, getattr(target, attribute), method=True, descr=descr))
        else:
            actions.append(_resolve_action(name, function, _instantiating(target, attribute), method=True, descr=descr))

    return actions


class Registry:
    """
    The discovered actions of one target, built fresh for each dispatch.

    Modes
    - single-command: exactly one action; every token belongs to it.
    - multi-command: more than one action; the first token selects one by
      name (case-insensitive) and is excluded from binding.
    """

    def __init__(self, target, actions=Unset, /):
        self._target = target
        self._actions = tuple(discover(target) if actions is Unset else actions)

    @property
    def target(self):
        return self._target

    actions = mirror("actions")

    @property
    def name(self):
        """
        Short name of the target (class name, or last module segment).
        """
        if inspect.ismodule(self._target):
            return self._target.__name__.rpartition(".")[2]
        if isinstance(self._target, type):
            return self._target.__name__
        return type(self._target).__name__

    @property
    def multi(self):
        return len(self._actions) > 1

    @property
    def offset(self):
        """
        Number of leading tokens that are not action arguments.
        """
        return 1 if self.multi else 0

    def find(self, name, /):
        """
        Return the action named `name` (case-insensitive), or None.
        """
        for action in self._actions:
            if action.name.lower() == name.lower():
                return action
        return None

    def __iter__(self):
        return iter(self._actions)

    def __len__(self):
        return len(self._actions)

    def __getitem__(self, index, /):
        return self._actions[index]

    def __repr__(self):
        return "registry(target=%s, actions=%r)" % (self.name, [action.name for action in self._actions])


__all__ = (
    "action",
    "Action",
    "discover",
    "Registry",
)
