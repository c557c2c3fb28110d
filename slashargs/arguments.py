r"""
slashargs parameter qualifiers and descriptors.

Overview
- Qualifiers (declared by the program author)
  • Required: the parameter is supplied positionally, by order, without a name.
  • Optional: the parameter is supplied as a flag token (/name, /-name or
    /name:value) or keeps its default; it may have alternate names.

- Descriptor (built by discovery, consumed by the validator/binder/formatter)
  • Parameter: name, kind, declared type, alternate names, default value,
    description, and every qualifier found on the declaration.

Declaring qualifiers
    >>> class Tool:
    ...     @action
    ...     def build(self,
    ...               path: str = Required(descr="project path"),
    ...               jobs: int = Optional(1, "j", descr="parallel jobs"),
    ...               verbose: bool = False):
    ...         ...

  A qualifier may also be attached with typing.Annotated, which is the only
  way to (wrongly) put two qualifiers on one parameter; the validator reports
  it. A plain default makes an implicit Optional, and a bare parameter an
  implicit Required.

Introspection & representation
- ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
  the fields listed in __introspectable__ as read-only properties.
"""
import functools
import operator
import re
from enum import Enum

from .utils import *


class ArgumentType(type):
    """
    Metaclass that turns qualifier/descriptor classes into introspectable records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - optional(default=1, names=('j',), descr='parallel jobs')
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_descr(cls, descr, /):
    """
    Internal: validate an optional description; Unset becomes "".

    Raises
    - TypeError: if 'descr' is not a string or Unset.
    - ValueError: if 'descr' is a string but empty after trimming.
    """
    if not isinstance(descr, str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    return coalesce(descr, "")


def _sanitize_names(cls, names, /):
    """
    Internal: validate alternate names of an Optional qualifier.

    Names are matched against flag tokens after the leading '/', so they cannot
    be empty, contain whitespace or ':', or start with '-' (reserved for negation).
    Duplicates are kept as declared: the metadata validator reports them with
    the action name attached.
    """
    sanitized = []
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not re.fullmatch(r"[^\s:/\-][^\s:]*", name):
            raise ValueError(f"{cls.__typename__} name {name!r} is not a valid flag name")
        sanitized.append(name)
    return tuple(sanitized)


class Qualifier(metaclass=ArgumentType):
    """
    Common base of Required and Optional (the tagged variant).
    """
    kind = None


class Kind(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"


class Required(Qualifier):
    """
    Marks a parameter as required: it is bound from the next positional token.

    Parameters
    - descr: Unset | str
      Short description for usage. If Unset, becomes "".
    """
    __introspectable__ = ("descr",)

    kind = Kind.REQUIRED

    def __new__(cls, *, descr=Unset):
        self = super().__new__(cls)
        self._descr = _sanitize_descr(cls, descr)
        return self


class Optional(Qualifier):
    """
    Marks a parameter as optional: bound from a flag token, otherwise defaulted.

    Parameters
    - default: Any
      Value used when no flag token names this parameter. It must be an
      instance of the declared type (checked by the metadata validator).
    - names: str
      Alternate names accepted in flag tokens besides the parameter name.
      The first one is preferred in usage lines.
    - descr: Unset | str
      Short description for usage. If Unset, becomes "".
    """
    __introspectable__ = ("default", "names", "descr")

    kind = Kind.OPTIONAL

    def __new__(cls, default, /, *names, descr=Unset):
        self = super().__new__(cls)
        self._default = default
        self._names = _sanitize_names(cls, names)
        self._descr = _sanitize_descr(cls, descr)
        return self


class Parameter(metaclass=ArgumentType):
    """
    Per-parameter descriptor of an action.

    Fields
    - name: the parameter name in the action's signature.
    - kind: Kind.REQUIRED or Kind.OPTIONAL.
    - type: declared semantic type (see slashargs.converters).
    - names: alternate names (Optional only, may be empty).
    - default: default value (Optional only, Unset for Required).
    - descr: description for usage ("" when absent).
    - nullable: the annotation admitted None (T | None).
    - qualifiers: every qualifier found on the declaration, in order.
    """
    __introspectable__ = (
        "name",
        "kind",
        "type",
        "names",
        "default",
        "descr",
        "nullable",
        "qualifiers",
    )
    __displayable__ = (
        "name",
        "kind",
        "type",
        "names",
        "default",
    )

    def __new__(
            cls,
            name,
            kind,
            type=str,
            names=(),
            default=Unset,
            descr="",
            *,
            nullable=False,
            qualifiers=()
    ):
        if not isinstance(name, str) or not name:
            raise TypeError(f"{cls.__typename__} 'name' must be a non-empty string")
        if not isinstance(kind, Kind):
            raise TypeError(f"{cls.__typename__} 'kind' must be a Kind")
        if kind is Kind.REQUIRED and (names or default is not Unset):
            raise TypeError(f"{cls.__typename__} required parameter {name!r} cannot have names or a default")
        self = super().__new__(cls)
        self._name = name
        self._kind = kind
        self._type = type
        self._names = tuple(names)
        self._default = default
        self._descr = descr
        self._nullable = bool(nullable)
        self._qualifiers = tuple(qualifiers)
        return self

    @property
    def required(self):
        return self._kind is Kind.REQUIRED

    @property
    def optional(self):
        return self._kind is Kind.OPTIONAL

    @property
    def aliases(self):
        """
        Every name a flag token may use for this parameter: alternate names
        first, then the parameter name. Empty for Required parameters.
        """
        if self.required:
            return ()
        return self._names + (self._name,)


__all__ = (
    "Kind",
    "Qualifier",
    "Required",
    "Optional",
    "Parameter",
)
