"""
slashargs type converter.

Converts a single textual token into a typed value for the closed set of
semantic types the binder understands, and renders the help-side text of
those types (usage hints and default values).

Supported types
- int: decimal text with optional sign; the value must fit a signed 32-bit
  integer, overflow is reported apart from a bad format.
- bool: "true"/"false" (case-insensitive).
- str: identity.
- list[str] / list[int]: elements separated by '+'.
- datetime.date: "dd-mm-yyyy".
- string-constructible types: Enum subclasses (by member name, then value),
  float, Decimal, Fraction, Path and UUID.

Anything else is an UnsupportedTypeError: the author of the action declared a
type the binder cannot produce, which is not something the user can fix.
"""
import builtins
import datetime
import re
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import Path
from typing import get_args, get_origin
from uuid import UUID

from .faults import UnconvertibleValueError, ValueOutOfRangeError, UnsupportedTypeError
from .utils import typename

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

LIST_SEPARATOR = "+"
DATE_SEPARATOR = "-"

_INTEGER = re.compile(r"\s*[+-]?\d+\s*", re.ASCII)

# Types whose constructor accepts the raw token.
_SCALARS = (float, Decimal, Fraction, Path, UUID)
_NUMERICS = (float, Decimal, Fraction)


def _is_class(type):
    return isinstance(type, builtins.type) and get_origin(type) is None


def normalize(type, /):
    """
    Canonical form of a declared type.

    - typing.List[X] and list[X] both become list[X].
    - a bare `list` is a list of strings.
    - everything else is returned unchanged.
    """
    if type is list:
        return list[str]
    if get_origin(type) is list:
        arguments = get_args(type)
        return list[arguments[0]] if arguments else list[str]
    return type


def supports(type, /):
    """
    Whether the binder can convert a token into `type`.
    """
    type = normalize(type)
    if type in (int, str, bool, list[str], list[int], datetime.date):
        return True
    if _is_class(type):
        return issubclass(type, Enum) or type in _SCALARS
    return False


def _to_integer(token):
    if not _INTEGER.fullmatch(token):
        raise UnconvertibleValueError('Could not convert "%s" to integer' % token, token=token, type=int)
    value = int(token)
    if not INT_MIN <= value <= INT_MAX:
        raise ValueOutOfRangeError('Value "%s" is too big or too small' % token, token=token, type=int)
    return value


def _to_boolean(token):
    match token.strip().lower():
        case "true":
            return True
        case "false":
            return False
    raise UnconvertibleValueError('Could not convert "%s" to boolean' % token, token=token, type=bool)


def _to_date(token):
    parts = token.split(DATE_SEPARATOR)
    if len(parts) != 3:
        raise UnconvertibleValueError("Could not convert %s to Date" % token, token=token, type=datetime.date)
    # each part follows the integer rule and reports its own fault
    day, month, year = map(_to_integer, parts)
    try:
        return datetime.date(year, month, day)
    except ValueError:
        raise UnconvertibleValueError(
            "Could not convert %s to Date" % token, token=token, type=datetime.date
        ) from None


def _to_member(token, type):
    try:
        return type[token]
    except KeyError:
        pass
    try:
        return type(token)
    except ValueError:
        raise UnconvertibleValueError(
            'Could not convert "%s" to %s' % (token, type.__name__), token=token, type=type
        ) from None


def convert(token, type, /):
    """
    Convert `token` into a value of `type`.

    Raises
    - UnconvertibleValueError / ValueOutOfRangeError: the token cannot
      represent the type (a user input problem).
    - UnsupportedTypeError: the type is outside the supported set (a
      metadata problem).
    """
    if not isinstance(token, str):
        raise TypeError("convert() first argument must be a string")

    type = normalize(type)

    if type is int:
        return _to_integer(token)
    if type is str:
        return token
    if type is bool:
        return _to_boolean(token)
    if type == list[str]:
        return token.split(LIST_SEPARATOR)
    if type == list[int]:
        return [_to_integer(part) for part in token.split(LIST_SEPARATOR)]
    if type is datetime.date:
        return _to_date(token)
    if _is_class(type) and issubclass(type, Enum):
        return _to_member(token, type)
    if type in _SCALARS:
        try:
            return type(token)
        except (ValueError, ArithmeticError):
            raise UnconvertibleValueError(
                'Could not convert "%s" to %s' % (token, type.__name__), token=token, type=type
            ) from None

    raise UnsupportedTypeError("Unknown type is used in your method %s" % typename(type), type=type)


def hint(type, /):
    """
    Short value hint shown after ':' in usage lines.

    Examples
    - hint(int)           -> "number"
    - hint(list[str])     -> "value[+value]"
    - hint(datetime.date) -> "dd-mm-yyyy"
    """
    type = normalize(type)
    if type is int or type in _NUMERICS:
        return "number"
    if type == list[int]:
        return "number[+number]"
    if type == list[str]:
        return "value[+value]"
    if type is datetime.date:
        return "dd-mm-yyyy"
    if _is_class(type) and issubclass(type, Enum):
        return "|".join(type.__members__)
    return "value"


def render(value, /):
    """
    Natural textual form of a default value, as shown in usage.

    Strings are quoted, lists are joined with '+', dates use dd-mm-yyyy and
    enum members are shown by name. Everything else goes through str(), so
    booleans read True/False.
    """
    if value is None:
        return "None"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, str):
        return "'%s'" % value
    if isinstance(value, (list, tuple)):
        return LIST_SEPARATOR.join(map(str, value))
    if isinstance(value, datetime.date):
        return value.strftime("%d-%m-%Y")
    return str(value)


__all__ = (
    "INT_MIN",
    "INT_MAX",
    "LIST_SEPARATOR",
    "DATE_SEPARATOR",
    "normalize",
    "supports",
    "convert",
    "hint",
    "render",
)
