"""
slashargs faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every binder failure.
  Codes are grouped by domain to keep messages consistent and logs searchable.
- BinderException: base type carrying a message plus read-only options
  (code, hint, and the offending action/parameter/token when known).
- MetadataError / InputError / ConversionError: the three families the
  dispatcher reports. Anything else raised during a dispatch belongs to the
  action body and is never caught.

Two disjoint channels
- Binder faults describe a mistake in the declared metadata or in the user
  input; the dispatcher writes str(fault) to the message sink and reports a
  failed outcome.
- Errors raised by the action itself propagate to the caller untouched.

Rendering
- str(fault) is the bare one-line message written to the sink.
- __rich__ renders a header with the normalized code and a hint line for
  pretty printers.
"""
import re
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text


class FaultCode(IntEnum):
    """
    canonical fault codes used across the binder (stable identifiers).

    grouping (by high-level domain)
    - metadata (21xxx): the declared actions or qualifiers are malformed;
      this is a mistake of the program author, not of the user.
    - routing (22xxx): the sub-command selector did not match any action.
    - input (23xxx): the argument vector does not fit the selected action.
    - conversion (24xxx): a token cannot represent the declared type.
    """
    # --- metadata errors (21xxx) ---
    MISSING_ACTIONS        = 21101
    PARAMETERLESS_ACTION   = 21102
    CONFLICTING_QUALIFIERS = 21111
    MISPLACED_REQUIRED     = 21112
    UNASSIGNABLE_DEFAULT   = 21113
    DUPLICATED_NAME        = 21114
    VARIADIC_PARAMETER     = 21115
    UNSUPPORTED_TYPE       = 21121
    UNRESOLVED_ANNOTATION  = 21122

    # --- routing errors (22xxx) ---
    UNKNOWN_ACTION         = 22101

    # --- input errors (23xxx) ---
    MISSING_REQUIRED       = 23101
    MALFORMED_TOKEN        = 23111
    DUPLICATED_FLAG        = 23112
    UNKNOWN_FLAG           = 23113

    # --- conversion errors (24xxx) ---
    UNCONVERTIBLE_VALUE    = 24101
    VALUE_OUT_OF_RANGE     = 24102

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class BinderException(Exception):
    """
    base class for every fault the dispatcher reports instead of invoking.

    attributes
    - message: the one-line text written to the message sink.
    - options: read-only mapping of context (hint, action, parameter, token...).
    - code: the FaultCode of the concrete subclass.
    """
    code = None

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("%s message must be a string" % type(self).__name__)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        styles = defaultdict(str, {
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(__import__("__main__"), "__styles__", {}))

        title = re.sub(r"(?<!^)(?=[A-Z])", " ", type(self).__name__).lower()
        header = Text.assemble(
            "[ ",
            (self.code.normalize() if self.code is not None else "-", styles["code"]),
            " | ",
            (title, styles["error-title"]),
            " ]"
        )
        renders = [header, Text(self.message, styles["error-message"])]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble((" → ", styles["hint-arrow"]), (hint, styles["hint"])))
        return Group(*renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MetadataError(BinderException):
    """the declared actions or their qualifiers are malformed."""


class MissingActionsError(MetadataError):
    code = FaultCode.MISSING_ACTIONS


class ParameterlessActionError(MetadataError):
    code = FaultCode.PARAMETERLESS_ACTION


class ConflictingQualifiersError(MetadataError):
    code = FaultCode.CONFLICTING_QUALIFIERS


class MisplacedRequiredError(MetadataError):
    code = FaultCode.MISPLACED_REQUIRED


class UnassignableDefaultError(MetadataError):
    code = FaultCode.UNASSIGNABLE_DEFAULT


class DuplicatedNameError(MetadataError):
    code = FaultCode.DUPLICATED_NAME


class VariadicParameterError(MetadataError):
    code = FaultCode.VARIADIC_PARAMETER


class UnsupportedTypeError(MetadataError):
    code = FaultCode.UNSUPPORTED_TYPE


class UnresolvedAnnotationError(MetadataError):
    code = FaultCode.UNRESOLVED_ANNOTATION


class InputError(BinderException):
    """the argument vector does not fit the selected action."""


class UnknownActionError(InputError):
    code = FaultCode.UNKNOWN_ACTION


class MissingRequiredError(InputError):
    code = FaultCode.MISSING_REQUIRED


class MalformedTokenError(InputError):
    code = FaultCode.MALFORMED_TOKEN


class DuplicatedFlagError(InputError):
    code = FaultCode.DUPLICATED_FLAG


class UnknownFlagError(InputError):
    code = FaultCode.UNKNOWN_FLAG


class ConversionError(InputError):
    """a token cannot represent the declared parameter type."""


class UnconvertibleValueError(ConversionError):
    code = FaultCode.UNCONVERTIBLE_VALUE


class ValueOutOfRangeError(ConversionError):
    code = FaultCode.VALUE_OUT_OF_RANGE


__all__ = (
    "FaultCode",
    "BinderException",
    "MetadataError",
    "MissingActionsError",
    "ParameterlessActionError",
    "ConflictingQualifiersError",
    "MisplacedRequiredError",
    "UnassignableDefaultError",
    "DuplicatedNameError",
    "VariadicParameterError",
    "UnsupportedTypeError",
    "UnresolvedAnnotationError",
    "InputError",
    "UnknownActionError",
    "MissingRequiredError",
    "MalformedTokenError",
    "DuplicatedFlagError",
    "UnknownFlagError",
    "ConversionError",
    "UnconvertibleValueError",
    "ValueOutOfRangeError",
)
