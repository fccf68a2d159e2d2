"""
Event value normalization.

Every accepted input form (int, float, decimal string, Decimal) is turned
into an exact Decimal first and then scaled to micro units, so the same
truncation rules apply regardless of how the caller expressed the value.
"""
from decimal import Decimal, InvalidOperation, localcontext
from typing import Union
import re

from .errors import InvalidField, NotANumber

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# Stored values are integers scaled by 10^6
EVENT_VALUE_DIGITS = 6
EVENT_VALUE_SCALE = 10 ** EVENT_VALUE_DIGITS

EventValue = Union[int, float, str, Decimal, None]

_FIELD = "event_value"

# Plain ASCII decimal text: no whitespace, underscores, or special values
_DECIMAL_TEXT = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def to_decimal(value: EventValue) -> Decimal | None:
    """
    Convert an event value input to an exact Decimal.

    Args:
        value: int, float, decimal string, Decimal, or None

    Returns:
        The exact decimal, or None when the input is None

    Raises:
        NotANumber: If the value is NaN, infinite, or unparseable text
        TypeError: If the value is not one of the accepted types
    """
    if value is None:
        return None

    # bool is an int subclass but never a meaningful amount
    if isinstance(value, bool):
        raise TypeError(f"event value must be a number, not {type(value).__name__}")

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        # repr() gives the shortest text that round-trips, so 100.123456
        # becomes Decimal("100.123456") rather than the binary expansion
        decimal = _parse(repr(value), value)
    elif isinstance(value, str):
        decimal = _parse(value, value)
    elif isinstance(value, Decimal):
        decimal = value
    else:
        raise TypeError(f"event value must be a number, not {type(value).__name__}")

    if not decimal.is_finite():
        raise NotANumber(_FIELD, value, f"Event value {value!r} is not a finite number")
    return decimal


def _parse(text: str, original) -> Decimal:
    if not _DECIMAL_TEXT.fullmatch(text):
        raise NotANumber(_FIELD, original, f"Event value {original!r} is not a number")
    try:
        return Decimal(text)
    except InvalidOperation:
        raise NotANumber(_FIELD, original, f"Event value {original!r} is not a number") from None


def normalize_event_value(value: EventValue) -> int | None:
    """
    Normalize an event value to a fixed-point integer at scale 10^6.

    The range check is applied to the exact decimal before scaling, so
    INT32_MAX and INT32_MIN pass while anything past them fails, however
    small the excess. Digits beyond the sixth decimal place are truncated
    toward zero.

    Args:
        value: int, float, decimal string, Decimal, or None

    Returns:
        The scaled integer, or None when the input is None

    Raises:
        NotANumber: If the value is not a finite number
        InvalidField: If the value is outside the 32-bit integer range
    """
    decimal = to_decimal(value)
    if decimal is None:
        return None

    if decimal > INT32_MAX or decimal < INT32_MIN:
        raise InvalidField(
            _FIELD,
            value,
            f"Event value {value!r} must be between {INT32_MIN} and {INT32_MAX}",
        )

    with localcontext() as ctx:
        # Wide enough that scaling never rounds before truncation
        ctx.prec = max(ctx.prec, len(decimal.as_tuple().digits) + EVENT_VALUE_DIGITS + 1)
        return int(decimal.scaleb(EVENT_VALUE_DIGITS))
