from __future__ import annotations

from datetime import date

from ..core.enums import ClockEventType
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_month


def require_positive_id(value, field_name: str) -> int:
    # Only whole numbers: 1.9, True and "1.0" are rejected rather than coerced.
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is invalid")
    if isinstance(value, int):
        ident = value
    elif isinstance(value, str) and value.strip().isdecimal():
        ident = int(value.strip())
    else:
        raise ValidationError(f"{field_name} is invalid")
    if ident <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return ident


def require_event_type(value) -> ClockEventType:
    if isinstance(value, ClockEventType):
        return value
    try:
        return ClockEventType(str(value).strip())
    except ValueError:
        raise ValidationError(f"unknown clock event type: {value!r}") from None


def require_month(value: str) -> date:
    try:
        return parse_month((value or "").strip())
    except ValueError:
        raise ValidationError("month must be formatted as YYYY-MM") from None


def require_date(value: str) -> date:
    try:
        return parse_iso_date((value or "").strip())
    except ValueError:
        raise ValidationError("date must be formatted as YYYY-MM-DD") from None
