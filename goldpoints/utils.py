"""Shared parsing helpers."""

import re
from datetime import date
from decimal import Decimal, InvalidOperation

_DAY_FIRST = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_LIKE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


def normalize_date(value: str | None) -> date | None:
    """
    Parse a free-form purchase date into a calendar date.

    Recognized shapes:
        D/M/YYYY  (day first, 1-2 digit day and month)  "5/3/2024", "05/03/2024"
        YYYY-M-D                                         "2024-3-5", "2024-03-05"

    Anything else, including impossible dates such as "31/02/2024",
    returns None. Never raises.
    """
    if not value:
        return None
    text = str(value).strip()

    match = _DAY_FIRST.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
    else:
        match = _ISO_LIKE.match(text)
        if not match:
            return None
        year, month, day = (int(part) for part in match.groups())

    try:
        return date(year, month, day)
    except ValueError:
        return None


def to_decimal(value) -> Decimal | None:
    """Coerce int/str/float/Decimal to a finite Decimal, or None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(str(value).strip()) if isinstance(value, str) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def normalize_code(value) -> str:
    """Customer code as stored: text with surrounding whitespace removed."""
    if value is None:
        return ""
    return str(value).strip()
