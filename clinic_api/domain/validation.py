"""Domain helpers for validating incoming entity fields."""
from __future__ import annotations

from datetime import date
import math
import re
from typing import Any, Iterable, Mapping

from .errors import ValidationError

_NUMBER_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(fields: Mapping[str, Any], names: Iterable[str]) -> dict[str, Any]:
    """
    Return the named values (strings trimmed) or raise ValidationError listing
    every missing or empty field.
    """
    missing = [name for name in names if is_blank(fields.get(name))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", tuple(missing))
    values = {}
    for name in names:
        value = fields[name]
        values[name] = value.strip() if isinstance(value, str) else value
    return values


def require_text(values: dict[str, Any], name: str) -> str:
    value = values[name]
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError(f"{name} must be a string", (name,))
    return str(value)


def parse_calendar_date(value: Any, name: str = "date") -> str:
    """Accept YYYY-MM-DD and return it normalized."""
    text = str(value).strip()
    try:
        if not _DATE_PATTERN.fullmatch(text):
            raise ValueError(text)
        return date.fromisoformat(text).isoformat()
    except ValueError:
        raise ValidationError(f"{name} must be a calendar date (YYYY-MM-DD)", (name,)) from None


def parse_amount(value: Any, name: str = "amount") -> int | float:
    """Accept finite numbers and numeric strings (as posted by HTML forms)."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationError(f"{name} must be numeric", (name,))
    try:
        if isinstance(value, str):
            text = value.strip()
            if not _NUMBER_PATTERN.fullmatch(text):
                raise ValueError(text)
            value = float(text) if "." in text else int(text)
        # huge ints overflow here; inf/nan fail the check
        if not math.isfinite(float(value)):
            raise ValueError(value)
    except (ValueError, OverflowError):
        raise ValidationError(f"{name} must be numeric", (name,)) from None
    return value
