from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_SHIFT_START
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date(value: Optional[str], field_name: str) -> date:
    text = require_non_empty(value, field_name)
    try:
        return parse_iso_date(text)
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def parse_shift_start(value: Optional[str]) -> tuple[int, int]:
    """Split an ``HH:MM`` shift start into (hours, minutes); unset means 09:00."""
    text = (value or "").strip() or DEFAULT_SHIFT_START
    parts = text.split(":")
    try:
        hours = int(parts[0])
        minutes = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    except ValueError:
        raise ValidationError(f"Invalid shift start time: {value!r}")
    return hours, minutes
