"""Value formatting for report cells: character clamping, tax ids, dates."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from .engine.text_fitter import ELLIPSIS, EMPTY_PLACEHOLDER

_TAX_ID_CHARS = re.compile(r"[^0-9K]")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")

DATE_FORMAT = "%d-%m-%Y"
TIME_FORMAT = "%H:%M:%S"


def clamp_text(text: Optional[str], max_chars: int) -> str:
    """Cut ``text`` to ``max_chars`` characters, the last being an ellipsis."""
    value = "" if text is None else str(text)
    if max_chars < 1:
        raise ValueError("max_chars must be at least 1")
    if len(value) <= max_chars:
        return value
    return value[: max_chars - 1] + ELLIPSIS


def normalize_tax_id(value: Optional[str]) -> str:
    """Keep only digits and the K check digit, upper-cased."""
    return _TAX_ID_CHARS.sub("", str(value or "").upper())


def format_tax_id(value: Optional[str]) -> str:
    """
    Format a Chilean RUT as ``12.345.678-5``.

    Blank input renders as ``-``; a single character is returned as-is.
    """
    clean = normalize_tax_id(value)
    if not clean:
        return EMPTY_PLACEHOLDER
    if len(clean) == 1:
        return clean
    body, check_digit = clean[:-1], clean[-1]
    return f"{_THOUSANDS.sub('.', body)}-{check_digit}"


def tax_id_check_digit(body: str) -> str:
    """Modulo 11 check digit for the numeric body of a RUT."""
    total = 0
    multiplier = 2
    for digit in reversed(body):
        total += int(digit) * multiplier
        multiplier = 2 if multiplier == 7 else multiplier + 1
    remainder = 11 - (total % 11)
    if remainder == 11:
        return "0"
    if remainder == 10:
        return "K"
    return str(remainder)


def is_valid_tax_id(value: Optional[str]) -> bool:
    clean = normalize_tax_id(value)
    if len(clean) < 2 or not clean[:-1].isdigit():
        return False
    return tax_id_check_digit(clean[:-1]) == clean[-1]


def localize(value: datetime, timezone: Optional[str] = None) -> datetime:
    """Convert aware datetimes to ``timezone``; naive ones are taken as local already."""
    if timezone and value.tzinfo is not None:
        return value.astimezone(ZoneInfo(timezone))
    return value


def format_date_parts(value: Optional[datetime], timezone: Optional[str] = None) -> Tuple[str, str]:
    """Split a timestamp into ``("dd-mm-YYYY", "HH:MM:SS")``; dashes for None."""
    if value is None:
        return EMPTY_PLACEHOLDER, EMPTY_PLACEHOLDER
    local = localize(value, timezone)
    return local.strftime(DATE_FORMAT), local.strftime(TIME_FORMAT)


def format_datetime(value: Optional[datetime], timezone: Optional[str] = None) -> str:
    """Full ``dd-mm-YYYY, HH:MM:SS`` timestamp, or ``-``."""
    if value is None:
        return EMPTY_PLACEHOLDER
    date_part, time_part = format_date_parts(value, timezone)
    return f"{date_part}, {time_part}"


def or_placeholder(value: Optional[str]) -> str:
    text = "" if value is None else str(value).strip()
    return text or EMPTY_PLACEHOLDER
