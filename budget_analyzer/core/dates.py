# budget_analyzer/core/dates.py
"""Resolve statement date strings to ISO ``YYYY-MM-DD`` dates.

Bank exports mix regional conventions, so patterns are tried in a fixed
order and the first one that yields a real calendar date wins:

1. ``D/M/YYYY``, ``D-M-YYYY`` or ``D.M.YYYY`` (day first)
2. ``YYYY-M-D`` (ISO)
3. ``A/B/YYYY`` or ``A-B-YYYY`` disambiguated by which group exceeds 12
4. ``D/M/YY`` or ``D-M-YY`` with a pivot at 50 for the century
5. whatever pandas can make of it

Anything else resolves to ``None``; callers decide what to do with the row.
"""

from __future__ import annotations

import logging
import re
import warnings
from datetime import date, datetime
from typing import Callable, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2100

_DAY_FIRST_RX = re.compile(r"^(\d{1,2})([/.-])(\d{1,2})\2(\d{4})$")
_ISO_RX = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$")
_AMBIGUOUS_RX = re.compile(r"^(\d{1,2})([/-])(\d{1,2})\2(\d{4})$")
_SHORT_YEAR_RX = re.compile(r"^(\d{1,2})([/-])(\d{1,2})\2(\d{2})$")
# "2024-01-05T00:00:00", "2024-01-05 13:45" and similar exports
_TIME_SUFFIX_RX = re.compile(r"^(\d{4}-\d{1,2}-\d{1,2})[T ]\d{1,2}:\d{2}(:\d{2}(\.\d+)?)?Z?$")

Components = Tuple[int, int, int]  # (year, month, day)


def _day_first(m: re.Match) -> Components:
    return int(m.group(4)), int(m.group(3)), int(m.group(1))


def _iso(m: re.Match) -> Components:
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def _ambiguous(m: re.Match) -> Components:
    first, second, year = int(m.group(1)), int(m.group(3)), int(m.group(4))
    if first > 12:
        return year, second, first
    if second > 12:
        return year, first, second
    # both could be a month; stay day-first
    return year, second, first


def _short_year(m: re.Match) -> Components:
    yy = int(m.group(4))
    year = 2000 + yy if yy < 50 else 1900 + yy
    return year, int(m.group(3)), int(m.group(1))


_PATTERNS: Tuple[Tuple[str, re.Pattern, Callable[[re.Match], Components]], ...] = (
    ("day-first", _DAY_FIRST_RX, _day_first),
    ("iso", _ISO_RX, _iso),
    ("ambiguous", _AMBIGUOUS_RX, _ambiguous),
    ("short-year", _SHORT_YEAR_RX, _short_year),
)


def _to_calendar_date(year: int, month: int, day: int) -> Optional[date]:
    if not (1 <= day <= 31 and 1 <= month <= 12 and MIN_YEAR <= year <= MAX_YEAR):
        return None
    try:
        parsed = date(year, month, day)
    except ValueError:
        return None
    # date() raises rather than rolling over, but keep the round trip explicit
    if (parsed.year, parsed.month, parsed.day) != (year, month, day):
        return None
    return parsed


def _fallback(text: str) -> Optional[date]:
    with warnings.catch_warnings():
        # pandas warns when it has to guess the format element by element
        warnings.simplefilter("ignore")
        try:
            ts = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None
    if ts is None or pd.isna(ts):
        return None
    return _to_calendar_date(ts.year, ts.month, ts.day)


def parse_date(raw) -> Optional[str]:
    """Return ``raw`` as a ``YYYY-MM-DD`` string, or ``None`` if it is not a date."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        raw = raw.date()
    if isinstance(raw, date):
        valid = _to_calendar_date(raw.year, raw.month, raw.day)
        return valid.isoformat() if valid else None

    text = str(raw).strip()
    if not text:
        return None

    stamped = _TIME_SUFFIX_RX.match(text)
    if stamped:
        text = stamped.group(1)

    for name, rx, extract in _PATTERNS:
        m = rx.match(text)
        if not m:
            continue
        parsed = _to_calendar_date(*extract(m))
        if parsed is not None:
            return parsed.isoformat()
        logger.debug("Date %r matched %s pattern but is not a real date", text, name)

    parsed = _fallback(text)
    if parsed is None:
        logger.debug("Could not parse date %r", raw)
        return None
    return parsed.isoformat()
