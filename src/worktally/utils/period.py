"""Period utilities - YYYY-MM keys and month name lookups"""
import re
from datetime import date
from typing import Iterable, List, Optional, Tuple, Union

# Month name mappings
MONTHS = {
    'january': 1, 'jan': 1,
    'february': 2, 'feb': 2,
    'march': 3, 'mar': 3,
    'april': 4, 'apr': 4,
    'may': 5,
    'june': 6, 'jun': 6,
    'july': 7, 'jul': 7,
    'august': 8, 'aug': 8,
    'september': 9, 'sep': 9, 'sept': 9,
    'october': 10, 'oct': 10,
    'november': 11, 'nov': 11,
    'december': 12, 'dec': 12,
}

MONTH_NAMES_SHORT = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
                     'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

# Build regex for month names
MONTH_PATTERN = '|'.join(sorted(MONTHS.keys(), key=len, reverse=True))

PERIOD_RE = re.compile(r'^(\d{4})-(\d{2})$')


def month_number(name: str) -> Optional[int]:
    """Look up a month by full or abbreviated name (case-insensitive)."""
    if not name:
        return None
    return MONTHS.get(name.strip().lower())


def make_period(year: Union[int, str], month: Union[int, str]) -> str:
    """
    Build a zero-padded YYYY-MM period key.

    Period keys are compared as plain strings, which is only chronological
    when every key is zero-padded, so all keys go through here.

    Raises:
        ValueError: year/month not integers, or month outside 1..12
    """
    year_num = int(str(year).strip())
    month_num = int(str(month).strip())
    if not 1 <= month_num <= 12:
        raise ValueError(f"Month out of range: {month!r}")
    if not 0 < year_num <= 9999:
        raise ValueError(f"Year out of range: {year!r}")
    return f"{year_num:04d}-{month_num:02d}"


def period_of(day: date) -> str:
    """Period key for a calendar date."""
    return make_period(day.year, day.month)


def split_period(period: str) -> Tuple[int, int]:
    """Split 'YYYY-MM' into (year, month)."""
    match = PERIOD_RE.match(period or '')
    if not match:
        raise ValueError(f"Not a YYYY-MM period: {period!r}")
    return int(match.group(1)), int(match.group(2))


def sort_periods(periods: Iterable[str], descending: bool = True) -> List[str]:
    """Sort periods chronologically, dropping anything that is not YYYY-MM."""
    valid = {p for p in periods if PERIOD_RE.match(p or '')}
    return sorted(valid, reverse=descending)


def select_recent_periods(periods: Iterable[str], limit: int) -> List[str]:
    """Keep the `limit` most recent periods, newest first."""
    return sort_periods(periods, descending=True)[:max(limit, 0)]


def period_label(period: str) -> str:
    """
    Short label for a period.

    Example: period_label("2025-03") -> "Mar 2025"
    """
    year, month = split_period(period)
    return f"{MONTH_NAMES_SHORT[month - 1]} {year}"
