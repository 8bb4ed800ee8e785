"""Holiday calendars for business-day calculations.

A calendar answers two questions: is a date a public holiday, and does the
calendar know about a given year at all. Years it does not cover are treated
as having no holidays.
"""
import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Protocol, Union

logger = logging.getLogger(__name__)

ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# NSW public holidays (incl. Easter weekend days), kept as the default calendar
NSW_PUBLIC_HOLIDAYS: Dict[str, List[str]] = {
    '2024': ['2024-01-01', '2024-01-26', '2024-03-29', '2024-03-30', '2024-03-31', '2024-04-01',
             '2024-04-25', '2024-06-10', '2024-10-07', '2024-12-25', '2024-12-26'],
    '2025': ['2025-01-01', '2025-01-27', '2025-04-18', '2025-04-19', '2025-04-20', '2025-04-21',
             '2025-04-25', '2025-06-09', '2025-10-06', '2025-12-25', '2025-12-26'],
    '2026': ['2026-01-01', '2026-01-26', '2026-04-03', '2026-04-04', '2026-04-05', '2026-04-06',
             '2026-04-25', '2026-06-08', '2026-10-05', '2026-12-25', '2026-12-26', '2026-12-28'],
    '2027': ['2027-01-01', '2027-01-26', '2027-03-26', '2027-03-27', '2027-03-28', '2027-03-29',
             '2027-04-25', '2027-04-26', '2027-06-14', '2027-10-04', '2027-12-25', '2027-12-26',
             '2027-12-27', '2027-12-28'],
    '2028': ['2028-01-01', '2028-01-03', '2028-01-26', '2028-04-14', '2028-04-15', '2028-04-16',
             '2028-04-17', '2028-04-25', '2028-06-12', '2028-10-02', '2028-12-25', '2028-12-26'],
    '2029': ['2029-01-01', '2029-01-26', '2029-03-30', '2029-03-31', '2029-04-01', '2029-04-02',
             '2029-04-25', '2029-06-11', '2029-10-01', '2029-12-25', '2029-12-26'],
    '2030': ['2030-01-01', '2030-01-26', '2030-01-28', '2030-04-19', '2030-04-20', '2030-04-21',
             '2030-04-22', '2030-04-25', '2030-06-10', '2030-10-07', '2030-12-25', '2030-12-26'],
}


class HolidayCalendar(Protocol):
    """Anything that can tell holidays apart from ordinary days."""

    def is_holiday(self, day: date) -> bool:
        ...

    def covers(self, year: int) -> bool:
        ...


class StaticHolidayCalendar:
    """Holiday calendar backed by a fixed set of YYYY-MM-DD strings."""

    def __init__(self, dates: Iterable[str] = ()):
        parsed = set()
        for value in dates:
            value = str(value).strip()
            if not ISO_DATE_RE.match(value):
                raise ValueError(f"Holiday must be YYYY-MM-DD, got {value!r}")
            parsed.add(date.fromisoformat(value))
        self._dates: FrozenSet[date] = frozenset(parsed)
        self._years = frozenset(d.year for d in parsed)

    def is_holiday(self, day: date) -> bool:
        return day in self._dates

    def covers(self, year: int) -> bool:
        return year in self._years

    @property
    def years(self) -> List[int]:
        return sorted(self._years)

    def __len__(self) -> int:
        return len(self._dates)

    def __repr__(self) -> str:
        return f"StaticHolidayCalendar({len(self._dates)} dates, years={self.years})"


def default_calendar() -> StaticHolidayCalendar:
    """NSW public holidays 2024-2030."""
    return StaticHolidayCalendar(d for dates in NSW_PUBLIC_HOLIDAYS.values() for d in dates)


def load_calendar(path: Union[str, Path]) -> StaticHolidayCalendar:
    """
    Load a holiday calendar from JSON.

    Accepts either a flat list of dates or a mapping of year -> list of dates:

        ["2025-01-01", "2025-01-27"]
        {"2025": ["2025-01-01", "2025-01-27"]}

    Raises:
        ValueError: file content is not one of the accepted shapes
    """
    with open(path, encoding='utf-8') as fh:
        data = json.load(fh)

    if isinstance(data, dict):
        dates = []
        for year, values in data.items():
            if not isinstance(values, list):
                raise ValueError(f"Holiday list for {year} must be a JSON array")
            dates.extend(values)
    elif isinstance(data, list):
        dates = data
    else:
        raise ValueError(f"Unsupported holiday file format in {path}")

    calendar = StaticHolidayCalendar(dates)
    logger.info(f"Loaded {len(calendar)} holidays from {path}")
    return calendar
