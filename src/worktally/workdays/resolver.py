"""Date parsing and business-day rollover.

Dates are plain `datetime.date` values, so weekday checks never depend on
the local timezone.
"""
import logging
import re
from datetime import date, timedelta
from typing import Optional, Set

from .calendar import HolidayCalendar, default_calendar

logger = logging.getLogger(__name__)

# Saturday, Sunday (date.weekday() numbering)
WEEKEND_DAYS = frozenset({5, 6})

# A real calendar never needs this many consecutive skips
MAX_SKIP_DAYS = 366


def parse_date(raw: str) -> Optional[date]:
    """
    Parse a day/month/year string.

    Handles:
    - 05/01/25, 5/1/2025
    - whitespace anywhere ("05 / 01 / 25")
    - 2-digit years are 20YY

    Returns None when the string does not have exactly three numeric parts
    or names an impossible date.
    """
    if not raw or not isinstance(raw, str):
        return None

    parts = re.sub(r'\s+', '', raw).split('/')
    if len(parts) != 3:
        return None
    if not all(p.isdigit() for p in parts):
        return None

    day_str, month_str, year_str = parts
    if len(year_str) == 2:
        year_str = '20' + year_str
    elif len(year_str) != 4:
        return None

    try:
        return date(int(year_str), int(month_str), int(day_str))
    except ValueError:
        return None


class DateResolver:
    """Parses dates and shifts them onto working days."""

    def __init__(self, calendar: Optional[HolidayCalendar] = None):
        self.calendar = calendar if calendar is not None else default_calendar()
        self._warned_years: Set[int] = set()

    def parse(self, raw: str) -> Optional[date]:
        return parse_date(raw)

    def is_non_working_day(self, day: date) -> bool:
        """Weekend or configured holiday."""
        if day.weekday() in WEEKEND_DAYS:
            return True
        if not self.calendar.covers(day.year) and day.year not in self._warned_years:
            self._warned_years.add(day.year)
            logger.debug(f"No holidays configured for {day.year}; treating all weekdays as working days")
        return self.calendar.is_holiday(day)

    def next_working_day(self, day: date) -> date:
        """First working day strictly after `day`."""
        candidate = day + timedelta(days=1)
        skipped = 0
        while self.is_non_working_day(candidate):
            candidate += timedelta(days=1)
            skipped += 1
            if skipped > MAX_SKIP_DAYS:
                raise RuntimeError(f"No working day within {MAX_SKIP_DAYS} days after {day.isoformat()}")
        return candidate

    def working_day_for(self, day: date) -> date:
        """`day` itself when it is a working day, else the next working day."""
        if self.is_non_working_day(day):
            return self.next_working_day(day)
        return day
