"""Date parsing, holiday calendars and working-day rollover"""
from .calendar import (
    HolidayCalendar,
    StaticHolidayCalendar,
    default_calendar,
    load_calendar,
)
from .resolver import DateResolver, parse_date
