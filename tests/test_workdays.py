"""Test date parsing, holiday calendars and working-day rollover."""
import json
import logging
from datetime import date, timedelta

import pytest

from worktally.workdays import DateResolver, StaticHolidayCalendar, default_calendar, load_calendar, parse_date


class TestParseDate:

    def test_two_and_four_digit_years_agree(self):
        assert parse_date("05/01/25") == parse_date("05/01/2025") == date(2025, 1, 5)
        assert parse_date("5/1/25") == date(2025, 1, 5)

    def test_whitespace_ignored(self):
        assert parse_date(" 05 / 01 / 25 ") == date(2025, 1, 5)

    def test_day_month_order(self):
        assert parse_date("12/03/2025") == date(2025, 3, 12)

    def test_invalid(self):
        assert parse_date("") is None
        assert parse_date(None) is None
        assert parse_date("05/01") is None
        assert parse_date("05/01/25/1") is None
        assert parse_date("aa/01/25") is None
        assert parse_date("05/01/025") is None
        assert parse_date("31/02/2025") is None
        assert parse_date("05/13/2025") is None


class TestStaticHolidayCalendar:

    def test_lookup(self, calendar):
        assert calendar.is_holiday(date(2025, 1, 1))
        assert not calendar.is_holiday(date(2025, 1, 2))
        assert calendar.covers(2025)
        assert not calendar.covers(2026)
        assert len(calendar) == 2

    def test_rejects_bad_dates(self):
        with pytest.raises(ValueError):
            StaticHolidayCalendar(['1/1/2025'])

    def test_default_calendar_years(self):
        assert default_calendar().years == list(range(2024, 2031))
        assert default_calendar().is_holiday(date(2025, 4, 25))  # Anzac Day

    def test_load_flat_list(self, tmp_path):
        path = tmp_path / 'holidays.json'
        path.write_text(json.dumps(['2026-01-01', '2026-01-26']))
        assert load_calendar(path).years == [2026]

    def test_load_by_year(self, tmp_path):
        path = tmp_path / 'holidays.json'
        path.write_text(json.dumps({'2026': ['2026-01-01'], '2027': ['2027-01-01']}))
        calendar = load_calendar(path)
        assert calendar.years == [2026, 2027]
        assert len(calendar) == 2

    def test_load_rejects_other_shapes(self, tmp_path):
        path = tmp_path / 'holidays.json'
        path.write_text('"2026-01-01"')
        with pytest.raises(ValueError):
            load_calendar(path)


class TestDateResolver:

    def test_weekends(self, resolver):
        assert resolver.is_non_working_day(date(2025, 1, 4))   # Saturday
        assert resolver.is_non_working_day(date(2025, 1, 5))   # Sunday
        assert not resolver.is_non_working_day(date(2025, 1, 6))

    def test_holiday(self, resolver):
        assert resolver.is_non_working_day(date(2025, 1, 1))   # Wednesday, New Year's Day

    def test_next_working_day_skips_weekend(self, resolver):
        assert resolver.next_working_day(date(2025, 1, 3)) == date(2025, 1, 6)   # Fri -> Mon
        assert resolver.next_working_day(date(2025, 1, 4)) == date(2025, 1, 6)

    def test_next_working_day_skips_holiday_after_weekend(self, resolver):
        # Sat 25 Jan -> Sun -> Mon 27 Jan (holiday) -> Tue 28 Jan
        assert resolver.next_working_day(date(2025, 1, 25)) == date(2025, 1, 28)

    def test_next_working_day_is_strictly_after(self, resolver):
        monday = date(2025, 1, 6)
        assert resolver.next_working_day(monday) == date(2025, 1, 7)

    def test_working_day_for_is_idempotent(self, resolver):
        start = date(2024, 12, 20)
        for offset in range(30):
            day = start + timedelta(days=offset)
            working = resolver.working_day_for(day)
            assert not resolver.is_non_working_day(working)
            assert resolver.working_day_for(working) == working
            assert working >= day

    def test_uncovered_year_has_no_holidays(self, resolver, caplog):
        with caplog.at_level(logging.DEBUG, logger='worktally.workdays.resolver'):
            assert not resolver.is_non_working_day(date(2031, 1, 1))   # Wednesday
            resolver.is_non_working_day(date(2031, 1, 2))
        notices = [r for r in caplog.records if '2031' in r.getMessage()]
        assert len(notices) == 1

    def test_runaway_calendar_raises(self):
        class EveryDayHoliday:
            def is_holiday(self, day):
                return True

            def covers(self, year):
                return True

        with pytest.raises(RuntimeError):
            DateResolver(EveryDayHoliday()).next_working_day(date(2025, 1, 1))

    def test_default_calendar_used(self):
        assert DateResolver().is_non_working_day(date(2025, 12, 25))
