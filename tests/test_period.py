"""Test period key utilities."""
import pytest
from datetime import date

from worktally.utils.period import (
    make_period,
    month_number,
    period_label,
    period_of,
    select_recent_periods,
    sort_periods,
    split_period,
)


class TestMakePeriod:
    """Period keys are always zero-padded."""

    def test_zero_pads_month(self):
        assert make_period(2024, 2) == "2024-02"
        assert make_period("2024", "2") == "2024-02"
        assert make_period(2024, 12) == "2024-12"

    def test_string_keys_with_whitespace(self):
        assert make_period(" 2025 ", "03 ") == "2025-03"

    def test_rejects_bad_month(self):
        with pytest.raises(ValueError):
            make_period(2024, 13)
        with pytest.raises(ValueError):
            make_period(2024, 0)

    def test_rejects_non_numeric(self):
        with pytest.raises(ValueError):
            make_period("twenty", 1)
        with pytest.raises(ValueError):
            make_period(2024, "March")

    def test_period_of_date(self):
        assert period_of(date(2025, 1, 6)) == "2025-01"


class TestPeriodOrdering:

    def test_sort_descending_by_default(self):
        assert sort_periods(["2024-02", "2025-01", "2024-11"]) == ["2025-01", "2024-11", "2024-02"]

    def test_sort_ascending(self):
        assert sort_periods(["2024-11", "2024-02"], descending=False) == ["2024-02", "2024-11"]

    def test_sort_drops_invalid_and_duplicates(self):
        assert sort_periods(["2024-2", "2024-02", "2024-02", "junk", ""]) == ["2024-02"]

    def test_select_recent(self):
        periods = ["2024-01", "2024-02", "2024-03"]
        assert select_recent_periods(periods, 2) == ["2024-03", "2024-02"]
        assert select_recent_periods(periods, 10) == ["2024-03", "2024-02", "2024-01"]
        assert select_recent_periods(periods, 0) == []


class TestMonthNames:

    def test_month_number(self):
        assert month_number("March") == 3
        assert month_number("sept") == 9
        assert month_number(" DEC ") == 12
        assert month_number("Smarch") is None
        assert month_number("") is None

    def test_label_round_trip(self):
        assert period_label("2025-03") == "Mar 2025"
        assert split_period("2025-03") == (2025, 3)

    def test_split_rejects_unpadded(self):
        with pytest.raises(ValueError):
            split_period("2025-3")
