"""Utility functions"""
from .period import (
    MONTHS,
    MONTH_NAMES_SHORT,
    make_period,
    month_number,
    period_of,
    period_label,
    select_recent_periods,
    sort_periods,
    split_period,
)
from .text import collapse_whitespace, clean_folder_name, contains_token
