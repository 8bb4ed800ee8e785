"""Aggregation of per-person counts into dashboard views"""
from .optimizer import AggregateTree, Overall, optimize, extract_periods
from .source import merge_series, empty_source, folder_month
from .frames import aggregates_to_frame, folder_month_matrix, top_folders
