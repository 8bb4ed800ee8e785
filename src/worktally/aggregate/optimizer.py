"""Dashboard aggregates from the display-name keyed count source.

Source shape:

    {"persons": {person: {year: {month: {folder: {"YYYY-MM-DD": count}}}}}}

Every call rebuilds the whole tree from the source; nothing is cached.
"""
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from ..utils.period import make_period, select_recent_periods

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 50
DEFAULT_PERIOD_RANGE = 12


@dataclass
class Overall:
    total_items: int = 0
    folder_totals: Dict[str, int] = field(default_factory=dict)
    person_totals: Dict[str, int] = field(default_factory=dict)


@dataclass
class AggregateTree:
    """Aggregates by month, person, folder and overall"""
    by_month: Dict[str, Dict[str, int]] = field(default_factory=dict)             # month -> folder -> n
    by_person: Dict[str, Dict[str, Dict[str, int]]] = field(default_factory=dict)  # person -> month -> folder -> n
    by_folder: Dict[str, Dict[str, int]] = field(default_factory=dict)            # folder -> month -> n
    overall: Overall = field(default_factory=Overall)
    periods: List[str] = field(default_factory=list)
    max_items: int = DEFAULT_MAX_ITEMS  # display hint, not applied here
    period_range: int = DEFAULT_PERIOD_RANGE

    def to_dict(self) -> dict:
        return {
            'by_month': self.by_month,
            'by_person': self.by_person,
            'by_folder': self.by_folder,
            'overall': {
                'total_items': self.overall.total_items,
                'folder_totals': self.overall.folder_totals,
                'person_totals': self.overall.person_totals,
            },
            'periods': self.periods,
            'max_items': self.max_items,
            'period_range': self.period_range,
        }


def _period_key(year: Any, month: Any) -> Optional[str]:
    try:
        return make_period(year, month)
    except (TypeError, ValueError):
        return None


def extract_periods(source: Mapping, period_range: int = DEFAULT_PERIOD_RANGE) -> List[str]:
    """Most recent `period_range` periods present in the source, newest first."""
    periods: Set[str] = set()
    for person, years in (source.get('persons') or {}).items():
        if not isinstance(years, Mapping):
            continue
        for year, months in years.items():
            if not isinstance(months, Mapping):
                continue
            for month in months:
                key = _period_key(year, month)
                if key:
                    periods.add(key)
                else:
                    logger.warning(f"Ignoring bad year/month {year!r}/{month!r} for {person!r}")
    return select_recent_periods(periods, period_range)


def _sum_counts(dates: Mapping) -> float:
    total = 0
    for value in dates.values():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if math.isfinite(value):
            total += value
    return total


def optimize(
    source: Any,
    max_items: Optional[int] = None,
    period_range: Optional[int] = None,
) -> Optional[AggregateTree]:
    """Build dashboard aggregates.

    Args:
        source: Display-name keyed count source (see module docstring)
        max_items: Display hint passed through to the result
        period_range: How many of the most recent periods to keep (default 12)

    Returns:
        AggregateTree, or None when the source has no `persons` mapping
    """
    if not isinstance(source, Mapping) or not isinstance(source.get('persons'), Mapping):
        logger.warning("Invalid aggregation source: expected a mapping with a 'persons' mapping")
        return None

    max_items = max_items or DEFAULT_MAX_ITEMS
    period_range = period_range or DEFAULT_PERIOD_RANGE

    periods = extract_periods(source, period_range)
    in_scope = set(periods)
    tree = AggregateTree(periods=periods, max_items=max_items, period_range=period_range)
    overall = tree.overall

    for person, years in source['persons'].items():
        tree.by_person[person] = {}
        if not isinstance(years, Mapping):
            logger.debug(f"Skipping {person!r}: years is not a mapping")
            continue

        for year, months in years.items():
            if not isinstance(months, Mapping):
                continue
            for month, folders in months.items():
                month_key = _period_key(year, month)
                if month_key not in in_scope:
                    continue
                if not isinstance(folders, Mapping):
                    continue

                by_month = tree.by_month.setdefault(month_key, {})
                person_month = tree.by_person[person].setdefault(month_key, {})

                for folder, dates in folders.items():
                    if not isinstance(dates, Mapping):
                        continue
                    count = _sum_counts(dates)
                    if count <= 0:
                        continue

                    by_month[folder] = by_month.get(folder, 0) + count
                    person_month[folder] = person_month.get(folder, 0) + count
                    folder_months = tree.by_folder.setdefault(folder, {})
                    folder_months[month_key] = folder_months.get(month_key, 0) + count

                    overall.total_items += count
                    overall.folder_totals[folder] = overall.folder_totals.get(folder, 0) + count
                    overall.person_totals[person] = overall.person_totals.get(person, 0) + count

    logger.info(f"Aggregated {overall.total_items} items across {len(periods)} periods")
    return tree
