"""Map initials tokens to canonical person names."""
import logging
from typing import Dict, List, Mapping, Optional, Tuple

from .records import DailyBuckets

logger = logging.getLogger(__name__)

# person -> ISO date -> count
PersonCountSeries = Dict[str, Dict[str, int]]


class InitialsResolver:
    """
    Resolve name-list tokens to people.

    A token resolves when it is one of the configured initials, or when it
    spells out a configured full name (case-insensitive), so "JS" and
    "JOHN SMITH" both map to John Smith.
    """

    def __init__(self, initials_map: Mapping[str, str]):
        self.initials_map = {k.strip().upper(): v for k, v in initials_map.items()}
        self._by_full_name = {v.strip().upper(): v for v in self.initials_map.values()}

    def resolve(self, token: str) -> Optional[str]:
        key = (token or '').strip().upper()
        return self.initials_map.get(key) or self._by_full_name.get(key)


def resolve_people(
    buckets: DailyBuckets,
    initials_map: Mapping[str, str],
) -> Tuple[PersonCountSeries, List[Tuple[str, str]]]:
    """Convert daily buckets into a person count series.

    Returns:
        Tuple of (series, unresolved (token, ISO date) pairs). Unresolved
        tokens are dropped from the series and logged.
    """
    resolver = InitialsResolver(initials_map)
    series: PersonCountSeries = {}
    unresolved: List[Tuple[str, str]] = []

    for day in sorted(buckets):
        date_key = day.isoformat()
        for token, count in buckets[day].items():
            if count <= 0:
                continue
            person = resolver.resolve(token)
            if not person:
                unresolved.append((token, date_key))
                logger.warning(f"Unknown initials {token!r} on {date_key} ({count} items dropped)")
                continue
            dates = series.setdefault(person, {})
            dates[date_key] = dates.get(date_key, 0) + count

    return series, unresolved
