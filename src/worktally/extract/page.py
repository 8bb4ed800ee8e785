"""Extract one monthly page end to end: records -> buckets -> rollover -> people."""
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from ..workdays import DateResolver
from .grammar import DEFAULT_GRAMMARS, ItemGrammar
from .people import PersonCountSeries, resolve_people
from .records import (
    CountRecord,
    SkippedItem,
    apply_rollover,
    build_daily_buckets,
    extract_records,
)


@dataclass
class PageExtraction:
    """Everything extracted from one page"""
    folder_name: str
    series: PersonCountSeries = field(default_factory=dict)
    records: List[CountRecord] = field(default_factory=list)
    skipped: List[SkippedItem] = field(default_factory=list)
    unresolved: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def date_range(self) -> Tuple[Optional[str], Optional[str]]:
        dates = sorted(d for person in self.series.values() for d in person)
        if not dates:
            return (None, None)
        return (dates[0], dates[-1])

    @property
    def total(self) -> int:
        return sum(c for person in self.series.values() for c in person.values())

    def to_handoff(self) -> List[dict]:
        """(person_name, date_string, count) rows for the transport layer."""
        return [
            {'person_name': person, 'date_string': date_key, 'count': count}
            for person in sorted(self.series)
            for date_key, count in sorted(self.series[person].items())
        ]

    def to_dict(self) -> dict:
        start, end = self.date_range
        return {
            'folder_name': self.folder_name,
            'data': self.series,
            'metadata': {
                'records': len(self.records),
                'skipped_items': len(self.skipped),
                'persons': len(self.series),
                'total': self.total,
                'date_range': {'start': start, 'end': end},
                'unresolved': [{'initials': t, 'date': d} for t, d in self.unresolved],
            },
        }


def extract_page(
    item_texts: Iterable[str],
    resolver: DateResolver,
    initials_map: Mapping[str, str],
    folder_name: str = '',
    grammars: Sequence[ItemGrammar] = DEFAULT_GRAMMARS,
) -> PageExtraction:
    """Run the full extraction for one page of item titles."""
    extraction = extract_records(item_texts, resolver, grammars)
    buckets = apply_rollover(build_daily_buckets(extraction.records), resolver)
    series, unresolved = resolve_people(buckets, initials_map)

    return PageExtraction(
        folder_name=folder_name,
        series=series,
        records=extraction.records,
        skipped=extraction.skipped,
        unresolved=unresolved,
    )
