"""Turn item titles into dated count records and daily buckets.

Count attribution: the count on an item applies in full to every person
named on it. "JS, AB - 3" yields 3 for JS and 3 for AB, not 1.5 each.
"""
import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from ..workdays import DateResolver
from .grammar import DEFAULT_GRAMMARS, ItemGrammar, is_message_file, match_item

logger = logging.getLogger(__name__)

# date -> initials -> count
DailyBuckets = Dict[date, Dict[str, int]]


@dataclass(frozen=True)
class CountRecord:
    """One parsed observation: `initials` handled `count` items on `date`"""
    date: date
    initials: str
    count: int

    def to_dict(self) -> dict:
        return {'date': self.date.isoformat(), 'initials': self.initials, 'count': self.count}


@dataclass(frozen=True)
class SkippedItem:
    index: int
    text: str
    reason: str


@dataclass
class ExtractionResult:
    records: List[CountRecord] = field(default_factory=list)
    skipped: List[SkippedItem] = field(default_factory=list)
    matched_items: int = 0


def split_initials(names_text: str) -> List[str]:
    """
    Split a name list on commas and hyphens.

    Example: split_initials("js, ab-cd") -> ["JS", "AB", "CD"]
    """
    return [token.strip().upper() for token in re.split(r'[-,]', names_text or '') if token.strip()]


def extract_records(
    item_texts: Iterable[str],
    resolver: DateResolver,
    grammars: Sequence[ItemGrammar] = DEFAULT_GRAMMARS,
) -> ExtractionResult:
    """Parse item titles into count records.

    Args:
        item_texts: Item titles in page order
        resolver: Date parser
        grammars: Title grammars, tried in order

    Returns:
        ExtractionResult with one record per (date, initials) on every
        matching item, and the items that were skipped with the reason
    """
    result = ExtractionResult()

    def skip(index: int, text: str, reason: str, level: int = logging.INFO) -> None:
        result.skipped.append(SkippedItem(index=index, text=text, reason=reason))
        logger.log(level, f"Item #{index + 1} skipped ({reason}): {text!r}")

    for index, raw in enumerate(item_texts):
        text = (raw or '').strip()
        if not text:
            continue
        if is_message_file(text):
            skip(index, text, 'message file', logging.DEBUG)
            continue

        found = match_item(text, grammars)
        if not found:
            skip(index, text, 'no grammar match', logging.DEBUG)
            continue
        result.matched_items += 1

        day = resolver.parse(found.date_text)
        if day is None:
            skip(index, text, f"unparseable date {found.date_text!r}", logging.WARNING)
            continue

        count = _parse_count(found.count_text)
        if count is None:
            skip(index, text, f"invalid count {found.count_text!r}", logging.WARNING)
            continue

        initials = split_initials(found.names_text)
        if not initials:
            skip(index, text, 'empty name list', logging.WARNING)
            continue

        for token in initials:
            result.records.append(CountRecord(date=day, initials=token, count=count))

    logger.info(
        f"Extracted {len(result.records)} records from {result.matched_items} items "
        f"({len(result.skipped)} skipped)"
    )
    return result


def _parse_count(value: str) -> Optional[int]:
    try:
        count = int(value)
    except (TypeError, ValueError):
        return None
    return count if count > 0 else None


def build_daily_buckets(records: Iterable[CountRecord]) -> DailyBuckets:
    """Sum record counts per date and initials."""
    buckets: DailyBuckets = defaultdict(lambda: defaultdict(int))
    for record in records:
        buckets[record.date][record.initials] += record.count
    return {day: dict(counts) for day, counts in buckets.items()}


def apply_rollover(buckets: DailyBuckets, resolver: DateResolver) -> DailyBuckets:
    """
    Move weekend and holiday buckets onto the next working day.

    The whole bucket is added to whatever the working day already holds;
    the non-working day disappears from the result. Input is not modified.
    """
    rolled: DailyBuckets = {}
    for day in sorted(buckets):
        target = day
        if resolver.is_non_working_day(day):
            target = resolver.next_working_day(day)
            logger.debug(f"Rolling {day.isoformat()} over to {target.isoformat()}")
        merged = rolled.setdefault(target, {})
        for initials, count in buckets[day].items():
            merged[initials] = merged.get(initials, 0) + count
    return rolled
