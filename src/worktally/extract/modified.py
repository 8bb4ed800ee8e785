"""Modified-by pages: one item per document, credited to whoever last modified it.

Each list entry carries a "Modified on 6 Jan 2025 by John Smith" tooltip and
the document title. An entry counts as one item, except in FORM 5633 folders
where a trailing " - N" on the title gives the count.

Names are full names already, so no initials lookup happens, and dates are
kept as written (no working-day rollover).
"""
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..utils.period import month_number
from .page import PageExtraction
from .records import CountRecord, SkippedItem

logger = logging.getLogger(__name__)

MODIFIED_BY_RE = re.compile(r'\bModified on (\d{1,2}) ([A-Za-z]{3}) (\d{4}) by ([A-Za-z]+) ([A-Za-z]+)\b')
TRAILING_COUNT_RE = re.compile(r'\s-\s(\d+)$')
TRAILING_COUNT_FOLDER = 'FORM 5633'


@dataclass(frozen=True)
class ModifiedItem:
    """A list entry on a modified-by page"""
    modified: str   # tooltip text
    title: str      # document title


def uses_trailing_count(folder_name: str) -> bool:
    return TRAILING_COUNT_FOLDER in (folder_name or '').upper()


def parse_modified_date(day: str, month_name: str, year: str) -> Optional[date]:
    month = month_number(month_name)
    if not month or not 1900 <= int(year) <= 2100:
        return None
    try:
        return date(int(year), month, int(day))
    except ValueError:
        return None


def trailing_count(title: str) -> Optional[int]:
    match = TRAILING_COUNT_RE.search((title or '').rstrip())
    if not match:
        return None
    count = int(match.group(1))
    return count if count > 0 else None


def extract_modified_page(items: Iterable[ModifiedItem], folder_name: str = '') -> PageExtraction:
    """Count items per person and modification date."""
    page = PageExtraction(folder_name=folder_name)
    by_count = uses_trailing_count(folder_name)

    for index, item in enumerate(items):
        match = MODIFIED_BY_RE.search(item.modified or '')
        if not match:
            page.skipped.append(SkippedItem(index=index, text=item.modified, reason='no modified-by text'))
            logger.debug(f"Item #{index + 1} skipped: no modified-by text in {item.modified!r}")
            continue

        day = parse_modified_date(match.group(1), match.group(2), match.group(3))
        if day is None:
            page.skipped.append(SkippedItem(index=index, text=item.modified, reason='invalid date'))
            logger.warning(f"Item #{index + 1} skipped: invalid date in {item.modified!r}")
            continue

        person = f"{match.group(4)} {match.group(5)}"
        count = (trailing_count(item.title) or 1) if by_count else 1
        page.records.append(CountRecord(date=day, initials=person, count=count))

        dates = page.series.setdefault(person, {})
        dates[day.isoformat()] = dates.get(day.isoformat(), 0) + count

    logger.info(
        f"{folder_name or 'page'}: {len(page.records)} modified-by items "
        f"({len(page.skipped)} skipped, trailing counts {'on' if by_count else 'off'})"
    )
    return page
