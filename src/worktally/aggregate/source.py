"""Reshape extracted person series into the aggregation source."""
import copy
import logging
import math
import re
from typing import Any, Dict, Mapping, Optional, Tuple

from ..utils.period import month_number

logger = logging.getLogger(__name__)

ISO_DATE_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})$')
# a word followed by a year; the word must be a month name
FOLDER_MONTH_RE = re.compile(r'\b([A-Za-z]+)\s+(\d{4})\b')


def empty_source() -> Dict[str, Any]:
    return {'persons': {}, 'folders': {}}


def folder_month(folder: str) -> Optional[Tuple[int, int]]:
    """
    (year, month) named in a folder label.

    Example: folder_month("Police - Mar 2025") -> (2025, 3)
    """
    for match in FOLDER_MONTH_RE.finditer(folder or ''):
        month = month_number(match.group(1))
        if month:
            return int(match.group(2)), month
    return None


def merge_series(
    source: Optional[Mapping],
    folder: str,
    series: Mapping[str, Mapping[str, int]],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Place a person count series under `folder` in a copy of the source.

    The year/month bucket comes from, in order: a "Mon YYYY" in the folder
    label, the explicit year/month, the date itself. A date already present
    under the same folder is overwritten, so re-scanning a page replaces its
    counts rather than doubling them.

    Raises:
        ValueError: folder is empty
    """
    if not folder or not folder.strip():
        raise ValueError("Folder name is required")

    merged = copy.deepcopy(dict(source)) if source else empty_source()
    persons = merged.setdefault('persons', {})
    override = folder_month(folder)
    if override is None and year is not None and month is not None:
        override = (year, month)

    for person, dates in series.items():
        for date_key, count in dates.items():
            match = ISO_DATE_RE.match(date_key)
            if not match:
                logger.warning(f"Skipping {person!r}: bad date key {date_key!r}")
                continue
            bucket_year, bucket_month = override or (int(match.group(1)), int(match.group(2)))
            folders = (
                persons.setdefault(person, {})
                .setdefault(str(bucket_year), {})
                .setdefault(str(bucket_month), {})
            )
            folders.setdefault(folder, {})[date_key] = _clean_count(count)

    merged.setdefault('folders', {}).setdefault(folder, {})
    return merged


def _clean_count(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return 0
    return value
