"""Classify monthly sub-folder links inside one folder.

A folder page lists one link per month ("March 2024", "2024 March",
"03/2024", ...). Each link is reduced to a (year, month) pair; links with no
recognizable month are dropped, and only the first link per month is kept.
"""
import logging
import re
from dataclasses import dataclass, asdict
from typing import Iterable, List, Optional, Sequence, Set, Tuple
from urllib.parse import unquote, urlparse

from ..utils.period import MONTH_PATTERN, make_period, month_number
from .links import (
    FOLDER_PATH_FRAGMENTS,
    CandidateFilter,
    NavLink,
    matches_path_fragment,
)

logger = logging.getLogger(__name__)

MIN_YEAR = 2000
MAX_YEAR = 2100

# (regex, year group, month group) - tried in order
MONTH_GRAMMAR = [
    # "March 2024", "5 Mar 2024"
    (re.compile(rf'\b(?:(\d{{1,2}})\s+)?({MONTH_PATTERN})\s+(\d{{4}})\b', re.IGNORECASE), 3, 2),
    # "2024 March"
    (re.compile(rf'\b(\d{{4}})\s+({MONTH_PATTERN})\b', re.IGNORECASE), 1, 2),
    # "03/2024", "3-2024", "03.2024"
    (re.compile(r'(?<!\d)(\d{1,2})[/\-.](\d{4})(?!\d)'), 2, 1),
    # "2024/03", "2024-3", "2024.03"
    (re.compile(r'(?<!\d)(\d{4})[/\-.](\d{1,2})(?!\d)'), 1, 2),
]


@dataclass(frozen=True)
class MonthTarget:
    """A monthly navigation target inside one folder"""
    year: int
    month: int
    url: str

    @property
    def period(self) -> str:
        return make_period(self.year, self.month)

    def to_dict(self) -> dict:
        return asdict(self)


def _to_month(value: str) -> Optional[int]:
    if value.isdigit():
        return int(value)
    return month_number(value)


def parse_month_year(text: str) -> Optional[Tuple[int, int]]:
    """
    Extract (year, month) from a month link label.

    Handles:
    - March 2024, 5 Mar 2024
    - 2024 March
    - 03/2024, 3-2024, 03.2024
    - 2024/03, 2024-3, 2024.03

    Returns None if no form matches with a month in 1..12 and a year in
    2000..2100.
    """
    if not text:
        return None

    for regex, year_group, month_group in MONTH_GRAMMAR:
        for match in regex.finditer(text):
            month = _to_month(match.group(month_group))
            year = int(match.group(year_group))
            if month and 1 <= month <= 12 and MIN_YEAR <= year <= MAX_YEAR:
                return year, month
    return None


def month_from_url(url: str) -> Optional[Tuple[int, int]]:
    """Try the grammar on the URL's trailing path segment."""
    if not url:
        return None
    segments = [s for s in urlparse(url).path.split('/') if s]
    if not segments:
        return None
    segment = unquote(segments[-1])
    return parse_month_year(segment) or parse_month_year(re.sub(r'[-_+]+', ' ', segment))


def classify_month_links(
    links: Iterable[NavLink],
    origin: str,
    parent: str = '',
    path_fragments: Optional[Sequence[str]] = FOLDER_PATH_FRAGMENTS,
) -> List[MonthTarget]:
    """Classify links on a folder page into monthly targets.

    Args:
        links: Candidate links in page order
        origin: Base URL used to resolve relative hrefs
        parent: Parent folder name (log context only)
        path_fragments: URL fragments a month link must contain; None disables the check

    Returns:
        Month targets in chronological order, one per (year, month)
    """
    context = f"months[{parent}]" if parent else 'months'
    candidates = CandidateFilter(origin, context=context)
    months: List[MonthTarget] = []
    seen_periods: Set[Tuple[int, int]] = set()

    for index, link in enumerate(links):
        try:
            admitted = candidates.admit(index, link)
            if not admitted:
                continue
            text, url = admitted

            if path_fragments and not matches_path_fragment(url, path_fragments):
                candidates.skip('filtered', index, link, 'not a folder link')
                continue

            year_month = parse_month_year(text) or month_from_url(url)
            if not year_month:
                candidates.skip('filtered', index, link, 'no month/year')
                continue

            if year_month in seen_periods:
                candidates.skip('duplicate', index, link, f"period {year_month[0]}-{year_month[1]:02d}")
                continue

            year, month = year_month
            months.append(MonthTarget(year=year, month=month, url=url))
            seen_periods.add(year_month)
            candidates.accept(text, url)
        except Exception as e:
            candidates.fail(index, e)

    months.sort(key=lambda m: (m.year, m.month))
    logger.info(f"{context}: {len(months)} monthly targets (skipped: {candidates.summary()})")
    return months
