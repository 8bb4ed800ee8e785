"""Classify page links into folder navigation targets.

Pages on the source system are noisy: the same folder can be rendered more
than once, working copies sit next to the real folders, and toolbars add
links that go nowhere useful. Classification turns the raw (text, href) pairs
into a clean, deduplicated, sorted list of targets.

Never raises: a candidate that blows up is logged and skipped.
"""
import logging
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple
from urllib.parse import urljoin, urlparse

from ..utils.text import collapse_whitespace, contains_token

logger = logging.getLogger(__name__)


# Configuration patterns
FOLDER_PATH_FRAGMENTS = (
    '/documents/',
    '/objective/folders/',
    '/objective/objects/',
    '/folder/',
    '/folders/',
)
MIN_LABEL_LENGTH = 3
MAX_LABEL_LENGTH = 150
EXCLUDED_TOKEN = 'copy'  # working copies are not navigation targets
ALLOWED_SCHEMES = {'http', 'https'}


@dataclass(frozen=True)
class NavLink:
    """A raw hyperlink as rendered on the page"""
    text: str
    href: str


@dataclass(frozen=True)
class FolderTarget:
    """A folder-type navigation target"""
    name: str
    url: str

    def to_dict(self) -> dict:
        return asdict(self)


def resolve_url(href: str, origin: str) -> Optional[str]:
    """
    Resolve href against the page origin.

    Returns None for malformed URLs and non-http(s) schemes
    (javascript:, mailto:, ...).
    """
    if not href or not href.strip():
        return None
    try:
        absolute = urljoin(origin, href.strip())
        parsed = urlparse(absolute)
    except ValueError:
        return None
    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.netloc:
        return None
    return absolute


def matches_path_fragment(url: str, fragments: Sequence[str]) -> bool:
    """Check whether the URL contains any of the configured path fragments."""
    return any(fragment in url for fragment in fragments)


class CandidateFilter:
    """
    Shared filtering and deduplication for one classification run.

    Steps applied by `admit`:
    1. drop empty text or href
    2. drop text containing "copy"
    3. resolve href to an absolute URL
    4. collapse whitespace in the text
    5. drop when the URL or the text was already accepted

    Only targets passed to `accept` count for deduplication, so a link that
    fails a later check does not shadow a valid one further down the page.
    """

    def __init__(self, origin: str, context: str = 'links'):
        self.origin = origin
        self.context = context
        self.seen_urls: Set[str] = set()
        self.seen_texts: Set[str] = set()
        self.skipped: Dict[str, int] = {
            'empty': 0, 'copy': 0, 'url': 0, 'duplicate': 0, 'filtered': 0, 'error': 0,
        }

    def admit(self, index: int, link: NavLink) -> Optional[Tuple[str, str]]:
        """Return (normalized_text, absolute_url), or None when skipped."""
        raw_text = (link.text or '').strip()
        raw_href = (link.href or '').strip()

        if not raw_text or not raw_href:
            self.skip('empty', index, link)
            return None

        if contains_token(raw_text, EXCLUDED_TOKEN):
            self.skip('copy', index, link)
            return None

        absolute_url = resolve_url(raw_href, self.origin)
        if not absolute_url:
            self.skip('url', index, link)
            return None

        text = collapse_whitespace(raw_text)

        if absolute_url in self.seen_urls or text in self.seen_texts:
            self.skip('duplicate', index, link, f"url={absolute_url}")
            return None

        return text, absolute_url

    def accept(self, text: str, url: str) -> None:
        self.seen_urls.add(url)
        self.seen_texts.add(text)

    def skip(self, reason: str, index: int, link: NavLink, detail: str = '') -> None:
        self.skipped[reason] += 1
        logger.debug(
            f"{self.context}: skipped #{index + 1} ({reason}) text={link.text!r} href={link.href!r} {detail}".rstrip()
        )

    def fail(self, index: int, error: Exception) -> None:
        # the link itself may be what raised, so it is not read again here
        self.skipped['error'] += 1
        logger.warning(f"{self.context}: error on link #{index + 1}: {error}")

    def summary(self) -> str:
        parts = [f"{count} {reason}" for reason, count in self.skipped.items() if count]
        return ', '.join(parts) if parts else 'none'


def classify_folder_links(
    links: Iterable[NavLink],
    origin: str,
    path_fragments: Sequence[str] = FOLDER_PATH_FRAGMENTS,
    min_length: int = MIN_LABEL_LENGTH,
    max_length: int = MAX_LABEL_LENGTH,
) -> List[FolderTarget]:
    """Classify page links into folder targets.

    Args:
        links: Candidate links in page order
        origin: Base URL used to resolve relative hrefs
        path_fragments: URL fragments that identify folder pages
        min_length: Shortest acceptable label
        max_length: Longest acceptable label

    Returns:
        Folder targets sorted by name, unique by URL and by name
    """
    candidates = CandidateFilter(origin, context='folders')
    folders: List[FolderTarget] = []

    for index, link in enumerate(links):
        try:
            admitted = candidates.admit(index, link)
            if not admitted:
                continue
            text, url = admitted

            if not matches_path_fragment(url, path_fragments) or not min_length <= len(text) <= max_length:
                candidates.skip('filtered', index, link, 'not a folder link')
                continue

            folders.append(FolderTarget(name=text, url=url))
            candidates.accept(text, url)
        except Exception as e:
            candidates.fail(index, e)

    folders.sort(key=lambda f: (f.name.lower(), f.name))
    logger.info(f"folders: {len(folders)} folder targets (skipped: {candidates.summary()})")
    return folders


def classification_result(targets: Sequence, key: str = 'folders') -> dict:
    """Handoff payload for the transport layer."""
    return {'success': True, key: [t.to_dict() for t in targets]}


def classification_error(message: str, key: str = 'folders') -> dict:
    """Handoff payload for a failed classification pass."""
    return {'success': False, key: [], 'error': message}
