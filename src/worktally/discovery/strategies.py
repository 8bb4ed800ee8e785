"""Link matcher strategies.

Folder pages have been rendered by several generations of the source UI.
Candidates are collected by trying an ordered list of strategies; the first
one that finds at least one link wins, and the last resort is every link on
the page.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from .links import NavLink

logger = logging.getLogger(__name__)


PRIMARY_LINK_SELECTORS = [
    'xen-cards-list a.objectTitleComponent__name',
    'a.objectTitleComponent__name',
    'div.xen-cards-list a',
    'div.list-view a',
    'table.data-table a',
    '.folder-list a',
    '.object-list a',
    '.folder-grid a',
    'a[title*="Open"]',
    'a[aria-label*="folder"]',
    'a[data-object-type="folder"]',
    'a[href*="/documents/"]',
    'a[href*="/objective/folders/"]',
    'a[href*="/folders/"]',
    'a[href*="/folder/"]',
]


def _to_nav_link(tag) -> NavLink:
    return NavLink(text=tag.get_text(' ', strip=True), href=tag.get('href') or '')


@dataclass(frozen=True)
class SelectorStrategy:
    """Collect links matching one CSS selector"""
    selector: str

    @property
    def name(self) -> str:
        return self.selector

    def match(self, soup: BeautifulSoup) -> List[NavLink]:
        return [_to_nav_link(tag) for tag in soup.select(self.selector) if tag.name == 'a']


@dataclass(frozen=True)
class AllLinksStrategy:
    """Fallback: every anchor on the page"""

    @property
    def name(self) -> str:
        return 'all links'

    def match(self, soup: BeautifulSoup) -> List[NavLink]:
        return [_to_nav_link(tag) for tag in soup.find_all('a')]


def build_strategies(selectors: Optional[Sequence[str]] = None) -> list:
    """Selector strategies in priority order, ending with the all-links fallback."""
    selectors = PRIMARY_LINK_SELECTORS if selectors is None else selectors
    return [SelectorStrategy(s) for s in selectors] + [AllLinksStrategy()]


def collect_links(soup: BeautifulSoup, strategies: Sequence) -> Tuple[List[NavLink], Optional[str]]:
    """
    Run strategies in order and return the first non-empty result.

    Returns:
        Tuple of (links, name of the strategy that produced them)
    """
    for strategy in strategies:
        try:
            links = strategy.match(soup)
        except Exception as e:
            # bad selector in config; try the next one
            logger.warning(f"Link strategy {strategy.name!r} failed: {e}")
            continue
        if links:
            logger.debug(f"Found {len(links)} links using {strategy.name!r}")
            return links, strategy.name
    return [], None
