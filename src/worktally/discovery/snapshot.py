"""Page snapshots - the settled state of a rendered page.

The core never talks to a browser. Whatever drives the browser hands over a
snapshot: the page URL, its links and the text of its item entries. Saved
HTML can be turned into a snapshot with `PageSnapshot.from_html`.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from ..extract.modified import ModifiedItem
from ..utils.text import clean_folder_name
from .links import NavLink
from .strategies import build_strategies, collect_links

ITEM_SELECTORS = ['xen-object-title a']

MODIFIED_LIST_SELECTOR = 'div.layout__content ol > li'
MODIFIED_TITLE_SELECTOR = 'span[title*="Modified on"]'
MODIFIED_ANCHOR_SELECTOR = 'xen-object-title > a'

FOLDER_NAME_SELECTORS = [
    'span.breadcrumbsComponent__name',
    'div.odl-worksheet-breadcrumb a > span',
    'div.MuiBox-root > h1',
]

UNKNOWN_FOLDER = 'Unknown Folder'


def page_origin(url: str) -> str:
    """scheme://host[:port] for a page URL."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return ''
    return f"{parsed.scheme}://{parsed.netloc}"


@dataclass
class PageSnapshot:
    """Links and item texts captured from one settled page"""
    origin: str
    links: List[NavLink] = field(default_factory=list)
    item_texts: List[str] = field(default_factory=list)
    modified_items: List[ModifiedItem] = field(default_factory=list)
    folder_name: str = UNKNOWN_FOLDER
    strategy: Optional[str] = None  # which link strategy produced `links`

    @classmethod
    def from_html(
        cls,
        html: str,
        origin: str,
        selectors: Optional[Sequence[str]] = None,
        item_selectors: Sequence[str] = ITEM_SELECTORS,
    ) -> 'PageSnapshot':
        soup = BeautifulSoup(html, 'html.parser')
        links, strategy = collect_links(soup, build_strategies(selectors))

        item_texts = []
        for selector in item_selectors:
            for tag in soup.select(selector):
                text = tag.get_text(' ', strip=True)
                if text:
                    item_texts.append(text)

        return cls(
            origin=origin,
            links=links,
            item_texts=item_texts,
            modified_items=extract_modified_items(soup),
            folder_name=extract_folder_name(soup),
            strategy=strategy,
        )


def extract_folder_name(soup: BeautifulSoup) -> str:
    """Folder name from the breadcrumb, falling back to the page title."""
    for selector in FOLDER_NAME_SELECTORS:
        element = soup.select_one(selector)
        if element:
            name = clean_folder_name(element.get_text(' ', strip=True))
            if name:
                return name

    if soup.title and soup.title.string:
        name = clean_folder_name(soup.title.string)
        if name:
            return name

    return UNKNOWN_FOLDER


def extract_modified_items(soup: BeautifulSoup) -> List[ModifiedItem]:
    """List entries of a modified-by page: tooltip text plus document title."""
    items = []
    for entry in soup.select(MODIFIED_LIST_SELECTOR):
        span = entry.select_one(MODIFIED_TITLE_SELECTOR)
        anchor = entry.select_one(MODIFIED_ANCHOR_SELECTOR)
        items.append(ModifiedItem(
            modified=span.get('title', '') if span else '',
            title=anchor.get_text(' ', strip=True) if anchor else '',
        ))
    return items
