"""Batch passes over many pages.

Pages come from an external fetcher: a callable that takes a URL and returns
the settled PageSnapshot for it, or None when the page is unavailable.

An unexpected exception ends the batch. Results gathered before the failure
are kept and returned with the error; nothing after it is processed.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Sequence, Tuple, TypeVar

from ..aggregate.source import empty_source, merge_series
from ..discovery.links import FolderTarget
from ..discovery.months import classify_month_links
from ..discovery.snapshot import PageSnapshot
from ..extract.modified import extract_modified_page
from ..extract.page import PageExtraction, extract_page
from ..tracking import track_run
from ..workdays import DateResolver
from .config import SCRIPT_MODIFIED_BY, SCRIPT_ONLINE_REQUESTS, FolderConfig, WorktallyConfig

logger = logging.getLogger(__name__)

T = TypeVar('T')

SnapshotFetcher = Callable[[str], Optional[PageSnapshot]]


@dataclass
class BatchResult:
    """Outcome of a batch pass"""
    results: Dict[Hashable, Any] = field(default_factory=dict)
    skipped: List[Hashable] = field(default_factory=list)  # targets that produced nothing
    error: Optional[str] = None                            # fatal error that ended the batch

    @property
    def success(self) -> bool:
        return self.error is None


def run_batch(
    command: str,
    targets: Sequence[T],
    process: Callable[[T], Any],
    key: Callable[[T], Hashable] = str,
) -> BatchResult:
    """
    Run `process` over each target in order.

    A None result marks the target skipped. The first unexpected exception
    stops the batch; it is logged with traceback by track_run and its message
    is returned in BatchResult.error alongside the results gathered so far.
    """
    batch = BatchResult()
    try:
        with track_run(command, {'targets': len(targets)}) as tracker:
            for target in targets:
                result = process(target)
                if result is None:
                    batch.skipped.append(key(target))
                    continue
                batch.results[key(target)] = result
                tracker['processed'] = len(batch.results)
            tracker['skipped'] = len(batch.skipped)
    except Exception as e:
        batch.error = f"{command} failed: {e}"
    return batch


def scan_monthly_targets(
    folders: Sequence[FolderTarget],
    fetch: SnapshotFetcher,
    config: WorktallyConfig,
) -> BatchResult:
    """Classify monthly links for each folder target.

    Returns:
        BatchResult whose results map folder name -> list of MonthTarget
    """
    def scan(folder: FolderTarget):
        snapshot = fetch(folder.url)
        if snapshot is None:
            logger.error(f"No page for folder {folder.name!r} ({folder.url})")
            return None
        return classify_month_links(
            snapshot.links,
            snapshot.origin or config.origin,
            parent=folder.name,
            path_fragments=config.folder_path_fragments,
        )

    return run_batch('scan-months', folders, scan, key=lambda f: f.name)


def extract_snapshot(
    snapshot: PageSnapshot,
    script: str,
    resolver: DateResolver,
    initials_map: Mapping[str, str],
    folder_name: str,
) -> PageExtraction:
    """Extract a page with the extractor for its script type.

    A: modified-by pages, one item per entry credited to the modifier.
    B: online request titles with initials and working-day rollover.
    """
    if script == SCRIPT_MODIFIED_BY:
        return extract_modified_page(snapshot.modified_items, folder_name=folder_name)
    if script == SCRIPT_ONLINE_REQUESTS:
        return extract_page(snapshot.item_texts, resolver, initials_map, folder_name=folder_name)
    raise ValueError(f"Unknown script type {script!r}")


def extract_monthly_pages(
    configs: Sequence[FolderConfig],
    fetch: SnapshotFetcher,
    resolver: DateResolver,
    config: WorktallyConfig,
    source: Optional[dict] = None,
) -> Tuple[BatchResult, Dict[str, Any]]:
    """Extract every page of every valid folder config.

    Returns:
        Tuple of (BatchResult mapping (folder name, page URL) -> PageExtraction,
        aggregation source with every extracted page merged in)
    """
    pages: List[Tuple[FolderConfig, str]] = []
    for folder_config in configs:
        problems = folder_config.validate()
        if problems:
            logger.error(f"Skipping invalid config {folder_config.name!r}: {'; '.join(problems)}")
            continue
        pages.extend((folder_config, url) for url in folder_config.urls)

    def extract(page: Tuple[FolderConfig, str]) -> Optional[PageExtraction]:
        folder_config, url = page
        snapshot = fetch(url)
        if snapshot is None:
            logger.error(f"No page for {folder_config.name!r} ({url})")
            return None
        return extract_snapshot(
            snapshot,
            folder_config.script,
            resolver,
            config.initials_map,
            folder_name=folder_config.name,
        )

    batch = run_batch('extract-pages', pages, extract, key=_page_key)

    merged = source if source is not None else empty_source()
    for page in pages:
        extraction = batch.results.get(_page_key(page))
        if extraction is None:
            continue
        folder_config = page[0]
        merged = merge_series(merged, folder_config.name, extraction.series,
                              year=folder_config.year, month=folder_config.month)
    return batch, merged


def _page_key(page: Tuple[FolderConfig, str]) -> Tuple[str, str]:
    # the same URL may be listed under more than one folder
    return page[0].name, page[1]
