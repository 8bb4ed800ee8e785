"""Link discovery and classification"""
from .links import (
    NavLink,
    FolderTarget,
    classify_folder_links,
    classification_result,
    classification_error,
    resolve_url,
)
from .months import MonthTarget, classify_month_links, parse_month_year
from .strategies import SelectorStrategy, AllLinksStrategy, build_strategies, collect_links
from .snapshot import PageSnapshot, page_origin
