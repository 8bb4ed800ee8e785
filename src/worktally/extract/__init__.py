"""Item text extraction into dated, per-person counts"""
from .grammar import ItemGrammar, ItemMatch, ONLINE_REQUESTS, DEFAULT_GRAMMARS, match_item
from .records import (
    CountRecord,
    ExtractionResult,
    split_initials,
    extract_records,
    build_daily_buckets,
    apply_rollover,
)
from .people import InitialsResolver, PersonCountSeries, resolve_people
from .page import PageExtraction, extract_page
from .modified import ModifiedItem, extract_modified_page, uses_trailing_count
