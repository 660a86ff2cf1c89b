"""Search aggregation and pagination."""

from src.search.aggregator import SearchAggregator
from src.search.models import (
    HadithHit,
    QuranHit,
    SearchPage,
    SearchType,
    SourceOutcome,
    TaggedResult,
)
from src.search.pagination import (
    ELLIPSIS,
    PageLink,
    PageLinks,
    build_page_links,
    page_tokens,
)

__all__ = [
    "ELLIPSIS",
    "HadithHit",
    "PageLink",
    "PageLinks",
    "QuranHit",
    "SearchAggregator",
    "SearchPage",
    "SearchType",
    "SourceOutcome",
    "TaggedResult",
    "build_page_links",
    "page_tokens",
]
