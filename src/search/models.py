"""
Search Models

Data models for search aggregation: the tagged result union, per-source
outcomes and the page handed back to callers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Literal, TypeVar

from src.lookup.models import HadithResult, VerseResult

T = TypeVar("T")


class SearchType(str, Enum):
    """Which sources a search consults."""

    ALL = "all"
    QURAN = "quran"
    HADITH = "hadith"

    @property
    def includes_quran(self) -> bool:
        return self is not SearchType.HADITH

    @property
    def includes_hadith(self) -> bool:
        return self is not SearchType.QURAN


# =============================================================================
# Tagged result union
# =============================================================================


@dataclass(frozen=True, slots=True)
class QuranHit:
    item: VerseResult
    kind: Literal["quran"] = "quran"


@dataclass(frozen=True, slots=True)
class HadithHit:
    item: HadithResult
    kind: Literal["hadith"] = "hadith"


TaggedResult = QuranHit | HadithHit


# =============================================================================
# Source outcome
# =============================================================================


@dataclass(frozen=True, slots=True)
class SourceOutcome(Generic[T]):
    """Settled outcome of one source lookup.

    Exactly one of value / error is meaningful: a failed outcome carries the
    reason and an empty value. An excluded source settles as an empty success.
    """

    value: list[T] = field(default_factory=list)
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


# =============================================================================
# Search page
# =============================================================================


@dataclass(frozen=True)
class SearchPage:
    """One page of merged search results.

    Attributes:
        items: Results on the resolved page, Quran hits first
        total_count: Number of merged results across all pages
        total_pages: max(1, ceil(total_count / page_size))
        resolved_page: Requested page clamped into [1, total_pages]
        page_size: Maximum items per page
        quran_failed: Quran source was issued and failed
        hadith_failed: Hadith source was issued and failed
        quran_error: Failure reason of the Quran source, if any
        hadith_error: Failure reason of the Hadith source, if any
        quran_count: Quran results before pagination
        hadith_count: Hadith results before pagination (after grade filter)
    """

    items: list[TaggedResult]
    total_count: int
    total_pages: int
    resolved_page: int
    page_size: int
    quran_failed: bool = False
    hadith_failed: bool = False
    quran_error: Exception | None = None
    hadith_error: Exception | None = None
    quran_count: int = 0
    hadith_count: int = 0

    @property
    def is_empty(self) -> bool:
        """Zero-result state; distinct from failure."""
        return self.total_count == 0

    @property
    def quran_items(self) -> list[VerseResult]:
        return [hit.item for hit in self.items if hit.kind == "quran"]

    @property
    def hadith_items(self) -> list[HadithResult]:
        return [hit.item for hit in self.items if hit.kind == "hadith"]
