"""
Search Aggregator

Runs the Quran and Hadith searches concurrently, tolerates either one
failing, merges the results Quran-first and slices the requested page.

Patterns Applied:
- Settle-all fan-out: each source is wrapped so it always resolves to a
  SourceOutcome; asyncio.gather over the wrappers therefore never fails
  fast and one source's failure cannot suppress the other's results
- Protocols for the two sources so tests can substitute fakes
- Explicit per-source timeout (asyncio.wait_for)

Failure policy:
- an excluded source (type filter) is an empty success, never a failure
- exactly one issued source failed: results of the other, failure recorded
- both issued sources failed: DualSourceFailure with both reasons
- no results at all: a valid empty page
"""

import asyncio
from collections.abc import Awaitable, Iterable
from typing import Final, Protocol, TypeVar

from src.core.exceptions import DualSourceFailure, SourceTimeoutError
from src.core.logging import get_logger
from src.core.tracing import get_tracer
from src.lookup.models import HadithGrade, HadithResult, VerseResult
from src.search.models import (
    HadithHit,
    QuranHit,
    SearchPage,
    SearchType,
    SourceOutcome,
    TaggedResult,
)
from src.search.pagination import clamp_page, total_pages_for

logger = get_logger(__name__)
tracer = get_tracer(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE: Final[int] = 10
DEFAULT_SOURCE_TIMEOUT: Final[float] = 15.0

SOURCE_QURAN: Final[str] = "quran"
SOURCE_HADITH: Final[str] = "hadith"


# =============================================================================
# Source Protocols
# =============================================================================


class QuranSearchSource(Protocol):
    async def search_verses(
        self, query: str, translation_id: str | None = None
    ) -> list[VerseResult]:
        ...


class HadithSearchSource(Protocol):
    async def fetch_search(self, query: str) -> list[HadithResult]:
        ...


# =============================================================================
# SearchAggregator
# =============================================================================


class SearchAggregator:
    """Merges Quran and Hadith search results into paginated SearchPages."""

    def __init__(
        self,
        quran: QuranSearchSource,
        hadith: HadithSearchSource,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        source_timeout: float | None = DEFAULT_SOURCE_TIMEOUT,
    ) -> None:
        """Initialize the aggregator.

        Args:
            quran: Quran search source (QuranLookupService)
            hadith: Hadith search source; must raise on failure (fetch_search)
            page_size: Default items per page
            source_timeout: Seconds each source may take; None disables
        """
        self._quran = quran
        self._hadith = hadith
        self.page_size = page_size
        self.source_timeout = source_timeout

    async def aggregate(
        self,
        query: str,
        search_type: SearchType = SearchType.ALL,
        page: int = 1,
        page_size: int | None = None,
        grades: Iterable[HadithGrade] | None = None,
        translation_id: str | None = None,
    ) -> SearchPage:
        """Search both sources and return one page of merged results.

        Args:
            query: Free-text query
            search_type: Sources to consult
            page: Requested page; clamped into [1, total_pages]
            page_size: Items per page, defaults to the aggregator's page size
            grades: Keep only hadiths with these grades (None or empty keeps all)
            translation_id: Translation edition for Quran results

        Returns:
            SearchPage for the resolved page

        Raises:
            DualSourceFailure: When every issued source failed
        """
        size = page_size or self.page_size
        query = query.strip()

        with tracer.start_as_current_span("search.aggregate") as span:
            span.set_attribute("search.type", search_type.value)
            span.set_attribute("search.page", page)

            if not query:
                return self._paginate([], page, size)

            quran_outcome, hadith_outcome = await asyncio.gather(
                self._run_quran(query, search_type, translation_id),
                self._run_hadith(query, search_type),
            )

            span.set_attribute("search.quran_failed", quran_outcome.failed)
            span.set_attribute("search.hadith_failed", hadith_outcome.failed)

            if quran_outcome.failed and hadith_outcome.failed:
                logger.error(
                    "search_all_sources_failed",
                    query=query,
                    quran_error=str(quran_outcome.error),
                    hadith_error=str(hadith_outcome.error),
                )
                raise DualSourceFailure(quran_outcome.error, hadith_outcome.error)

            hadiths = hadith_outcome.value
            wanted = frozenset(grades or ())
            if wanted:
                hadiths = [h for h in hadiths if h.grade in wanted]

            merged: list[TaggedResult] = [QuranHit(item=v) for v in quran_outcome.value]
            merged.extend(HadithHit(item=h) for h in hadiths)

            result = self._paginate(
                merged,
                page,
                size,
                quran=quran_outcome,
                hadith=hadith_outcome,
                quran_count=len(quran_outcome.value),
                hadith_count=len(hadiths),
            )
            span.set_attribute("search.total_count", result.total_count)

        logger.info(
            "search_aggregated",
            query=query,
            search_type=search_type.value,
            total=result.total_count,
            page=result.resolved_page,
            quran_failed=result.quran_failed,
            hadith_failed=result.hadith_failed,
        )
        return result

    # -------------------------------------------------------------------------
    # Fan-out
    # -------------------------------------------------------------------------

    async def _run_quran(
        self,
        query: str,
        search_type: SearchType,
        translation_id: str | None,
    ) -> SourceOutcome[VerseResult]:
        if not search_type.includes_quran:
            return SourceOutcome()
        return await self._settle(
            SOURCE_QURAN, self._quran.search_verses(query, translation_id)
        )

    async def _run_hadith(
        self,
        query: str,
        search_type: SearchType,
    ) -> SourceOutcome[HadithResult]:
        if not search_type.includes_hadith:
            return SourceOutcome()
        return await self._settle(SOURCE_HADITH, self._hadith.fetch_search(query))

    async def _settle(
        self,
        source: str,
        lookup: Awaitable[list[T]],
    ) -> SourceOutcome[T]:
        """Await one source and capture its outcome instead of raising."""
        try:
            if self.source_timeout is None:
                value = await lookup
            else:
                value = await asyncio.wait_for(lookup, timeout=self.source_timeout)
        except asyncio.TimeoutError:
            logger.warning("search_source_timeout", source=source, timeout=self.source_timeout)
            return SourceOutcome(error=SourceTimeoutError(source, self.source_timeout or 0.0))
        except Exception as e:
            logger.warning(
                "search_source_failed",
                source=source,
                error_type=type(e).__name__,
                error=str(e),
            )
            return SourceOutcome(error=e)
        return SourceOutcome(value=list(value))

    # -------------------------------------------------------------------------
    # Pagination
    # -------------------------------------------------------------------------

    @staticmethod
    def _paginate(
        merged: list[TaggedResult],
        page: int,
        page_size: int,
        *,
        quran: SourceOutcome[VerseResult] | None = None,
        hadith: SourceOutcome[HadithResult] | None = None,
        quran_count: int = 0,
        hadith_count: int = 0,
    ) -> SearchPage:
        total_count = len(merged)
        total_pages = total_pages_for(total_count, page_size)
        resolved = clamp_page(page, total_pages)
        start = (resolved - 1) * page_size

        return SearchPage(
            items=merged[start : start + page_size],
            total_count=total_count,
            total_pages=total_pages,
            resolved_page=resolved,
            page_size=page_size,
            quran_failed=bool(quran and quran.failed),
            hadith_failed=bool(hadith and hadith.failed),
            quran_error=quran.error if quran else None,
            hadith_error=hadith.error if hadith else None,
            quran_count=quran_count,
            hadith_count=hadith_count,
        )
