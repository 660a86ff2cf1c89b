"""
Search Aggregator Tests

- Quran-first merge order and pagination
- partial failure: one source fails, the other's results are returned
- dual failure: both reasons reachable on DualSourceFailure
- page clamping, type filter, grade filter, per-source timeout
"""

import asyncio

import pytest

from src.core.exceptions import DualSourceFailure, GatewayError, SourceTimeoutError
from src.lookup.models import HadithGrade, HadithResult, SurahMeta, VerseResult
from src.search.aggregator import SearchAggregator
from src.search.models import SearchType

SURAH = SurahMeta(number=2, name_arabic="البقرة", name_english="Al-Baqarah")


def _verses(n: int) -> list[VerseResult]:
    return [
        VerseResult(surah_number=2, verse_number=i, arabic_text="آية", surah=SURAH)
        for i in range(1, n + 1)
    ]


def _hadiths(n: int, grade: HadithGrade = HadithGrade.SAHIH) -> list[HadithResult]:
    return [
        HadithResult(
            collection_slug="bukhari",
            hadith_number=str(i),
            english_text=f"hadith {i}",
            grade=grade,
        )
        for i in range(1, n + 1)
    ]


class FakeQuranSource:
    def __init__(self, result: list[VerseResult] | Exception, delay: float = 0) -> None:
        self.result = result
        self.delay = delay
        self.calls: list[tuple[str, str | None]] = []

    async def search_verses(
        self, query: str, translation_id: str | None = None
    ) -> list[VerseResult]:
        self.calls.append((query, translation_id))
        if self.delay:
            await asyncio.sleep(self.delay)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeHadithSource:
    def __init__(self, result: list[HadithResult] | Exception, delay: float = 0) -> None:
        self.result = result
        self.delay = delay
        self.calls: list[str] = []

    async def fetch_search(self, query: str) -> list[HadithResult]:
        self.calls.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def _aggregator(quran, hadith, **kwargs) -> SearchAggregator:
    return SearchAggregator(FakeQuranSource(quran), FakeHadithSource(hadith), **kwargs)


# =============================================================================
# Merge and pagination
# =============================================================================


class TestMergeAndPaginate:
    """Successful dual-source searches."""

    @pytest.mark.asyncio
    async def test_patience_scenario(self) -> None:
        """3 verses + 15 hadiths: 18 results over 2 pages, Quran first."""
        aggregator = _aggregator(_verses(3), _hadiths(15))

        first = await aggregator.aggregate("patience")
        second = await aggregator.aggregate("patience", page=2)

        assert first.total_count == 18
        assert first.total_pages == 2
        assert [hit.kind for hit in first.items] == ["quran"] * 3 + ["hadith"] * 7
        assert len(second.items) == 8
        assert all(hit.kind == "hadith" for hit in second.items)
        assert second.hadith_items[0].hadith_number == "8"
        assert first.quran_count == 3
        assert first.hadith_count == 15

    @pytest.mark.asyncio
    async def test_quran_items_precede_hadith_items(self) -> None:
        aggregator = _aggregator(_verses(12), _hadiths(12), page_size=5)

        kinds: list[str] = []
        for page in range(1, 6):
            result = await aggregator.aggregate("light", page=page)
            kinds.extend(hit.kind for hit in result.items)

        assert kinds == ["quran"] * 12 + ["hadith"] * 12

    @pytest.mark.asyncio
    async def test_page_zero_resolves_to_first_page(self) -> None:
        aggregator = _aggregator(_verses(3), _hadiths(15))

        zero = await aggregator.aggregate("patience", page=0)
        one = await aggregator.aggregate("patience", page=1)

        assert zero.resolved_page == 1
        assert zero.items == one.items

    @pytest.mark.asyncio
    async def test_page_past_end_resolves_to_last_page(self) -> None:
        aggregator = _aggregator(_verses(3), _hadiths(15))

        last = await aggregator.aggregate("patience", page=2)
        beyond = await aggregator.aggregate("patience", page=last.total_pages + 5)

        assert beyond.resolved_page == 2
        assert beyond.items == last.items

    @pytest.mark.asyncio
    async def test_custom_page_size(self) -> None:
        aggregator = _aggregator(_verses(3), _hadiths(15))

        result = await aggregator.aggregate("patience", page_size=4)

        assert result.page_size == 4
        assert result.total_pages == 5
        assert len(result.items) == 4

    @pytest.mark.asyncio
    async def test_zero_results_is_empty_not_failure(self) -> None:
        result = await _aggregator([], []).aggregate("zzzz")

        assert result.is_empty
        assert result.items == []
        assert result.total_pages == 1
        assert result.resolved_page == 1
        assert not result.quran_failed
        assert not result.hadith_failed

    @pytest.mark.asyncio
    async def test_translation_passed_to_quran_source(self) -> None:
        quran = FakeQuranSource(_verses(1))
        aggregator = SearchAggregator(quran, FakeHadithSource([]))

        await aggregator.aggregate("mercy", translation_id="en.asad")

        assert quran.calls == [("mercy", "en.asad")]

    @pytest.mark.asyncio
    async def test_blank_query_skips_sources(self) -> None:
        quran = FakeQuranSource(_verses(3))
        hadith = FakeHadithSource(_hadiths(3))
        aggregator = SearchAggregator(quran, hadith)

        result = await aggregator.aggregate("   ")

        assert result.is_empty
        assert quran.calls == []
        assert hadith.calls == []


# =============================================================================
# Type and grade filters
# =============================================================================


class TestFilters:
    @pytest.mark.asyncio
    async def test_quran_only_skips_hadith_source(self) -> None:
        quran = FakeQuranSource(_verses(2))
        hadith = FakeHadithSource(GatewayError(500, "/hadiths"))
        aggregator = SearchAggregator(quran, hadith)

        result = await aggregator.aggregate("light", SearchType.QURAN)

        assert hadith.calls == []
        assert result.total_count == 2
        assert not result.hadith_failed

    @pytest.mark.asyncio
    async def test_hadith_only_skips_quran_source(self) -> None:
        quran = FakeQuranSource(_verses(2))
        hadith = FakeHadithSource(_hadiths(4))
        aggregator = SearchAggregator(quran, hadith)

        result = await aggregator.aggregate("light", SearchType.HADITH)

        assert quran.calls == []
        assert [hit.kind for hit in result.items] == ["hadith"] * 4

    @pytest.mark.asyncio
    async def test_single_source_failure_is_not_dual_failure(self) -> None:
        """An excluded source never counts towards a dual failure."""
        aggregator = _aggregator([], GatewayError(503, "/hadiths"))

        result = await aggregator.aggregate("light", SearchType.HADITH)

        assert result.hadith_failed
        assert not result.quran_failed
        assert result.is_empty

    @pytest.mark.asyncio
    async def test_grade_filter_applies_to_hadiths_only(self) -> None:
        hadiths = _hadiths(3) + _hadiths(2, HadithGrade.DAIF)
        aggregator = _aggregator(_verses(2), hadiths)

        result = await aggregator.aggregate("light", grades={HadithGrade.DAIF})

        assert result.quran_count == 2
        assert result.hadith_count == 2
        assert all(h.grade == HadithGrade.DAIF for h in result.hadith_items)

    @pytest.mark.asyncio
    async def test_empty_grade_filter_keeps_everything(self) -> None:
        aggregator = _aggregator([], _hadiths(3) + _hadiths(2, HadithGrade.HASAN))

        result = await aggregator.aggregate("light", grades=set())

        assert result.total_count == 5


# =============================================================================
# Failure handling
# =============================================================================


class TestSourceFailures:
    """Partial and total source failures."""

    @pytest.mark.asyncio
    async def test_quran_failure_returns_hadiths(self) -> None:
        """Quran fails, Hadith returns N: exactly N items and no exception."""
        aggregator = _aggregator(GatewayError(0, "/api/search"), _hadiths(6))

        result = await aggregator.aggregate("patience")

        assert result.total_count == 6
        assert result.quran_failed
        assert not result.hadith_failed
        assert isinstance(result.quran_error, GatewayError)
        assert result.quran_error.status == 0

    @pytest.mark.asyncio
    async def test_hadith_failure_returns_verses(self) -> None:
        aggregator = _aggregator(_verses(4), GatewayError(429, "/hadiths"))

        result = await aggregator.aggregate("patience")

        assert result.total_count == 4
        assert result.hadith_failed
        assert result.hadith_error.status == 429

    @pytest.mark.asyncio
    async def test_dual_failure_keeps_both_reasons(self) -> None:
        aggregator = _aggregator(GatewayError(0, "/api/search"), GatewayError(429, "/hadiths"))

        with pytest.raises(DualSourceFailure) as exc_info:
            await aggregator.aggregate("patience")

        assert exc_info.value.quran_reason.status == 0
        assert exc_info.value.hadith_reason.status == 429

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_captured(self) -> None:
        aggregator = _aggregator(RuntimeError("boom"), _hadiths(1))

        result = await aggregator.aggregate("patience")

        assert result.quran_failed
        assert isinstance(result.quran_error, RuntimeError)
        assert result.total_count == 1

    @pytest.mark.asyncio
    async def test_slow_source_times_out(self) -> None:
        quran = FakeQuranSource(_verses(3), delay=1.0)
        hadith = FakeHadithSource(_hadiths(2))
        aggregator = SearchAggregator(quran, hadith, source_timeout=0.05)

        result = await aggregator.aggregate("patience")

        assert result.quran_failed
        assert isinstance(result.quran_error, SourceTimeoutError)
        assert result.quran_error.status == 0
        assert result.total_count == 2

    @pytest.mark.asyncio
    async def test_sources_run_concurrently(self) -> None:
        """Both sources are awaited together, not one after the other."""
        quran = FakeQuranSource(_verses(1), delay=0.2)
        hadith = FakeHadithSource(_hadiths(1), delay=0.2)
        aggregator = SearchAggregator(quran, hadith)

        loop = asyncio.get_running_loop()
        started = loop.time()
        await aggregator.aggregate("patience")
        elapsed = loop.time() - started

        assert elapsed < 0.35
