"""
Search Endpoints

GET /v1/search         - merged Quran + Hadith search, paginated
GET /v1/search/{slug}  - same search addressed by a URL slug ("-" for spaces)

Patterns Applied:
- FastAPI router pattern
- Pydantic request/response models
- Dependency injection for the aggregator

The response carries everything needed to render the page: tagged results,
per-source failure notices, and page tokens whose hrefs preserve the current
filter state.
"""

from collections.abc import Callable
from typing import Annotated, Literal
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from src.api.deps import get_search_aggregator
from src.api.errors import ErrorNotice, describe_source_error
from src.api.schemas import HadithSchema, Locale, VerseSchema
from src.lookup.grades import parse_grade_filter
from src.lookup.models import HadithGrade
from src.search.aggregator import SearchAggregator
from src.search.models import SearchPage, SearchType, TaggedResult
from src.search.pagination import PageLinks, build_page_links

# =============================================================================
# Response Models
# =============================================================================


class QuranResultItem(BaseModel):
    kind: Literal["quran"] = "quran"
    verse: VerseSchema


class HadithResultItem(BaseModel):
    kind: Literal["hadith"] = "hadith"
    hadith: HadithSchema


SearchResultItem = Annotated[
    QuranResultItem | HadithResultItem, Field(discriminator="kind")
]


class PageLinkSchema(BaseModel):
    label: str
    page: int | None = None
    href: str | None = None
    is_current: bool = False


class PaginationSchema(BaseModel):
    """Pagination tokens; render only when visible is true."""

    current: int
    total: int
    visible: bool
    links: list[PageLinkSchema]
    previous_href: str | None = None
    next_href: str | None = None

    @classmethod
    def from_links(cls, links: PageLinks) -> "PaginationSchema":
        return cls(
            current=links.current,
            total=links.total,
            visible=links.visible,
            links=[
                PageLinkSchema(
                    label=link.label,
                    page=link.page,
                    href=link.href,
                    is_current=link.is_current,
                )
                for link in links.links
            ],
            previous_href=links.previous_href,
            next_href=links.next_href,
        )


class SearchResponse(BaseModel):
    """Response from the search endpoints."""

    query: str
    type: SearchType
    locale: Locale
    page: int
    page_size: int
    total_count: int
    total_pages: int
    quran_count: int
    hadith_count: int
    quran_failed: bool
    hadith_failed: bool
    summary: str
    results: list[SearchResultItem]
    notices: list[ErrorNotice]
    pagination: PaginationSchema


# =============================================================================
# Helpers
# =============================================================================


def build_search_href(
    locale: Locale,
    query: str,
    search_type: SearchType,
    grades: list[str] | None = None,
) -> Callable[[int], str]:
    """Link builder that keeps the current query and filters.

    ``type`` is omitted for "all" and ``page`` for page 1, so the first page
    of an unfiltered search has a single canonical URL.
    """

    def build(page: int) -> str:
        params: list[tuple[str, str]] = []
        if query:
            params.append(("q", query))
        if search_type is not SearchType.ALL:
            params.append(("type", search_type.value))
        params.extend(("grade", g) for g in grades or [])
        if page > 1:
            params.append(("page", str(page)))
        return f"/{locale.value}/search?{urlencode(params)}"

    return build


def to_result_item(
    hit: TaggedResult, locale: Locale
) -> QuranResultItem | HadithResultItem:
    if hit.kind == "quran":
        return QuranResultItem(verse=VerseSchema.from_result(hit.item, locale))
    if hit.kind == "hadith":
        return HadithResultItem(hadith=HadithSchema.from_result(hit.item, locale))
    raise ValueError(f"Unknown result kind: {hit.kind!r}")


def summarize(result: SearchPage, query: str, locale: Locale) -> str:
    if not query:
        if locale is Locale.AR:
            return "أدخل كلمة للبحث في القرآن والحديث"
        return "Enter a term to search Quran and Hadith"
    if result.is_empty:
        if locale is Locale.AR:
            return f'لم نجد نتائج لـ "{query}"'
        return f'We couldn\'t find results for "{query}"'
    if locale is Locale.AR:
        return (
            f"{result.total_count} نتيجة — الصفحة {result.resolved_page} "
            f"من {result.total_pages}"
        )
    return (
        f"{result.total_count} results — page {result.resolved_page} "
        f"of {result.total_pages}"
    )


def _parse_grades(grade: list[str]) -> frozenset[HadithGrade]:
    try:
        return parse_grade_filter(grade)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e


async def run_search(
    aggregator: SearchAggregator,
    *,
    query: str,
    search_type: SearchType,
    page: int,
    grade: list[str],
    translation: str | None,
    locale: Locale,
) -> SearchResponse:
    """Aggregate, paginate and shape one search response.

    DualSourceFailure propagates to its exception handler (HTTP 502).
    """
    query = query.strip()
    grades = _parse_grades(grade)

    result = await aggregator.aggregate(
        query,
        search_type,
        page=page,
        grades=grades,
        translation_id=translation,
    )

    notices: list[ErrorNotice] = []
    if result.quran_failed and result.quran_error is not None:
        notices.append(describe_source_error(result.quran_error, locale, source="quran"))
    if result.hadith_failed and result.hadith_error is not None:
        notices.append(describe_source_error(result.hadith_error, locale, source="hadith"))

    # Parsed grades in enum order
    grade_values = [g.value for g in HadithGrade if g in grades]
    build_href = build_search_href(locale, query, search_type, grade_values)
    links = build_page_links(result.resolved_page, result.total_pages, build_href)

    return SearchResponse(
        query=query,
        type=search_type,
        locale=locale,
        page=result.resolved_page,
        page_size=result.page_size,
        total_count=result.total_count,
        total_pages=result.total_pages,
        quran_count=result.quran_count,
        hadith_count=result.hadith_count,
        quran_failed=result.quran_failed,
        hadith_failed=result.hadith_failed,
        summary=summarize(result, query, locale),
        results=[to_result_item(hit, locale) for hit in result.items],
        notices=notices,
        pagination=PaginationSchema.from_links(links),
    )


# =============================================================================
# Router
# =============================================================================

search_router = APIRouter(prefix="/v1", tags=["search"])


@search_router.get("/search", response_model=SearchResponse)
async def search(
    q: str = Query(default="", max_length=200, description="Search query"),
    type: SearchType = Query(default=SearchType.ALL, description="Sources to search"),
    page: int = Query(default=1, description="Page number; clamped to the valid range"),
    grade: list[str] = Query(default=[], description="Hadith grades to keep"),
    translation: str | None = Query(default=None, description="Translation edition"),
    lang: Locale = Query(default=Locale.EN),
    aggregator: SearchAggregator = Depends(get_search_aggregator),
) -> SearchResponse:
    """Search Quran and Hadith together.

    Results are Quran-first, then Hadith, each in upstream order. When one
    source fails the other's results are returned along with a notice; when
    both fail the response is a 502 naming both reasons.
    """
    return await run_search(
        aggregator,
        query=q,
        search_type=type,
        page=page,
        grade=grade,
        translation=translation,
        locale=lang,
    )


@search_router.get("/search/{slug}", response_model=SearchResponse)
async def search_by_slug(
    slug: str,
    type: SearchType = Query(default=SearchType.ALL),
    page: int = Query(default=1),
    lang: Locale = Query(default=Locale.EN),
    aggregator: SearchAggregator = Depends(get_search_aggregator),
) -> SearchResponse:
    """Search addressed by slug, e.g. /v1/search/patience-in-hardship."""
    return await run_search(
        aggregator,
        query=slug.replace("-", " "),
        search_type=type,
        page=page,
        grade=[],
        translation=None,
        locale=lang,
    )
