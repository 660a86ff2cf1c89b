"""
Hadith Lookup Service

Fetches hadith records from the Hadith provider and normalizes them into
HadithResult view models.

get_hadith and search_hadiths fail softly: any upstream problem becomes
"absent" (None) or "empty" ([]), because detail pages must render a 404 rather
than an error page. fetch_search is the strict variant used by the search
aggregator, which needs the failure itself to tell the user which source
degraded.
"""

from typing import Any, Final

from src.clients.gateway import ContentGatewayProtocol
from src.core.exceptions import GatewayError
from src.core.logging import get_logger
from src.lookup.grades import classify_grade
from src.lookup.models import HadithCollection, HadithGrade, HadithResult

logger = get_logger(__name__)

# =============================================================================
# Module Constants
# =============================================================================

DEFAULT_SEARCH_LIMIT: Final[int] = 20
HADITH_CACHE_HINT: Final[int] = 3600
SEARCH_CACHE_HINT: Final[int] = 300

HADITH_COLLECTIONS: Final[tuple[HadithCollection, ...]] = (
    HadithCollection(slug="bukhari", name="Sahih al-Bukhari", grade=HadithGrade.SAHIH),
    HadithCollection(slug="muslim", name="Sahih Muslim", grade=HadithGrade.SAHIH),
    HadithCollection(slug="abu-dawud", name="Sunan Abu Dawud", grade=HadithGrade.HASAN),
    HadithCollection(slug="tirmidhi", name="Jami at-Tirmidhi", grade=HadithGrade.HASAN),
    HadithCollection(slug="nasai", name="Sunan an-Nasa'i", grade=HadithGrade.HASAN),
    HadithCollection(slug="ibn-e-majah", name="Sunan Ibn Majah", grade=HadithGrade.HASAN),
)

_COLLECTIONS_BY_SLUG: Final[dict[str, HadithCollection]] = {
    c.slug: c for c in HADITH_COLLECTIONS
}

_MALFORMED = (KeyError, TypeError, ValueError, AttributeError)


def find_collection(slug: str) -> HadithCollection | None:
    return _COLLECTIONS_BY_SLUG.get(slug)


def normalize_hadith(
    record: dict[str, Any],
    collection_slug: str | None = None,
    *,
    fallback_to_collection: bool = False,
) -> HadithResult:
    """Build a HadithResult from one upstream record.

    The first entry of the record's grade list is authoritative. A record
    without grades is Unknown, unless fallback_to_collection is set: then it
    inherits its collection's catalogue grade when the collection is known.

    Args:
        record: Upstream hadith record
        collection_slug: Collection to assume when the record carries none
        fallback_to_collection: Grade ungraded records by their collection

    Returns:
        Normalized HadithResult

    Raises:
        KeyError: When the record has no hadith number
    """
    slug = record.get("bookSlug") or collection_slug or ""
    grades = record.get("grades") or []
    first = grades[0] if grades else {}

    raw_grade = first.get("grade") or None
    collection = find_collection(slug) if fallback_to_collection else None
    if raw_grade is not None:
        grade = classify_grade(raw_grade)
    elif collection is not None:
        grade = collection.grade
    else:
        grade = HadithGrade.UNKNOWN

    chapter = record.get("chapter") or {}
    chapter_ref = chapter.get("chapterEnglish") or record.get("chapterId") or None

    return HadithResult(
        collection_slug=slug,
        hadith_number=str(record["hadithNumber"]),
        english_text=record.get("hadithEnglish") or "",
        grade=grade,
        arabic_text=record.get("hadithArabic") or None,
        narrator=record.get("englishNarrator") or None,
        raw_grade=raw_grade,
        graded_by=first.get("graded_by") or None,
        chapter_ref=str(chapter_ref) if chapter_ref is not None else None,
    )


def _records(payload: Any) -> list[dict[str, Any]]:
    """Extract the record list from a ``{"hadiths": {"data": [...]}}`` payload."""
    hadiths = payload.get("hadiths") or {}
    return list(hadiths.get("data") or [])


class HadithLookupService:
    """Hadith detail and search lookups over a ContentGateway."""

    def __init__(
        self,
        gateway: ContentGatewayProtocol,
        *,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        self._gateway = gateway
        self.search_limit = search_limit

    async def get_hadith(
        self,
        collection_slug: str,
        hadith_number: str,
    ) -> HadithResult | None:
        """Fetch one hadith; None when it cannot be found or fetched."""
        path = f"/{collection_slug}/hadiths"
        try:
            payload = await self._gateway.fetch(
                path, HADITH_CACHE_HINT, {"hadithNumber": hadith_number}
            )
            records = _records(payload)
            if not records:
                return None
            return normalize_hadith(
                records[0], collection_slug, fallback_to_collection=True
            )
        except (GatewayError, *_MALFORMED) as e:
            logger.warning(
                "hadith_lookup_failed",
                collection=collection_slug,
                hadith_number=hadith_number,
                error=str(e),
            )
            return None

    async def fetch_search(self, query: str) -> list[HadithResult]:
        """Free-text hadith search that propagates failures.

        Raises:
            GatewayError: On upstream failure or a malformed payload
        """
        path = "/hadiths"
        payload = await self._gateway.fetch(
            path,
            SEARCH_CACHE_HINT,
            {"hadithEnglish": query, "limit": str(self.search_limit)},
        )
        try:
            return [normalize_hadith(record) for record in _records(payload)]
        except _MALFORMED as e:
            raise GatewayError(502, path, provider="hadith") from e

    async def search_hadiths(self, query: str) -> list[HadithResult]:
        """Free-text hadith search; empty on any failure."""
        try:
            return await self.fetch_search(query)
        except GatewayError as e:
            logger.warning("hadith_search_failed", query=query, error=str(e))
            return []
