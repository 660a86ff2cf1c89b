"""
Quran Lookup Service

Fetches verses, whole surahs and free-text search matches from the Quran
provider and assembles them into VerseResult / ChapterView view models.

Failure policy:
- get_verse / get_chapter: out-of-range references and upstream 404 raise
  NotFoundError; any other gateway failure propagates.
- Transliteration comes with the verse (transliteration=true); a missing or
  empty value only omits the field.
- search_verses: a failed search call propagates, a failed per-match fetch
  drops that match only.
"""

import asyncio
import dataclasses
from typing import Any, Final

from src.clients.gateway import ContentGatewayProtocol
from src.core.exceptions import GatewayError, NotFoundError
from src.core.logging import get_logger
from src.lookup.models import (
    Chapter,
    ChapterVerse,
    ChapterView,
    SurahMeta,
    TranslationInfo,
    VerseResult,
)

logger = get_logger(__name__)

# =============================================================================
# Module Constants
# =============================================================================

SURAH_COUNT: Final[int] = 114
DEFAULT_TRANSLATION: Final[str] = "en.sahih"
MAX_SEARCH_MATCHES: Final[int] = 20

VERSE_CACHE_HINT: Final[int] = 86400
SEARCH_CACHE_HINT: Final[int] = 300

# Verses per surah, index 0 is Al-Fatiha
SURAH_VERSE_COUNTS: Final[tuple[int, ...]] = (
    7, 286, 200, 176, 120, 165, 206, 75, 129, 109, 123, 111, 43, 52, 99, 128,
    111, 110, 98, 135, 112, 78, 118, 64, 77, 227, 93, 88, 69, 60, 34, 30, 73,
    54, 45, 83, 182, 88, 75, 85, 54, 53, 89, 59, 37, 35, 38, 29, 18, 45, 60,
    49, 62, 55, 78, 96, 29, 22, 24, 13, 14, 11, 11, 18, 12, 12, 30, 52, 52,
    44, 28, 28, 20, 56, 40, 31, 50, 40, 46, 42, 29, 19, 36, 25, 22, 17, 19,
    26, 30, 20, 15, 21, 11, 8, 8, 19, 5, 8, 8, 11, 11, 8, 3, 9, 5, 4, 7, 3,
    6, 3, 5, 4, 5, 6,
)

DEFAULT_TRANSLATIONS: Final[tuple[TranslationInfo, ...]] = (
    TranslationInfo(identifier="en.sahih", name="Sahih International", language="en"),
    TranslationInfo(identifier="en.pickthall", name="Pickthall", language="en"),
    TranslationInfo(identifier="en.yusufali", name="Yusuf Ali", language="en"),
    TranslationInfo(identifier="en.asad", name="Muhammad Asad", language="en"),
)

# Parse failures on an upstream payload
_MALFORMED = (KeyError, TypeError, ValueError)


def verse_count(surah: int) -> int:
    """Number of verses in a surah.

    Raises:
        NotFoundError: When surah is outside 1-114
    """
    if not 1 <= surah <= SURAH_COUNT:
        raise NotFoundError(f"surah {surah}")
    return SURAH_VERSE_COUNTS[surah - 1]


def _optional_text(value: Any) -> str | None:
    """Best-effort text field: anything but a non-empty string is None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def check_reference(surah: int, verse: int) -> None:
    """Validate a surah:verse reference against the static verse table."""
    if not 1 <= verse <= verse_count(surah):
        raise NotFoundError(f"verse {surah}:{verse}")


class QuranLookupService:
    """Quran verse, chapter and search lookups over a ContentGateway."""

    def __init__(
        self,
        gateway: ContentGatewayProtocol,
        *,
        default_translation: str = DEFAULT_TRANSLATION,
        max_matches: int = MAX_SEARCH_MATCHES,
        max_concurrent_fetches: int = MAX_SEARCH_MATCHES,
    ) -> None:
        self._gateway = gateway
        self.default_translation = default_translation
        self.max_matches = max_matches
        self.max_concurrent_fetches = max_concurrent_fetches

    # -------------------------------------------------------------------------
    # Single verse
    # -------------------------------------------------------------------------

    async def get_verse(
        self,
        surah: int,
        verse: int,
        translation_id: str | None = None,
    ) -> VerseResult:
        """Fetch one verse with its translation and, when available, transliteration.

        Args:
            surah: Surah number (1-114)
            verse: Verse number within the surah
            translation_id: Translation edition, defaults to the service default

        Returns:
            VerseResult for the reference

        Raises:
            NotFoundError: Reference out of range or unknown upstream
            GatewayError: Any other upstream failure
        """
        check_reference(surah, verse)
        translation = translation_id or self.default_translation

        payload = await self._fetch_verse_payload(surah, verse, translation)
        return self._parse_verse(payload, f"/api/quran/{surah}/{verse}")

    async def _fetch_verse_payload(
        self, surah: int, verse: int, translation: str
    ) -> dict[str, Any]:
        path = f"/api/quran/{surah}/{verse}"
        try:
            return await self._gateway.fetch(
                path,
                VERSE_CACHE_HINT,
                {"translation": translation, "transliteration": "true"},
            )
        except GatewayError as e:
            if e.status == 404:
                raise NotFoundError(f"verse {surah}:{verse}") from e
            raise

    @staticmethod
    def _parse_surah(data: dict[str, Any]) -> SurahMeta:
        number = int(data["number"])
        return SurahMeta(
            number=number,
            name_arabic=data.get("name_arabic") or "",
            name_english=data.get("name_english") or "",
            name_english_translation=data.get("name_english_translation") or "",
            revelation_type=data.get("revelation_type") or "",
            verse_count=int(data.get("ayah_count") or verse_count(number)),
        )

    def _parse_verse(self, payload: dict[str, Any], path: str) -> VerseResult:
        try:
            meta = self._parse_surah(payload["surah"])
            verse = payload["verse"]
            return VerseResult(
                surah_number=meta.number,
                verse_number=int(verse["number_in_surah"]),
                arabic_text=verse["arabic"],
                translation_text=verse.get("translation") or None,
                transliteration_text=_optional_text(verse.get("transliteration")),
                juz=verse.get("juz"),
                page=verse.get("page"),
                surah=meta,
            )
        except _MALFORMED as e:
            raise GatewayError(502, path, provider="quran") from e

    # -------------------------------------------------------------------------
    # Whole chapter
    # -------------------------------------------------------------------------

    async def get_chapter(
        self,
        surah: int,
        translation_id: str | None = None,
    ) -> ChapterView:
        """Fetch every verse of a surah in Arabic and in one translation.

        Raises:
            NotFoundError: Surah out of range or unknown upstream
            GatewayError: Any other upstream failure
        """
        verse_count(surah)
        translation = translation_id or self.default_translation
        path = f"/api/quran/{surah}"

        try:
            payload = await self._gateway.fetch(
                path, VERSE_CACHE_HINT, {"translation": translation}
            )
        except GatewayError as e:
            if e.status == 404:
                raise NotFoundError(f"surah {surah}") from e
            raise

        try:
            meta = self._parse_surah(payload["surah"])
            verses = payload["verses"]
            arabic = [
                ChapterVerse(
                    number=int(v["number"]),
                    text=v["arabic"],
                    juz=v.get("juz"),
                    page=v.get("page"),
                )
                for v in verses
            ]
            translated = [
                ChapterVerse(
                    number=int(v["number"]),
                    text=v.get("translation") or "",
                    juz=v.get("juz"),
                    page=v.get("page"),
                )
                for v in verses
            ]
        except _MALFORMED as e:
            raise GatewayError(502, path, provider="quran") from e

        return ChapterView(
            arabic=Chapter(meta=meta, verses=arabic),
            translation=Chapter(meta=meta, verses=translated),
        )

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    async def search_verses(
        self,
        query: str,
        translation_id: str | None = None,
    ) -> list[VerseResult]:
        """Free-text verse search.

        The search call returns lightweight matches; each of the first
        max_matches is then fetched in full, concurrently. A match whose fetch
        fails is dropped and the rest are returned in upstream order.

        Raises:
            GatewayError: When the search call itself fails
        """
        translation = translation_id or self.default_translation
        path = "/api/search"

        data = await self._gateway.fetch(
            path,
            SEARCH_CACHE_HINT,
            {"q": query, "type": "quran", "translation": translation},
        )
        try:
            matches = list(data["results"]["verses"])[: self.max_matches]
        except _MALFORMED as e:
            raise GatewayError(502, path, provider="quran") from e

        limiter = asyncio.Semaphore(self.max_concurrent_fetches)
        fetched = await asyncio.gather(
            *(self._fetch_match(match, translation, limiter) for match in matches)
        )
        results = [verse for verse in fetched if verse is not None]

        logger.debug(
            "quran_search_completed",
            matches=len(matches),
            returned=len(results),
        )
        return results

    async def _fetch_match(
        self,
        match: dict[str, Any],
        translation: str,
        limiter: asyncio.Semaphore,
    ) -> VerseResult | None:
        """Fetch one search match in full; None when it cannot be fetched."""
        try:
            surah = int(match["surah_number"])
            verse = int(match["verse_number"])
            check_reference(surah, verse)
            async with limiter:
                payload = await self._fetch_verse_payload(surah, verse, translation)
            result = self._parse_verse(payload, f"/api/quran/{surah}/{verse}")
        except (GatewayError, NotFoundError, *_MALFORMED) as e:
            logger.warning(
                "verse_match_dropped",
                surah=match.get("surah_number") if isinstance(match, dict) else None,
                verse=match.get("verse_number") if isinstance(match, dict) else None,
                error=str(e),
            )
            return None

        if result.translation_text is None and match.get("translation"):
            result = dataclasses.replace(result, translation_text=match["translation"])
        return result

    # -------------------------------------------------------------------------
    # Translations
    # -------------------------------------------------------------------------

    async def get_available_translations(self) -> list[TranslationInfo]:
        """List translation editions offered by the provider.

        Raises:
            GatewayError: On upstream failure or a malformed listing
        """
        path = "/api/quran/translations"
        data = await self._gateway.fetch(path, VERSE_CACHE_HINT)
        try:
            return [
                TranslationInfo(
                    identifier=t["identifier"],
                    name=t["name"],
                    language=t["language"],
                    author=t.get("author"),
                )
                for t in data["translations"]
            ]
        except _MALFORMED as e:
            raise GatewayError(502, path, provider="quran") from e
