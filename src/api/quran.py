"""
Quran Endpoints

GET /v1/quran/translations      - translation editions
GET /v1/quran/{surah}           - whole surah, Arabic and translation side by side
GET /v1/quran/{surah}/{verse}   - one verse with translation and transliteration
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from src.api.deps import get_quran_service
from src.api.schemas import Locale, SurahSchema, VerseSchema, verse_href
from src.core.exceptions import GatewayError
from src.core.logging import get_logger
from src.lookup.quran import DEFAULT_TRANSLATIONS, SURAH_COUNT, QuranLookupService

logger = get_logger(__name__)

# =============================================================================
# Response Models
# =============================================================================


class TranslationSchema(BaseModel):
    identifier: str
    name: str
    language: str
    author: str | None = None


class ChapterVerseSchema(BaseModel):
    number: int
    arabic_text: str
    translation_text: str
    juz: int | None = None
    page: int | None = None
    href: str


class ChapterResponse(BaseModel):
    surah: SurahSchema
    translation: str
    verses: list[ChapterVerseSchema]
    previous_surah: int | None = None
    next_surah: int | None = None


class VerseResponse(BaseModel):
    verse: VerseSchema
    translation: str
    previous_href: str | None = None
    next_href: str | None = None


# =============================================================================
# Router
# =============================================================================

quran_router = APIRouter(prefix="/v1/quran", tags=["quran"])


@quran_router.get("/translations", response_model=list[TranslationSchema])
async def list_translations(
    service: QuranLookupService = Depends(get_quran_service),
) -> list[TranslationSchema]:
    """List translation editions; falls back to the built-in list when upstream fails."""
    try:
        translations = await service.get_available_translations()
    except GatewayError as e:
        logger.warning("translations_fallback", status=e.status, path=e.path)
        translations = list(DEFAULT_TRANSLATIONS)

    return [
        TranslationSchema(
            identifier=t.identifier,
            name=t.name,
            language=t.language,
            author=t.author,
        )
        for t in translations
    ]


@quran_router.get("/{surah}", response_model=ChapterResponse)
async def get_chapter(
    surah: int,
    translation: str | None = Query(default=None),
    lang: Locale = Query(default=Locale.EN),
    service: QuranLookupService = Depends(get_quran_service),
) -> ChapterResponse:
    """Read a whole surah. Unknown surahs are 404."""
    view = await service.get_chapter(surah, translation)
    meta = view.arabic.meta

    verses = [
        ChapterVerseSchema(
            number=arabic.number,
            arabic_text=arabic.text,
            translation_text=translated.text,
            juz=arabic.juz,
            page=arabic.page,
            href=verse_href(lang, meta.number, arabic.number),
        )
        for arabic, translated in zip(view.arabic.verses, view.translation.verses)
    ]

    return ChapterResponse(
        surah=SurahSchema.from_meta(meta),
        translation=translation or service.default_translation,
        verses=verses,
        previous_surah=surah - 1 if surah > 1 else None,
        next_surah=surah + 1 if surah < SURAH_COUNT else None,
    )


@quran_router.get("/{surah}/{verse}", response_model=VerseResponse)
async def get_verse(
    surah: int,
    verse: int,
    translation: str | None = Query(default=None),
    lang: Locale = Query(default=Locale.EN),
    service: QuranLookupService = Depends(get_quran_service),
) -> VerseResponse:
    """Read one verse. Out-of-range or unknown references are 404."""
    result = await service.get_verse(surah, verse, translation)

    return VerseResponse(
        verse=VerseSchema.from_result(result, lang),
        translation=translation or service.default_translation,
        previous_href=verse_href(lang, surah, verse - 1) if verse > 1 else None,
        next_href=(
            verse_href(lang, surah, verse + 1)
            if verse < result.surah.verse_count
            else None
        ),
    )
