"""
Shared API Schemas

Pydantic response models for verses and hadiths, used by the search, Quran
and Hadith routers. Domain dataclasses are converted here and nowhere else.
"""

from enum import Enum

from pydantic import BaseModel

from src.lookup.models import HadithGrade, HadithResult, SurahMeta, VerseResult


class Locale(str, Enum):
    EN = "en"
    AR = "ar"


class SurahSchema(BaseModel):
    number: int
    name_arabic: str
    name_english: str
    name_english_translation: str = ""
    revelation_type: str = ""
    verse_count: int = 0

    @classmethod
    def from_meta(cls, meta: SurahMeta) -> "SurahSchema":
        return cls(
            number=meta.number,
            name_arabic=meta.name_arabic,
            name_english=meta.name_english,
            name_english_translation=meta.name_english_translation,
            revelation_type=meta.revelation_type,
            verse_count=meta.verse_count,
        )


class VerseSchema(BaseModel):
    """A verse as returned to API clients."""

    surah_number: int
    verse_number: int
    reference: str
    arabic_text: str
    translation_text: str | None = None
    transliteration_text: str | None = None
    juz: int | None = None
    page: int | None = None
    surah: SurahSchema
    href: str

    @classmethod
    def from_result(cls, verse: VerseResult, locale: Locale) -> "VerseSchema":
        return cls(
            surah_number=verse.surah_number,
            verse_number=verse.verse_number,
            reference=f"{verse.surah_number}:{verse.verse_number}",
            arabic_text=verse.arabic_text,
            translation_text=verse.translation_text,
            transliteration_text=verse.transliteration_text,
            juz=verse.juz,
            page=verse.page,
            surah=SurahSchema.from_meta(verse.surah),
            href=verse_href(locale, verse.surah_number, verse.verse_number),
        )


class HadithSchema(BaseModel):
    """A hadith as returned to API clients."""

    collection_slug: str
    hadith_number: str
    english_text: str
    arabic_text: str | None = None
    narrator: str | None = None
    grade: HadithGrade
    raw_grade: str | None = None
    graded_by: str | None = None
    chapter_ref: str | None = None
    href: str

    @classmethod
    def from_result(cls, hadith: HadithResult, locale: Locale) -> "HadithSchema":
        return cls(
            collection_slug=hadith.collection_slug,
            hadith_number=hadith.hadith_number,
            english_text=hadith.english_text,
            arabic_text=hadith.arabic_text,
            narrator=hadith.narrator,
            grade=hadith.grade,
            raw_grade=hadith.raw_grade,
            graded_by=hadith.graded_by,
            chapter_ref=hadith.chapter_ref,
            href=hadith_href(locale, hadith.collection_slug, hadith.hadith_number),
        )


def verse_href(locale: Locale, surah: int, verse: int) -> str:
    return f"/{locale.value}/quran/{surah}/{verse}"


def hadith_href(locale: Locale, collection: str, number: str) -> str:
    return f"/{locale.value}/hadith/{collection}/{number}"
