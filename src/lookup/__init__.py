"""Quran and Hadith lookup services and their view models."""

from src.lookup.grades import classify_grade, parse_grade_filter
from src.lookup.hadith import HADITH_COLLECTIONS, HadithLookupService
from src.lookup.models import (
    Chapter,
    ChapterVerse,
    ChapterView,
    HadithCollection,
    HadithGrade,
    HadithResult,
    SurahMeta,
    TranslationInfo,
    VerseResult,
)
from src.lookup.quran import DEFAULT_TRANSLATIONS, QuranLookupService

__all__ = [
    "DEFAULT_TRANSLATIONS",
    "HADITH_COLLECTIONS",
    "Chapter",
    "ChapterVerse",
    "ChapterView",
    "HadithCollection",
    "HadithGrade",
    "HadithLookupService",
    "HadithResult",
    "QuranLookupService",
    "SurahMeta",
    "TranslationInfo",
    "VerseResult",
    "classify_grade",
    "parse_grade_filter",
]
