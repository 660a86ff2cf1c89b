"""
Lookup Models

View models assembled by the Quran and Hadith lookup services. Plain
dataclasses; the API layer converts them to Pydantic response schemas.
"""

from dataclasses import dataclass, field
from enum import Enum


class HadithGrade(str, Enum):
    """Authenticity classification of a hadith."""

    SAHIH = "Sahih"
    HASAN = "Hasan"
    DAIF = "Da'if"
    MAWDU = "Mawdu"
    UNKNOWN = "Unknown"


@dataclass(frozen=True, slots=True)
class SurahMeta:
    """Surah-level metadata shared by every verse of the surah.

    Attributes:
        number: Surah number (1-114)
        name_arabic: Arabic name
        name_english: Transliterated English name
        name_english_translation: English meaning of the name
        revelation_type: "Meccan" or "Medinan" (empty when upstream omits it)
        verse_count: Number of verses in the surah
    """

    number: int
    name_arabic: str
    name_english: str
    name_english_translation: str = ""
    revelation_type: str = ""
    verse_count: int = 0


@dataclass(frozen=True, slots=True)
class VerseResult:
    """One Quranic verse with its translation."""

    surah_number: int
    verse_number: int
    arabic_text: str
    surah: SurahMeta
    translation_text: str | None = None
    transliteration_text: str | None = None
    juz: int | None = None
    page: int | None = None

    @property
    def key(self) -> tuple[int, int]:
        return (self.surah_number, self.verse_number)


@dataclass(frozen=True, slots=True)
class ChapterVerse:
    number: int
    text: str
    juz: int | None = None
    page: int | None = None


@dataclass(frozen=True, slots=True)
class Chapter:
    """A whole surah in one edition (Arabic or a translation)."""

    meta: SurahMeta
    verses: list[ChapterVerse] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ChapterView:
    """Arabic and translated chapter; verses line up index by index."""

    arabic: Chapter
    translation: Chapter


@dataclass(frozen=True, slots=True)
class TranslationInfo:
    identifier: str
    name: str
    language: str
    author: str | None = None


@dataclass(frozen=True, slots=True)
class HadithResult:
    """One hadith record, normalized from the Hadith provider.

    Attributes:
        collection_slug: Collection identifier (e.g., "bukhari")
        hadith_number: Number within the collection; a string because some
            collections use identifiers like "12a"
        english_text: English text of the hadith
        grade: Classified grade
        arabic_text: Arabic text when the collection provides it
        narrator: Narrator line
        raw_grade: Upstream grade string the classification came from
        graded_by: Scholar who issued the grade
        chapter_ref: Chapter title (or id when no title is given)
    """

    collection_slug: str
    hadith_number: str
    english_text: str
    grade: HadithGrade = HadithGrade.UNKNOWN
    arabic_text: str | None = None
    narrator: str | None = None
    raw_grade: str | None = None
    graded_by: str | None = None
    chapter_ref: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.collection_slug, self.hadith_number)


@dataclass(frozen=True, slots=True)
class HadithCollection:
    slug: str
    name: str
    grade: HadithGrade
