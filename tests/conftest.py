"""
Shared fixtures: upstream payload builders and fake gateways.

Payload shapes mirror the Quran and Hadith provider contracts so services can
be exercised end to end over FakeContentGateway without network access.
"""

from collections.abc import Callable
from typing import Any

import pytest

from src.clients.gateway import FakeContentGateway


def _surah(number: int) -> dict[str, Any]:
    return {
        "number": number,
        "name_arabic": f"سورة {number}",
        "name_english": f"Surah {number}",
        "name_english_translation": f"Chapter {number}",
        "ayah_count": None,
        "revelation_type": "Meccan",
    }


@pytest.fixture
def verse_payload() -> Callable[..., dict[str, Any]]:
    """Build a /api/quran/{s}/{v} response."""

    def build(
        surah: int,
        verse: int,
        *,
        arabic: str | None = None,
        translation: str | None = "translation",
        transliteration: Any = None,
    ) -> dict[str, Any]:
        return {
            "surah": _surah(surah),
            "verse": {
                "number": verse,
                "number_in_surah": verse,
                "arabic": arabic if arabic is not None else f"آية {surah}:{verse}",
                "translation": translation,
                "transliteration": transliteration,
                "juz": 1,
                "page": 2,
            },
        }

    return build


@pytest.fixture
def chapter_payload() -> Callable[..., dict[str, Any]]:
    """Build a /api/quran/{s} response with n verses."""

    def build(surah: int, count: int) -> dict[str, Any]:
        return {
            "surah": {**_surah(surah), "ayah_count": count},
            "verses": [
                {
                    "number": n,
                    "arabic": f"آية {n}",
                    "translation": f"verse {n}",
                    "juz": 1,
                    "page": 1,
                }
                for n in range(1, count + 1)
            ],
        }

    return build


@pytest.fixture
def quran_search_payload() -> Callable[[list[tuple[int, int]]], dict[str, Any]]:
    """Build a /api/search response from (surah, verse) references."""

    def build(refs: list[tuple[int, int]]) -> dict[str, Any]:
        return {
            "results": {
                "verses": [
                    {
                        "surah_number": s,
                        "verse_number": v,
                        "surah_name_english": f"Surah {s}",
                        "surah_name_arabic": f"سورة {s}",
                        "arabic": "",
                        "translation": f"match {s}:{v}",
                        "juz": 1,
                    }
                    for s, v in refs
                ]
            }
        }

    return build


@pytest.fixture
def hadith_record() -> Callable[..., dict[str, Any]]:
    """Build one upstream hadith record."""

    def build(
        number: str | int,
        *,
        slug: str = "bukhari",
        grade: str | None = "Sahih",
        graded_by: str | None = "Al-Albani",
        arabic: str | None = "حديث",
    ) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": 1,
            "hadithNumber": str(number),
            "englishNarrator": "Narrated Abu Huraira:",
            "hadithEnglish": f"Hadith text {number}",
            "hadithArabic": arabic,
            "bookSlug": slug,
            "chapterId": "2",
            "chapter": {"id": 2, "chapterNumber": "2", "chapterEnglish": "Belief"},
            "grades": [],
        }
        if grade is not None:
            record["grades"] = [{"grade": grade, "graded_by": graded_by}]
        return record

    return build


@pytest.fixture
def hadith_list_payload() -> Callable[[list[dict[str, Any]]], dict[str, Any]]:
    """Wrap records in the provider's paginated envelope."""

    def build(records: list[dict[str, Any]]) -> dict[str, Any]:
        return {
            "status": 200,
            "hadiths": {
                "current_page": 1,
                "data": records,
                "total": len(records),
                "per_page": 20,
            },
        }

    return build


@pytest.fixture
def quran_gateway() -> FakeContentGateway:
    return FakeContentGateway()


@pytest.fixture
def hadith_gateway() -> FakeContentGateway:
    return FakeContentGateway()
