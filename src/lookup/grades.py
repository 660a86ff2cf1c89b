"""
Hadith grade classification.

Upstream grade strings are free text ("Sahih (Darussalam)", "Da'if (weak)
per Al-Albani", "Hasan Sahih"). They are reduced to a HadithGrade by
case-insensitive substring match; the first matching rule wins. Strings
matching no rule (including "Mawdu") are Unknown.
"""

from collections.abc import Iterable
from typing import Final

from src.lookup.models import HadithGrade

# Ordered: a string matching several rules takes the earliest grade
_GRADE_RULES: Final[tuple[tuple[HadithGrade, tuple[str, ...]], ...]] = (
    (HadithGrade.SAHIH, ("sahih",)),
    (HadithGrade.HASAN, ("hasan",)),
    (HadithGrade.DAIF, ("da'if", "daif", "weak")),
)

# Filter values accepted from query strings, keyed by normalized spelling
_FILTER_ALIASES: Final[dict[str, HadithGrade]] = {
    "sahih": HadithGrade.SAHIH,
    "hasan": HadithGrade.HASAN,
    "daif": HadithGrade.DAIF,
    "mawdu": HadithGrade.MAWDU,
    "unknown": HadithGrade.UNKNOWN,
}


def classify_grade(raw: str | None) -> HadithGrade:
    """Classify a raw upstream grade string.

    Args:
        raw: Grade text from the provider, possibly None or empty

    Returns:
        The matching HadithGrade, UNKNOWN when nothing matches
    """
    if not raw:
        return HadithGrade.UNKNOWN

    normalized = raw.lower()
    for grade, needles in _GRADE_RULES:
        if any(needle in normalized for needle in needles):
            return grade
    return HadithGrade.UNKNOWN


def parse_grade_filter(values: Iterable[str]) -> frozenset[HadithGrade]:
    """Parse grade filter values such as ``["Sahih", "Daif"]``.

    Raises:
        ValueError: On a value that names no grade
    """
    grades: set[HadithGrade] = set()
    for value in values:
        normalized = value.strip().lower().replace("'", "").replace("’", "")
        if not normalized:
            continue
        try:
            grades.add(_FILTER_ALIASES[normalized])
        except KeyError:
            raise ValueError(f"Unknown hadith grade: {value!r}") from None
    return frozenset(grades)
