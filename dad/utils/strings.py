"""Accent- and case-insensitive text matching used by every search box."""

import unicodedata

# Letters NFKD does not decompose into base letter + combining mark
_FOLDED_LETTERS = str.maketrans({
    "ø": "o", "Ø": "O",
    "œ": "oe", "Œ": "OE",
    "æ": "ae", "Æ": "AE",
    "ł": "l", "Ł": "L",
    "đ": "d", "Đ": "D",
    "ð": "d", "Ð": "D",
    "þ": "th", "Þ": "TH",
    "ħ": "h", "Ħ": "H",
    "ı": "i",
    "ß": "ss",
})


def strip_accents(text: str | None) -> str:
    """Return ``text`` with diacritics removed ("Łódź" → "Lodz", "Cœur" → "Coeur")."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text.translate(_FOLDED_LETTERS))
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize(text: str | None) -> str:
    """Strip accents and fold case."""
    return strip_accents(text).casefold()


def contains_without_accents(haystack: str | None, needle: str | None) -> bool:
    """True if ``needle`` occurs in ``haystack``, ignoring accents and case.

    The empty needle is contained in anything, the empty haystack included.
    """
    return normalize(needle) in normalize(haystack)
