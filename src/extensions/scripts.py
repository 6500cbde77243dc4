"""Unicode writing-system heuristics.

Scripts are read from Unicode character names (``LATIN SMALL LETTER A``,
``CYRILLIC CAPITAL LETTER BE``...), so no block table has to be kept
in sync with new Unicode releases.
"""

from __future__ import annotations

import unicodedata
from collections import Counter
from typing import Mapping

_WIDTH_PREFIXES = ("FULLWIDTH", "HALFWIDTH")
_KANA_MARK = "KATAKANA-HIRAGANA"

_LATIN = ("LATIN",)
_CYRILLIC = ("CYRILLIC",)

LANGUAGE_SCRIPTS: Mapping[str, tuple[str, ...]] = {
    "bg": _CYRILLIC,
    "cs": _LATIN,
    "da": _LATIN,
    "de": _LATIN,
    "el": ("GREEK",),
    "en": _LATIN,
    "es": _LATIN,
    "et": _LATIN,
    "fi": _LATIN,
    "fr": _LATIN,
    "hu": _LATIN,
    "it": _LATIN,
    "lt": _LATIN,
    "lv": _LATIN,
    "nl": _LATIN,
    "pl": _LATIN,
    "pt": _LATIN,
    "ro": _LATIN,
    "sk": _LATIN,
    "sl": _LATIN,
    "sv": _LATIN,
    "ca": _LATIN,
    "hr": _LATIN,
    "tr": _LATIN,
    "la": _LATIN,
    "ru": _CYRILLIC,
    "uk": _CYRILLIC,
    "be": _CYRILLIC,
    "mk": _CYRILLIC,
    "sr": ("CYRILLIC", "LATIN"),
    "zh": ("CJK",),
    "ja": ("CJK", "HIRAGANA", "KATAKANA"),
    "ko": ("HANGUL", "CJK"),
    "ar": ("ARABIC",),
    "fa": ("ARABIC",),
    "ur": ("ARABIC",),
    "he": ("HEBREW",),
    "yi": ("HEBREW",),
    "hi": ("DEVANAGARI",),
    "mr": ("DEVANAGARI",),
    "ne": ("DEVANAGARI",),
    "th": ("THAI",),
    "hy": ("ARMENIAN",),
    "ka": ("GEORGIAN",),
}


def script_of(character: str) -> str | None:
    """Return the script name of a letter, or None for non-letters."""
    if not character.isalpha():
        return None
    words = unicodedata.name(character, "").split()
    if not words:
        return None
    if words[0] in _WIDTH_PREFIXES and len(words) > 1:
        return words[1]
    if words[0] == _KANA_MARK:
        return "KATAKANA"
    return words[0]


def script_shares(text: str) -> dict[str, float]:
    """Return the fraction of letters written in each script."""
    counts: Counter[str] = Counter()
    for character in text:
        script = script_of(character)
        if script is not None:
            counts[script] += 1
    total = sum(counts.values())
    if total == 0:
        return {}
    return {script: count / total for script, count in counts.most_common()}


def dominant_scripts(text: str, min_share: float) -> frozenset[str]:
    """Return scripts covering at least ``min_share`` of the letters."""
    return frozenset(
        script for script, share in script_shares(text).items() if share >= min_share
    )


def scripts_for_language(language_code: str) -> tuple[str, ...] | None:
    """Return the known scripts of a language, or None when unmapped.

    Region subtags are ignored, so ``pt-BR`` resolves like ``pt``.
    """
    return LANGUAGE_SCRIPTS.get(language_code.split("-", 1)[0])
