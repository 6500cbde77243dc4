"""Character n-gram extraction.

This module normalizes text into boundary-padded words and counts
sliding-window n-grams. Counting and ranking are split so a trainer
can aggregate counts over a whole corpus before ranking once.
"""

from __future__ import annotations

from collections import Counter
import unicodedata
from typing import Iterable, Iterator, Sequence

from core.constants import BOUNDARY_MARKER
from core.types import normalize_ngram_sizes, validate_cap
from ngrams.frequency_vector import FrequencyVector


def extract_vector(text: str, ngram_sizes: Sequence[int], cap: int) -> FrequencyVector:
    """Extract the ranked n-gram vector of a text.

    Args:
        text: Raw input text.
        ngram_sizes: N-gram lengths to extract.
        cap: Maximum number of ranked n-grams to keep.

    Returns:
        Frequency vector; empty when the text has no letters.

    Raises:
        LangRankConfigError: If sizes or cap are invalid.
    """
    sizes = normalize_ngram_sizes(ngram_sizes)
    return rank_counts(count_ngrams(text, sizes), sizes, cap)


def count_ngrams(
    text: str,
    ngram_sizes: Sequence[int],
    counts: Counter[str] | None = None,
) -> Counter[str]:
    """Count n-grams of a text, optionally adding to existing counts.

    Counter insertion order records first occurrence, which ranking
    uses to break ties deterministically.

    Args:
        text: Raw input text.
        ngram_sizes: N-gram lengths to extract.
        counts: Existing counts to update in place.

    Returns:
        The updated counter.
    """
    sizes = normalize_ngram_sizes(ngram_sizes)
    totals: Counter[str] = counts if counts is not None else Counter()
    for word in normalize_words(text):
        padded = f"{BOUNDARY_MARKER}{word}{BOUNDARY_MARKER}"
        totals.update(_window_ngrams(padded, sizes))
    return totals


def rank_counts(counts: Counter[str], ngram_sizes: Sequence[int], cap: int) -> FrequencyVector:
    """Rank counted n-grams and keep the top ``cap`` entries.

    Args:
        counts: N-gram counts in first-occurrence order.
        ngram_sizes: N-gram lengths used for counting.
        cap: Maximum number of entries to keep.

    Returns:
        Ranked frequency vector.
    """
    validate_cap(cap)
    ordered = sorted(counts.items(), key=lambda item: -item[1])
    ranked = [ngram for ngram, _ in ordered[:cap]]
    return FrequencyVector.from_ranked(ranked, ngram_sizes, cap)


def normalize_words(text: str) -> list[str]:
    """Lower-case text and split it into words of letters and their marks.

    Text is NFC-normalized first. Combining marks stay attached to the
    word they follow (Devanagari vowel signs, decomposed accents); every
    other non-letter character acts as a separator, so punctuation,
    digits and whitespace runs all collapse into one word boundary.

    Args:
        text: Raw input text.

    Returns:
        Lower-cased words in text order.
    """
    words: list[str] = []
    current: list[str] = []
    for character in unicodedata.normalize("NFC", text).lower():
        if character.isalpha() or (current and _is_combining_mark(character)):
            current.append(character)
        elif current:
            words.append("".join(current))
            current = []
    if current:
        words.append("".join(current))
    return words


def _is_combining_mark(character: str) -> bool:
    return unicodedata.category(character).startswith("M")


def _window_ngrams(padded_word: str, sizes: Iterable[int]) -> Iterator[str]:
    """Yield every n-gram of the requested sizes from one padded word."""
    word_length = len(padded_word)
    for size in sizes:
        for start in range(word_length - size + 1):
            ngram = padded_word[start : start + size]
            if ngram != BOUNDARY_MARKER:
                yield ngram
