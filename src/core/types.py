"""Shared typed models.

This module defines immutable data models used by the extractor,
profile store, detector and extension layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.constants import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_MIN_MARGIN,
    DEFAULT_NGRAM_SIZES,
    DEFAULT_PROFILE_CAP,
    UNKNOWN_LANGUAGE_CODE,
)
from core.errors import LangRankConfigError


@dataclass(frozen=True)
class DetectorSettings:
    """Validated detection configuration.

    The n-gram sizes and cap must match the loaded profiles; a mismatch
    biases every score and is rejected when a detector is attached.

    Attributes:
        ngram_sizes: Sorted, distinct n-gram lengths to extract.
        cap: Maximum number of ranked n-grams kept per vector.
        confidence_threshold: Minimum best confidence for a confident result.
        min_margin: Minimum confidence gap between best and runner-up.
    """

    ngram_sizes: tuple[int, ...] = DEFAULT_NGRAM_SIZES
    cap: int = DEFAULT_PROFILE_CAP
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    min_margin: float = DEFAULT_MIN_MARGIN

    def __post_init__(self) -> None:
        object.__setattr__(self, "ngram_sizes", normalize_ngram_sizes(self.ngram_sizes))
        validate_cap(self.cap)
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise LangRankConfigError(
                f"Invalid confidence_threshold {self.confidence_threshold}: "
                "expected a value in [0, 1]."
            )
        if self.min_margin < 0.0:
            raise LangRankConfigError(
                f"Invalid min_margin {self.min_margin}: expected a non-negative value."
            )


@dataclass(frozen=True)
class LanguageScore:
    """Score of one candidate language for one text.

    Attributes:
        language: Profile language code.
        distance: Mean rank distance per query n-gram, in [0, cap].
        confidence: Distance mapped into [0, 1], higher is better.
    """

    language: str
    distance: float
    confidence: float


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of one detection call.

    Attributes:
        scores: Candidates sorted by descending confidence.
        language: Best language code or the unknown sentinel.
        confidence: Confidence of the best candidate.
        margin: Confidence gap between best candidate and runner-up.
        confident: Whether threshold and margin checks both passed.
        fallback_filter: Filter that eliminated all candidates, forcing
            unfiltered scoring, if any.
    """

    scores: tuple[LanguageScore, ...] = field(default_factory=tuple)
    language: str = UNKNOWN_LANGUAGE_CODE
    confidence: float = 0.0
    margin: float = 0.0
    confident: bool = False
    fallback_filter: str | None = None

    @property
    def best(self) -> LanguageScore | None:
        """Return the top-ranked score, or None for unknown results."""
        return self.scores[0] if self.scores else None

    @property
    def is_unknown(self) -> bool:
        """Return whether no candidate could be scored."""
        return self.language == UNKNOWN_LANGUAGE_CODE


def normalize_ngram_sizes(ngram_sizes: object) -> tuple[int, ...]:
    """Validate n-gram sizes and return them sorted and deduplicated.

    Args:
        ngram_sizes: Iterable of positive integers.

    Returns:
        Sorted tuple of distinct sizes.

    Raises:
        LangRankConfigError: If the set is empty or holds a non-positive size.
    """
    try:
        sizes = tuple(sorted(set(ngram_sizes)))  # type: ignore[call-overload]
    except TypeError as error:
        raise LangRankConfigError(
            f"Invalid ngram_sizes {ngram_sizes!r}: expected an iterable of integers."
        ) from error
    if not sizes:
        raise LangRankConfigError("Invalid ngram_sizes: at least one n-gram size is required.")
    for size in sizes:
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise LangRankConfigError(
                f"Invalid n-gram size {size!r}: expected a positive integer."
            )
    return sizes


def validate_cap(cap: object) -> None:
    """Reject caps that are not positive integers.

    Raises:
        LangRankConfigError: If cap is invalid.
    """
    if isinstance(cap, bool) or not isinstance(cap, int) or cap < 1:
        raise LangRankConfigError(f"Invalid cap {cap!r}: expected a positive integer.")
