"""Rank-distance scoring.

Distances compare ranks rather than raw frequencies, which bounds the
effect of corpus size differences between languages.
"""

from __future__ import annotations

from typing import Iterable

from core.types import DetectionResult, DetectorSettings, LanguageScore
from ngrams.frequency_vector import FrequencyVector
from profiles.language_profile import LanguageProfile


def rank_distance(query: FrequencyVector, profile: FrequencyVector) -> float:
    """Compute the mean out-of-place distance of a query against a profile.

    Each query n-gram contributes the absolute rank difference when the
    profile knows it, or ``cap`` when it does not.

    Args:
        query: Ranked n-grams of the text.
        profile: Ranked n-grams of a language.

    Returns:
        Total distance divided by the number of query n-grams, in [0, cap].
    """
    if query.is_empty():
        return float(profile.cap)
    penalty = profile.cap
    profile_ranks = profile.ranks
    total = 0
    for query_rank, ngram in enumerate(query):
        profile_rank = profile_ranks.get(ngram)
        total += penalty if profile_rank is None else abs(query_rank - profile_rank)
    return total / len(query)


def distance_to_confidence(distance: float, cap: int) -> float:
    """Map a mean distance onto [0, 1]; zero distance gives 1.0."""
    return min(1.0, max(0.0, 1.0 - distance / cap))


def score_profiles(
    query: FrequencyVector,
    profiles: Iterable[LanguageProfile],
) -> tuple[LanguageScore, ...]:
    """Score every profile and sort best first.

    Ties on distance are broken by language code so results are deterministic.
    """
    scores = []
    for profile in profiles:
        distance = rank_distance(query, profile.vector)
        scores.append(
            LanguageScore(
                language=profile.language_code,
                distance=distance,
                confidence=distance_to_confidence(distance, profile.cap),
            )
        )
    return tuple(sorted(scores, key=lambda score: (score.distance, score.language)))


def decide(
    scores: tuple[LanguageScore, ...],
    settings: DetectorSettings,
    fallback_filter: str | None = None,
) -> DetectionResult:
    """Build the detection result and apply the confidence policy.

    A result is confident only when the best confidence exceeds the
    threshold and its lead over the runner-up exceeds the minimum margin.

    Args:
        scores: Candidates sorted best first.
        settings: Threshold and margin configuration.
        fallback_filter: Filter whose elimination forced unfiltered scoring.

    Returns:
        Detection result; unknown when there is no candidate.
    """
    if not scores:
        return DetectionResult(fallback_filter=fallback_filter)
    best = scores[0]
    runner_up_confidence = scores[1].confidence if len(scores) > 1 else 0.0
    margin = best.confidence - runner_up_confidence
    confident = best.confidence > settings.confidence_threshold and margin > settings.min_margin
    return DetectionResult(
        scores=scores,
        language=best.language,
        confidence=best.confidence,
        margin=margin,
        confident=confident,
        fallback_filter=fallback_filter,
    )
