"""Unit tests for the language detector."""

from __future__ import annotations

import pytest

from core.errors import LangRankConfigError
from core.types import DetectorSettings
from detection.detector import Detector
from profiles.profile_store import ProfileStore
from tests.sample_profiles import EN_SAMPLE, FR_SAMPLE, RU_SAMPLE, build_store


def test_detect_prefers_english_for_quick_brown_fox() -> None:
    """A short English phrase should beat French with a clear margin."""
    detector = Detector(build_store("en", "fr"))

    result = detector.detect("the quick brown fox")

    assert result.language == "en"
    assert result.confident is True
    assert result.confidence > detector.settings.confidence_threshold
    assert result.margin > detector.settings.min_margin
    assert [score.language for score in result.scores] == ["en", "fr"]


def test_detect_verbatim_training_text_is_a_perfect_match() -> None:
    """A training text scored against its own profile has zero distance."""
    detector = Detector(build_store("en", "fr"))

    result = detector.detect(FR_SAMPLE)

    assert result.language == "fr"
    assert result.confidence == 1.0 and result.confident is True


@pytest.mark.parametrize("text", ["", "   ", "\n\t ", "?!... 42"])
def test_detect_blank_input_is_unknown_and_not_confident(text: str) -> None:
    """Degenerate input never raises and is never confident."""
    detector = Detector(build_store("en", "fr"))

    result = detector.detect(text)

    assert result.is_unknown and result.confident is False and result.scores == ()


def test_detect_is_deterministic() -> None:
    """Repeated calls on the same store and text give identical results."""
    detector = Detector(build_store("en", "fr", "ru"))

    assert detector.detect("brown dog") == detector.detect("brown dog")


def test_detect_best_language_belongs_to_store() -> None:
    """The best candidate is always a store language or unknown."""
    detector = Detector(build_store("en", "fr"))

    for text in (EN_SAMPLE, FR_SAMPLE, RU_SAMPLE, "zzz qqq"):
        result = detector.detect(text)
        assert result.language in ("en", "fr", "unknown")


def test_detect_cyrillic_text_scores_latin_profiles_at_zero() -> None:
    """Profiles sharing no n-gram with the text get zero confidence."""
    detector = Detector(build_store("en", "fr", "ru"))

    result = detector.detect("парламента")

    assert result.language == "ru"
    assert [score.confidence for score in result.scores[1:]] == [0.0, 0.0]


def test_detect_restricts_candidates_to_requested_languages() -> None:
    """Language restrictions limit scoring to a subset of the store."""
    detector = Detector(build_store("en", "fr"))

    result = detector.detect(EN_SAMPLE, languages=["fr"])

    assert result.language == "fr" and len(result.scores) == 1


def test_detect_rejects_unknown_restriction() -> None:
    """Restricting to a language the store lacks is a configuration error."""
    detector = Detector(build_store("en"))

    with pytest.raises(LangRankConfigError):
        detector.detect(EN_SAMPLE, languages=["de"])


def test_detector_rejects_empty_store() -> None:
    """An empty store is a configuration error at attach time."""
    with pytest.raises(LangRankConfigError):
        Detector(ProfileStore())


def test_detector_rejects_cap_mismatch() -> None:
    """A cap differing from the profiles' cap must fail fast."""
    store = build_store("en", "fr", settings=DetectorSettings(cap=300))

    with pytest.raises(LangRankConfigError):
        Detector(store, DetectorSettings(cap=150))


def test_detector_rejects_ngram_size_mismatch() -> None:
    """N-gram sizes differing from the profiles' sizes must fail fast."""
    store = build_store("en", settings=DetectorSettings(ngram_sizes=(1, 2, 3)))

    with pytest.raises(LangRankConfigError):
        Detector(store)


def test_from_store_adopts_store_configuration() -> None:
    """from_store should reuse the sizes and cap of the loaded profiles."""
    store = build_store("en", "fr", settings=DetectorSettings(ngram_sizes=(1, 2, 3), cap=120))

    detector = Detector.from_store(store, confidence_threshold=0.5, min_margin=0.1)

    assert detector.settings == DetectorSettings((1, 2, 3), 120, 0.5, 0.1)


def test_score_languages_returns_sorted_scores() -> None:
    """Scores should be sorted by ascending distance."""
    detector = Detector(build_store("en", "fr", "ru"))

    scores = detector.score_languages(EN_SAMPLE)

    assert [score.language for score in scores][0] == "en"
    assert [score.distance for score in scores] == sorted(score.distance for score in scores)


def test_resolve_languages_keeps_store_order() -> None:
    """Restrictions resolve to store languages; empty means no restriction."""
    detector = Detector(build_store("en", "fr", "ru"))

    assert detector.resolve_languages(["ru", "en"]) == ("en", "ru")
    assert detector.resolve_languages([]) == ("en", "fr", "ru")
    assert detector.resolve_languages(None) == ("en", "fr", "ru")


def test_detect_all_applies_restriction_and_validates_it_eagerly() -> None:
    """Batch restrictions apply to every text and fail before iteration."""
    detector = Detector(build_store("en", "fr", "ru"))

    results = list(detector.detect_all([EN_SAMPLE, RU_SAMPLE], languages=["fr"]))

    assert [result.language for result in results] == ["fr", "fr"]
    with pytest.raises(LangRankConfigError):
        detector.detect_all([EN_SAMPLE], languages=["de"])
