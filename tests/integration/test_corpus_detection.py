"""End-to-end tests: train on fixture corpora, save, reload and detect."""

from __future__ import annotations

import pytest

from detection.detector import Detector
from extensions.filters import ScriptFilter
from extensions.registry import compose
from profiles.profile_store import ProfileStore
from profiles.training import train_profiles
from tests.fixture_paths import corpus_text, fixture_path

LANGUAGES = ("de", "en", "fr", "ru")


@pytest.fixture(scope="module")
def detector(tmp_path_factory) -> Detector:
    output_path = tmp_path_factory.mktemp("profiles") / "profiles.jsonl.gz"
    train_profiles(fixture_path("corpus")).save(output_path)
    return Detector(ProfileStore.load(output_path))


@pytest.mark.parametrize("language", LANGUAGES)
def test_training_text_is_detected_exactly(detector: Detector, language: str) -> None:
    """Training text should match its own profile with zero distance."""
    result = detector.detect(corpus_text(language))

    assert result.language == language
    assert result.confidence == 1.0
    assert result.confident


def test_batch_detection_matches_single_detection(detector: Detector) -> None:
    """Parallel batches should agree with one-by-one detection."""
    texts = [corpus_text(language) for language in LANGUAGES] * 5

    batch = list(detector.detect_all(texts, max_workers=3))

    assert batch == [detector.detect(text) for text in texts]


def test_composed_detector_keeps_exact_matches(detector: Detector) -> None:
    """The script filter should never hide the right answer."""
    composed = compose(detector, [ScriptFilter()])

    results = [composed.detect(corpus_text(language)) for language in LANGUAGES]

    assert [result.language for result in results] == list(LANGUAGES)


def _corpus_lines(language: str) -> list[str]:
    return [line for line in corpus_text(language).splitlines() if line.strip()]


@pytest.mark.parametrize("language", LANGUAGES)
def test_single_line_excerpts_rank_their_language_first(detector: Detector, language: str) -> None:
    """Even one sentence of training text should put its language first."""
    results = [detector.detect(line) for line in _corpus_lines(language)]

    assert all(result.language == language for result in results)
    assert all(result.margin > 0.05 for result in results)


@pytest.mark.parametrize("language", LANGUAGES)
def test_three_line_excerpts_are_detected_confidently(detector: Detector, language: str) -> None:
    """Excerpts of three consecutive corpus lines clear the default threshold."""
    lines = _corpus_lines(language)
    excerpts = [" ".join(lines[start : start + 3]) for start in range(len(lines) - 2)]

    results = [detector.detect(excerpt) for excerpt in excerpts]

    assert excerpts
    assert all(result.language == language and result.confident for result in results)
