"""Offline profile training.

The trainer applies the runtime extraction algorithm to a whole corpus,
aggregating counts across every document before ranking once. Corpus
directories hold one subdirectory per language with UTF-8 text files.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Iterable

from core.constants import CORPUS_FILE_SUFFIX
from core.errors import LangRankTrainingError
from core.logging_config import get_logger
from core.types import DetectorSettings, normalize_ngram_sizes, validate_cap
from ngrams.extractor import count_ngrams, rank_counts
from profiles.language_profile import LanguageProfile
from profiles.profile_store import ProfileStore

_LOGGER = get_logger(__name__)


class ProfileTrainer:
    """Accumulate n-gram counts for one language and build its profile.

    Not thread-safe. Once ``build`` has been called the trainer is frozen.
    """

    def __init__(self, language_code: str, ngram_sizes: Iterable[int], cap: int) -> None:
        self.language_code = language_code
        self.ngram_sizes = normalize_ngram_sizes(ngram_sizes)
        validate_cap(cap)
        self.cap = cap
        self._counts: Counter[str] = Counter()
        self._documents = 0
        self._built = False

    def learn(self, text: str) -> None:
        """Add the n-gram counts of one document.

        Raises:
            LangRankTrainingError: If the profile has already been built.
        """
        if self._built:
            raise LangRankTrainingError(
                f"Profile '{self.language_code}' has already been built; "
                "create a new trainer to learn more text."
            )
        count_ngrams(text, self.ngram_sizes, self._counts)
        self._documents += 1

    def learn_all(self, texts: Iterable[str]) -> None:
        for text in texts:
            self.learn(text)

    def build(self) -> LanguageProfile:
        """Rank the aggregated counts and return the immutable profile.

        Raises:
            LangRankTrainingError: If no n-gram was learned.
        """
        if not self._counts:
            raise LangRankTrainingError(
                f"Cannot build profile '{self.language_code}': the corpus contains no letters."
            )
        self._built = True
        vector = rank_counts(self._counts, self.ngram_sizes, self.cap)
        return LanguageProfile(language_code=self.language_code, vector=vector)


def train_profile(
    language_code: str,
    texts: Iterable[str],
    settings: DetectorSettings | None = None,
) -> LanguageProfile:
    """Train one profile from in-memory texts.

    Args:
        language_code: Language of the corpus.
        texts: Corpus documents.
        settings: Extraction settings; defaults match ``DetectorSettings()``.

    Returns:
        Validated language profile.
    """
    resolved = settings or DetectorSettings()
    trainer = ProfileTrainer(language_code, resolved.ngram_sizes, resolved.cap)
    trainer.learn_all(texts)
    return trainer.build()


def train_profiles(corpus_dir: str | Path, settings: DetectorSettings | None = None) -> ProfileStore:
    """Train one profile per language subdirectory of a corpus.

    Args:
        corpus_dir: Directory whose subdirectories are named by language code
            and contain UTF-8 ``.txt`` files.
        settings: Extraction settings shared with the runtime detector.

    Returns:
        Store holding every trained profile.

    Raises:
        LangRankTrainingError: If the corpus is missing, empty, or unreadable.
    """
    corpus_path = Path(corpus_dir).expanduser()
    if not corpus_path.is_dir():
        raise LangRankTrainingError(
            f"Corpus directory {corpus_path} does not exist. "
            "Provide a directory with one subdirectory per language."
        )
    language_dirs = sorted(path for path in corpus_path.iterdir() if path.is_dir())
    if not language_dirs:
        raise LangRankTrainingError(
            f"Corpus directory {corpus_path} has no language subdirectories."
        )
    profiles = []
    for language_dir in language_dirs:
        profiles.append(
            train_profile(language_dir.name, _read_corpus_files(language_dir), settings)
        )
        _LOGGER.info("profile_trained", language=language_dir.name, source=str(language_dir))
    store = ProfileStore(profiles)
    _LOGGER.info("profiles_trained", languages=list(store.languages), corpus=str(corpus_path))
    return store


def _read_corpus_files(language_dir: Path) -> list[str]:
    texts: list[str] = []
    for file_path in sorted(language_dir.rglob(f"*{CORPUS_FILE_SUFFIX}")):
        try:
            texts.append(file_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as error:
            raise LangRankTrainingError(
                f"Failed to read corpus file {file_path}: {error}. "
                "Corpus files must be readable UTF-8 text."
            ) from error
    return texts
