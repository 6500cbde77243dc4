"""Immutable per-language n-gram profiles.

A profile is created offline by the trainer and consumed read-only by
detectors. Construction validates every invariant so a malformed
profile fails at load time instead of biasing scores later.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from core.constants import LANGUAGE_CODE_PATTERN
from core.errors import LangRankConfigError, ProfileFormatError
from ngrams.frequency_vector import FrequencyVector

_LANGUAGE_CODE_RE = re.compile(LANGUAGE_CODE_PATTERN)


@dataclass(frozen=True)
class LanguageProfile:
    """Statistical fingerprint of one language.

    Attributes:
        language_code: ISO 639 style language tag, e.g. ``en`` or ``pt-BR``.
        vector: Ranked n-gram vector of the training corpus.
    """

    language_code: str
    vector: FrequencyVector

    def __post_init__(self) -> None:
        if not isinstance(self.language_code, str) or not _LANGUAGE_CODE_RE.match(
            self.language_code
        ):
            raise ProfileFormatError(
                f"Invalid language code {self.language_code!r}: "
                "expected an ISO 639 code such as 'en' or 'pt-BR'."
            )
        if self.vector.is_empty():
            raise ProfileFormatError(
                f"Profile '{self.language_code}' has no n-gram entries. "
                "Retrain it from a non-empty corpus."
            )
        if len(self.vector) > self.vector.cap:
            raise ProfileFormatError(
                f"Profile '{self.language_code}' holds {len(self.vector)} entries "
                f"but declares cap {self.vector.cap}."
            )
        allowed_sizes = set(self.vector.ngram_sizes)
        for ngram in self.vector:
            if len(ngram) not in allowed_sizes:
                raise ProfileFormatError(
                    f"Profile '{self.language_code}' contains n-gram {ngram!r} of length "
                    f"{len(ngram)}, outside declared sizes {list(self.vector.ngram_sizes)}."
                )

    @property
    def ngram_sizes(self) -> tuple[int, ...]:
        return self.vector.ngram_sizes

    @property
    def cap(self) -> int:
        return self.vector.cap

    @classmethod
    def from_entries(
        cls,
        language_code: str,
        ngram_sizes: Sequence[int],
        cap: int,
        entries: Sequence[tuple[str, int]],
    ) -> "LanguageProfile":
        """Build a profile from serialized ``(ngram, rank)`` entries.

        Args:
            language_code: Profile language code.
            ngram_sizes: Declared n-gram sizes.
            cap: Declared cap.
            entries: N-gram and rank pairs in any order.

        Returns:
            Validated language profile.

        Raises:
            ProfileFormatError: If ranks are not unique and contiguous from 0,
                n-grams repeat, or any other profile invariant is violated.
        """
        ranked: list[str | None] = [None] * len(entries)
        for ngram, rank in entries:
            if isinstance(rank, bool) or not isinstance(rank, int):
                raise ProfileFormatError(
                    f"Profile '{language_code}' has non-integer rank {rank!r} for {ngram!r}."
                )
            if not 0 <= rank < len(entries) or ranked[rank] is not None:
                raise ProfileFormatError(
                    f"Profile '{language_code}' ranks must be unique and contiguous from 0; "
                    f"got rank {rank} for {ngram!r} among {len(entries)} entries."
                )
            ranked[rank] = ngram
        ngrams = [ngram for ngram in ranked if ngram is not None]
        if len(set(ngrams)) != len(ngrams):
            raise ProfileFormatError(f"Profile '{language_code}' lists the same n-gram twice.")
        try:
            vector = FrequencyVector.from_ranked(ngrams, ngram_sizes, cap)
        except LangRankConfigError as error:
            raise ProfileFormatError(f"Profile '{language_code}' is malformed: {error}") from error
        return cls(language_code=language_code, vector=vector)

    def entries(self) -> list[tuple[str, int]]:
        """Return ``(ngram, rank)`` pairs in rank order."""
        return [(ngram, rank) for rank, ngram in enumerate(self.vector)]
