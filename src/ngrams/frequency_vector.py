"""Immutable rank-ordered n-gram vectors."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Sequence

from core.types import normalize_ngram_sizes, validate_cap


@dataclass(frozen=True)
class FrequencyVector:
    """Ranked n-gram table where rank 0 is the most frequent n-gram.

    Attributes:
        ngrams: N-grams ordered by rank.
        ngram_sizes: N-gram lengths the vector was extracted with.
        cap: Maximum number of entries the vector may hold.
    """

    ngrams: tuple[str, ...]
    ngram_sizes: tuple[int, ...]
    cap: int
    _ranks: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ngram_sizes", normalize_ngram_sizes(self.ngram_sizes))
        validate_cap(self.cap)
        ranks = {ngram: rank for rank, ngram in enumerate(self.ngrams)}
        object.__setattr__(self, "_ranks", MappingProxyType(ranks))

    @classmethod
    def from_ranked(
        cls,
        ranked_ngrams: Sequence[str],
        ngram_sizes: Sequence[int],
        cap: int,
    ) -> "FrequencyVector":
        """Build a vector from n-grams already sorted by rank."""
        return cls(ngrams=tuple(ranked_ngrams), ngram_sizes=tuple(ngram_sizes), cap=cap)

    @property
    def ranks(self) -> Mapping[str, int]:
        """Read-only n-gram to rank mapping."""
        return self._ranks

    def rank_of(self, ngram: str) -> int | None:
        """Return the rank of an n-gram, or None when absent."""
        return self._ranks.get(ngram)

    def is_empty(self) -> bool:
        return not self.ngrams

    def __len__(self) -> int:
        return len(self.ngrams)

    def __contains__(self, ngram: object) -> bool:
        return ngram in self._ranks

    def __iter__(self) -> Iterator[str]:
        return iter(self.ngrams)
