"""Core constants used across LangRank modules.

This module centralizes defaults shared by extraction, training and detection.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_NGRAM_SIZES = (1, 2, 3, 4, 5)
DEFAULT_PROFILE_CAP = 300
DEFAULT_CONFIDENCE_THRESHOLD = 0.35
DEFAULT_MIN_MARGIN = 0.05
DEFAULT_BATCH_CHUNK_SIZE = 64
UNKNOWN_LANGUAGE_CODE = "unknown"
BOUNDARY_MARKER = "_"
PROFILE_FILE_SUFFIX = ".jsonl"
COMPRESSED_PROFILE_FILE_SUFFIX = ".jsonl.gz"
CORPUS_FILE_SUFFIX = ".txt"
LANGUAGE_CODE_PATTERN = r"^[a-z]{2,3}(-[A-Za-z0-9]{2,8})*$"
ENV_PROFILES = "LANGRANK_PROFILES"
ENV_CONFIDENCE_THRESHOLD = "LANGRANK_CONFIDENCE_THRESHOLD"
ENV_MIN_MARGIN = "LANGRANK_MIN_MARGIN"
