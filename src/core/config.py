"""Runtime configuration model for the LangRank CLI.

This module owns all environment variable parsing and validation.
Library code receives explicit settings instead of reading the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_MIN_MARGIN,
    ENV_CONFIDENCE_THRESHOLD,
    ENV_MIN_MARGIN,
    ENV_PROFILES,
)
from core.errors import LangRankConfigError


@dataclass(frozen=True)
class LangRankConfig:
    """Validated runtime configuration.

    Attributes:
        profiles_path: Default profile file or directory, if configured.
        confidence_threshold: Default confidence threshold.
        min_margin: Default minimum confidence margin.
    """

    profiles_path: Path | None
    confidence_threshold: float
    min_margin: float

    @classmethod
    def from_env(cls) -> "LangRankConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            LangRankConfigError: If environment values are invalid.
        """
        profiles_value = os.getenv(ENV_PROFILES)
        threshold = _parse_float(
            ENV_CONFIDENCE_THRESHOLD,
            os.getenv(ENV_CONFIDENCE_THRESHOLD, str(DEFAULT_CONFIDENCE_THRESHOLD)),
        )
        min_margin = _parse_float(ENV_MIN_MARGIN, os.getenv(ENV_MIN_MARGIN, str(DEFAULT_MIN_MARGIN)))
        return cls(
            profiles_path=Path(profiles_value).expanduser().resolve() if profiles_value else None,
            confidence_threshold=threshold,
            min_margin=min_margin,
        )


def _parse_float(variable: str, raw_value: str) -> float:
    """Parse a float environment value.

    Args:
        variable: Environment variable name, for error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed float.

    Raises:
        LangRankConfigError: If value cannot be parsed into float.
    """
    try:
        return float(raw_value)
    except ValueError as error:
        raise LangRankConfigError(
            f"Invalid {variable} value: "
            f"expected a number, got '{raw_value}'. "
            f"Set {variable} to a numeric value."
        ) from error
