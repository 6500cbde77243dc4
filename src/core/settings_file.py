"""Typed YAML settings files for detector configuration.

This module loads and validates the YAML file accepted by ``--settings``.
One strict schema keeps CLI and SDK detection setups identical.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence, cast

from core.errors import LangRankConfigError, LangRankDependencyError
from core.types import DetectorSettings

_SETTINGS_KEYS = ("ngram_sizes", "cap", "confidence_threshold", "min_margin", "filters")


@dataclass(frozen=True)
class SettingsFile:
    """Validated settings file contents."""

    settings: DetectorSettings
    filters: tuple[str, ...] = field(default_factory=tuple)


def load_detector_settings(settings_path: str | Path) -> SettingsFile:
    """Load and validate a YAML detector settings file.

    Args:
        settings_path: File path to YAML settings.

    Returns:
        Detector settings plus the filter names to compose.

    Raises:
        LangRankDependencyError: If PyYAML is unavailable.
        LangRankConfigError: If the file is invalid or schema checks fail.
    """
    payload = _load_yaml_payload(settings_path)
    if not isinstance(payload, Mapping):
        raise LangRankConfigError(
            f"Invalid settings file: expected a mapping, got {type(payload).__name__}."
        )
    unknown_keys = sorted(str(key) for key in payload if key not in _SETTINGS_KEYS)
    if unknown_keys:
        raise LangRankConfigError(
            f"Unsupported settings keys: {', '.join(unknown_keys)}. "
            f"Allowed keys: {', '.join(_SETTINGS_KEYS)}."
        )
    defaults = DetectorSettings()
    settings = DetectorSettings(
        ngram_sizes=tuple(_int_list(payload.get("ngram_sizes", defaults.ngram_sizes), "ngram_sizes")),
        cap=_int_value(payload.get("cap", defaults.cap), "cap"),
        confidence_threshold=_float_value(
            payload.get("confidence_threshold", defaults.confidence_threshold),
            "confidence_threshold",
        ),
        min_margin=_float_value(payload.get("min_margin", defaults.min_margin), "min_margin"),
    )
    filters = tuple(_string_list(payload.get("filters", ()), "filters"))
    return SettingsFile(settings=settings, filters=filters)


def _load_yaml_payload(settings_path: str | Path) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise LangRankDependencyError(
            "YAML settings support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    settings_file = Path(settings_path).expanduser().resolve()
    if not settings_file.exists():
        raise LangRankConfigError(
            f"Settings file does not exist at {settings_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(settings_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise LangRankConfigError(
            f"Failed to read settings at {settings_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise LangRankConfigError(
            f"Failed to parse YAML settings at {settings_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    return payload


def _expect_sequence(value: object, key: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise LangRankConfigError(f"Settings field '{key}' must be a list, got {type(value).__name__}.")


def _int_list(value: object, key: str) -> list[int]:
    return [_int_value(item, key) for item in _expect_sequence(value, key)]


def _string_list(value: object, key: str) -> list[str]:
    items = _expect_sequence(value, key)
    for item in items:
        if not isinstance(item, str):
            raise LangRankConfigError(f"Settings field '{key}' must only contain strings.")
    return [str(item) for item in items]


def _int_value(value: object, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise LangRankConfigError(f"Settings field '{key}' must be an integer, got {value!r}.")
    return value


def _float_value(value: object, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LangRankConfigError(f"Settings field '{key}' must be a number, got {value!r}.")
    return float(value)
