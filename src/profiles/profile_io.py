"""Profile JSON Lines persistence helpers.

Each line holds one language record:
``{"language_code", "ngram_sizes", "cap", "entries": [[ngram, rank], ...]}``.
Files ending in ``.gz`` are gzip-compressed; a directory source reads
every profile file inside it in sorted order.
"""

from __future__ import annotations

import gzip
import json
import zlib
from pathlib import Path
from typing import IO, Any, Iterable, Mapping

from core.constants import COMPRESSED_PROFILE_FILE_SUFFIX, PROFILE_FILE_SUFFIX
from core.errors import LangRankLoadError, ProfileFormatError
from profiles.language_profile import LanguageProfile

ProfileSource = str | Path | IO[str]

_RECORD_KEYS = ("language_code", "ngram_sizes", "cap", "entries")


def read_profiles(source: ProfileSource) -> list[LanguageProfile]:
    """Read every profile record from a file, directory, or text stream.

    Args:
        source: Profile file path, directory path, or open text stream.

    Returns:
        Profiles in source order.

    Raises:
        LangRankLoadError: If the source is missing, unreadable or not JSON.
        ProfileFormatError: If a record violates the profile schema.
    """
    if isinstance(source, (str, Path)):
        source_path = Path(source).expanduser()
        if not source_path.exists():
            raise LangRankLoadError(
                f"Failed to read profiles at {source_path}: path does not exist. "
                "Provide an existing profile file or directory."
            )
        if source_path.is_dir():
            return _read_directory(source_path)
        return _read_file(source_path)
    try:
        return _read_lines(source, "<stream>")
    except (OSError, UnicodeDecodeError) as error:
        raise LangRankLoadError(
            f"Failed to read profiles from stream: {error}. "
            "Open the stream as UTF-8 text holding JSON Lines."
        ) from error


def write_profiles(profiles: Iterable[LanguageProfile], destination: str | Path | IO[str]) -> None:
    """Serialize profiles as JSON Lines.

    Args:
        profiles: Profiles to write, one line each.
        destination: Output file path (``.gz`` compresses) or text stream.
    """
    lines = [json.dumps(profile_to_dict(profile), ensure_ascii=False) + "\n" for profile in profiles]
    if not isinstance(destination, (str, Path)):
        destination.writelines(lines)
        return
    destination_path = Path(destination).expanduser()
    destination_path.parent.mkdir(parents=True, exist_ok=True)
    with _open_text(destination_path, "w") as handle:
        handle.writelines(lines)


def profile_to_dict(profile: LanguageProfile) -> dict[str, Any]:
    """Convert a profile into its serialized record."""
    return {
        "language_code": profile.language_code,
        "ngram_sizes": list(profile.ngram_sizes),
        "cap": profile.cap,
        "entries": [[ngram, rank] for ngram, rank in profile.entries()],
    }


def profile_from_dict(payload: Mapping[str, Any], location: str) -> LanguageProfile:
    """Deserialize one profile record.

    Args:
        payload: Parsed JSON object.
        location: Source description used in error messages.

    Returns:
        Validated language profile.

    Raises:
        ProfileFormatError: If fields are missing or mistyped.
    """
    missing = [key for key in _RECORD_KEYS if key not in payload]
    if missing:
        raise ProfileFormatError(
            f"Profile record at {location} is missing fields: {', '.join(missing)}."
        )
    language_code = payload["language_code"]
    ngram_sizes = payload["ngram_sizes"]
    raw_entries = payload["entries"]
    if not isinstance(ngram_sizes, list):
        raise ProfileFormatError(f"Profile record at {location}: 'ngram_sizes' must be a list.")
    if not isinstance(raw_entries, list):
        raise ProfileFormatError(f"Profile record at {location}: 'entries' must be a list.")
    entries: list[tuple[str, int]] = []
    for raw_entry in raw_entries:
        if (
            not isinstance(raw_entry, list)
            or len(raw_entry) != 2
            or not isinstance(raw_entry[0], str)
        ):
            raise ProfileFormatError(
                f"Profile record at {location}: entries must be [ngram, rank] pairs, "
                f"got {raw_entry!r}."
            )
        entries.append((raw_entry[0], raw_entry[1]))
    return LanguageProfile.from_entries(
        language_code=language_code,
        ngram_sizes=ngram_sizes,
        cap=payload["cap"],
        entries=entries,
    )


def is_profile_file(path: Path) -> bool:
    return path.is_file() and (
        path.name.endswith(PROFILE_FILE_SUFFIX) or path.name.endswith(COMPRESSED_PROFILE_FILE_SUFFIX)
    )


def _read_directory(directory: Path) -> list[LanguageProfile]:
    profiles: list[LanguageProfile] = []
    for file_path in sorted(directory.iterdir()):
        if is_profile_file(file_path):
            profiles.extend(_read_file(file_path))
    return profiles


def _read_file(file_path: Path) -> list[LanguageProfile]:
    try:
        with _open_text(file_path, "r") as handle:
            return _read_lines(handle, str(file_path))
    except (OSError, EOFError, UnicodeDecodeError, zlib.error) as error:
        raise LangRankLoadError(
            f"Failed to read profiles at {file_path}: {error}. "
            "Check file permissions and encoding (UTF-8 JSON Lines)."
        ) from error


def _read_lines(handle: IO[str], source_name: str) -> list[LanguageProfile]:
    profiles: list[LanguageProfile] = []
    for line_number, line in enumerate(handle, start=1):
        if not line.strip():
            continue
        location = f"{source_name}:{line_number}"
        try:
            payload = json.loads(line)
        except json.JSONDecodeError as error:
            raise LangRankLoadError(
                f"Failed to parse profile record at {location}: {error.msg}. "
                "Regenerate the profile file with the trainer."
            ) from error
        if not isinstance(payload, dict):
            raise LangRankLoadError(
                f"Failed to parse profile record at {location}: expected a JSON object."
            )
        profiles.append(profile_from_dict(payload, location))
    return profiles


def _open_text(path: Path, mode: str) -> IO[str]:
    if path.name.endswith(".gz"):
        return gzip.open(path, mode + "t", encoding="utf-8")
    return path.open(mode, encoding="utf-8")
