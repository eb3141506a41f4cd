"""Deterministic mapping from ``(schema, worker_id)`` to a file path."""

from __future__ import annotations

from pathlib import Path

from core.exceptions import ValidationError


VIDEO_SUFFIX = ".mp4"
MAX_FILENAME_BYTES = 255
_FORBIDDEN_CHARS = ("/", "\\", "\x00")
_RESERVED_NAMES = {".", ".."}


def normalize_identifier(name: str, value: str | None) -> str:
    """Reject identifiers that are ambiguous or could escape their directory.

    Raises:
        ValidationError: If the identifier is empty, padded with whitespace,
            contains a path separator or NUL, or is ``.``/``..``.
    """
    cleaned = value or ""
    if not cleaned.strip():
        raise ValidationError(f"{name} is required", {"field": name})
    if cleaned != cleaned.strip():
        raise ValidationError(
            f"{name} must not have leading or trailing whitespace",
            {"field": name, "value": cleaned},
        )
    if any(char in cleaned for char in _FORBIDDEN_CHARS):
        raise ValidationError(
            f"{name} must not contain path separators",
            {"field": name, "value": cleaned},
        )
    if cleaned in _RESERVED_NAMES:
        raise ValidationError(f"{name} must not be '.' or '..'", {"field": name, "value": cleaned})
    return cleaned


def filename_for(schema: str, worker_id: str) -> str:
    """File name shared by storage and the download attachment."""
    return f"{schema}_w_{worker_id}_full{VIDEO_SUFFIX}"


def address_for(base_dir: Path, schema: str | None, worker_id: str | None) -> Path:
    """Return ``{base_dir}/{schema}/{schema}_w_{worker_id}_full.mp4``.

    Both identifiers are normalized first; the same pair always yields the
    same path, and that path always lies inside ``base_dir``.
    """
    schema = normalize_identifier("schema", schema)
    worker_id = normalize_identifier("worker_id", worker_id)

    filename = filename_for(schema, worker_id)
    if len(filename.encode("utf-8")) > MAX_FILENAME_BYTES:
        raise ValidationError(
            "schema and worker_id are too long",
            {"max_filename_bytes": str(MAX_FILENAME_BYTES)},
        )

    path = base_dir / schema / filename
    root = base_dir.resolve()
    if root not in path.resolve().parents:
        raise ValidationError("Resolved path escapes the storage directory", {"schema": schema})
    return path


__all__ = ["VIDEO_SUFFIX", "normalize_identifier", "filename_for", "address_for"]
