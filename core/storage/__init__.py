"""Storage abstraction for uploaded videos (local filesystem)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Protocol


@dataclass(frozen=True)
class StoredVideo:
    schema: str
    worker_id: str
    path: Path

    @property
    def filename(self) -> str:
        return self.path.name


class VideoStore(Protocol):
    def save(self, schema: str, worker_id: str, source: BinaryIO) -> StoredVideo:
        ...

    def locate(self, schema: str, worker_id: str) -> StoredVideo:
        ...


__all__ = ["StoredVideo", "VideoStore"]
