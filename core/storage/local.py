from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from core.exceptions import NotFoundError, StorageError
from core.logging_config import get_logger
from core.storage import StoredVideo
from core.storage.addressing import address_for, normalize_identifier


CHUNK_SIZE = 1024 * 1024

log = get_logger("storage")


class LocalVideoStore:
    """Videos on the local filesystem, one directory per schema."""

    def __init__(self, root: Path) -> None:
        self.root = root
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                f"Could not create storage directory: {root}",
                {"path": str(root)},
            ) from exc

    def save(self, schema: str, worker_id: str, source: BinaryIO) -> StoredVideo:
        target = address_for(self.root, schema, worker_id)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".upload-", suffix=".part")
            try:
                with os.fdopen(fd, "wb") as out:
                    shutil.copyfileobj(source, out, CHUNK_SIZE)
                    size = out.tell()
                os.chmod(tmp_name, 0o644)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(
                f"Could not store video at {target}",
                {"path": str(target)},
            ) from exc

        log.info("Stored video {path} ({size} bytes)", path=str(target), size=size)
        return StoredVideo(
            schema=normalize_identifier("schema", schema),
            worker_id=normalize_identifier("worker_id", worker_id),
            path=target,
        )

    def locate(self, schema: str, worker_id: str) -> StoredVideo:
        target = address_for(self.root, schema, worker_id)
        if not target.is_file():
            raise NotFoundError(
                "video not found",
                {"schema": schema, "worker_id": worker_id},
            )
        return StoredVideo(
            schema=normalize_identifier("schema", schema),
            worker_id=normalize_identifier("worker_id", worker_id),
            path=target,
        )


__all__ = ["LocalVideoStore"]
