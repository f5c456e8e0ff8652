"""Scoped persistence of multipart uploads to local temporary storage."""

from __future__ import annotations

import asyncio
import logging
import shutil
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import UploadFile

from completion_gateway.domain.entities import TemporaryUpload

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"


def _write(upload: UploadFile, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    upload.file.seek(0)
    with path.open("wb") as fh:
        shutil.copyfileobj(upload.file, fh)


def _remove(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Failed to delete temporary upload %s: %s", path, exc)


@asynccontextmanager
async def temporary_upload(
    upload: UploadFile, directory: Path
) -> AsyncIterator[TemporaryUpload]:
    """Persist *upload* under *directory* and delete it on every exit path.

    Deletion failures are logged and never replace the outcome of the
    request that owned the file.
    """
    path = directory / uuid.uuid4().hex
    try:
        await asyncio.to_thread(_write, upload, path)
        logger.debug("Stored upload %r at %s", upload.filename, path)
        yield TemporaryUpload(
            path=path,
            media_type=upload.content_type or DEFAULT_MEDIA_TYPE,
            filename=upload.filename,
        )
    finally:
        # A cancelled request must still release its file.
        await asyncio.shield(asyncio.to_thread(_remove, path))
