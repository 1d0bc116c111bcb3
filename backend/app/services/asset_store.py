"""
Photo storage on the local filesystem.

Uploads are written under the public upload directory with a server-generated
name (upload time in milliseconds plus the original extension) and referenced
by clients through a relative path such as ``/uploads/1700000000000.jpg``.
"""

import os
import time
import logging
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from app.config import settings
from app.core.errors import AssetStoreError

logger = logging.getLogger(__name__)


@dataclass
class StagedUpload:
    """An upload already written to disk but not yet tied to a record."""

    filename: str


class AssetStore:
    def __init__(
        self,
        upload_dir: str = settings.UPLOAD_DIR,
        url_prefix: str = settings.UPLOAD_URL_PREFIX,
    ):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = "/" + url_prefix.strip("/")

    async def stage(self, upload: Optional[UploadFile]) -> Optional[StagedUpload]:
        """Write an upload to disk. Returns None when no file was sent."""
        if upload is None or not upload.filename:
            return None

        content = await upload.read()
        ext = Path(upload.filename).suffix.lower()

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            path = self._reserve(ext)
        except OSError as e:
            raise AssetStoreError(f"Failed to store upload {upload.filename}") from e

        try:
            with open(path, "wb") as f:
                f.write(content)
        except OSError as e:
            with suppress(OSError):
                path.unlink()
            raise AssetStoreError(f"Failed to store upload {upload.filename}") from e

        logger.info(f"Stored upload {upload.filename} as {path.name} ({len(content)} bytes)")
        return StagedUpload(filename=path.name)

    def finalize(self, staged: Optional[StagedUpload]) -> str:
        """Public reference of a staged upload, "" when there is none."""
        if staged is None:
            return ""
        return f"{self.url_prefix}/{staged.filename}"

    def remove(self, reference: str) -> None:
        """Delete the referenced file. A missing file is not an error."""
        if not reference:
            return

        path = self.resolve(reference)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.info(f"Photo {reference} already absent")
            return
        except OSError as e:
            raise AssetStoreError(f"Failed to remove photo {reference}") from e

        logger.info(f"Removed photo {reference}")

    def exists(self, reference: str) -> bool:
        if not reference:
            return False
        return self.resolve(reference).is_file()

    def resolve(self, reference: str) -> Path:
        """Map a public reference back to its file inside the upload directory."""
        name = reference
        if name.startswith(self.url_prefix + "/"):
            name = name[len(self.url_prefix) + 1 :]

        root = self.upload_dir.resolve()
        path = (root / name).resolve()
        if path.parent != root:
            raise AssetStoreError(f"Photo reference {reference} is outside the upload directory")
        return path

    def _reserve(self, ext: str) -> Path:
        # Exclusive create so two uploads in the same millisecond never share a file
        base = str(int(time.time() * 1000))
        attempt = 0
        while True:
            name = f"{base}{ext}" if attempt == 0 else f"{base}-{attempt}{ext}"
            path = self.upload_dir / name
            try:
                fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
            except FileExistsError:
                attempt += 1
                continue
            os.close(fd)
            return path
