"""Upload store: save image uploads to disk and map /uploads references back to files."""

import logging
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, Protocol

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads/"


class UploadedFile(Protocol):
    """What the store needs from an upload (Starlette's UploadFile satisfies it)."""

    filename: str | None
    file: BinaryIO


def has_file(upload: UploadedFile | None) -> bool:
    """True when a file was actually chosen (browsers send an empty part otherwise)."""
    return upload is not None and bool(upload.filename)


class UploadStore:
    """Blob store backed by a local directory, served under /uploads/."""

    def __init__(self, root: str | Path, placeholder: str) -> None:
        self.root = Path(root)
        self.placeholder = placeholder

    def save(self, upload: UploadedFile) -> str:
        """
        Write the upload under a fresh name and return its /uploads/ reference.

        Only the original extension is kept; raises OSError if the write fails.
        """
        suffix = Path(upload.filename or "").suffix.lower()
        filename = f"{uuid.uuid4().hex}{suffix}"
        self.root.mkdir(parents=True, exist_ok=True)
        target = self.root / filename
        try:
            with target.open("wb") as out:
                shutil.copyfileobj(upload.file, out)
        except OSError:
            target.unlink(missing_ok=True)
            raise
        logger.info("Stored upload", extra={"upload_name": filename})
        return f"{UPLOADS_URL_PREFIX}{filename}"

    def resolve(self, upload: UploadedFile | None, fallback: str | None) -> str | None:
        """Saved reference when a named file was uploaded, else fallback."""
        if has_file(upload):
            return self.save(upload)
        return fallback

    def discard(self, reference: str) -> None:
        """Delete the file behind a /uploads/ reference, if it is one of ours."""
        if reference == self.placeholder or not reference.startswith(UPLOADS_URL_PREFIX):
            return
        found = self.locate(reference.removeprefix(UPLOADS_URL_PREFIX))
        if found is None:
            return
        try:
            found.unlink()
        except OSError:
            logger.warning("Could not remove orphaned upload", extra={"upload_name": found.name})
            return
        logger.info("Removed orphaned upload", extra={"upload_name": found.name})

    def locate(self, relative_path: str) -> Path | None:
        """Existing file for a path below /uploads/, or None (including paths escaping the root)."""
        root = self.root.resolve()
        candidate = (root / relative_path).resolve()
        if not candidate.is_relative_to(root) or not candidate.is_file():
            return None
        return candidate
