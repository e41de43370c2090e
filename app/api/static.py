"""Uploaded images under /uploads and the single-page frontend for every other non-API path."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from app.core.config import get_settings
from app.services.storage import UploadStore

router = APIRouter()

SPA_INDEX = "index.html"


def get_upload_store() -> UploadStore:
    """Dependency: the upload store configured by UPLOADS_DIR and PLACEHOLDER_IMAGE."""
    settings = get_settings()
    return UploadStore(settings.UPLOADS_DIR, placeholder=settings.PLACEHOLDER_IMAGE)


def get_public_dir() -> Path:
    """Dependency: directory holding the built frontend."""
    return Path(get_settings().PUBLIC_DIR)


@router.get("/uploads/{file_path:path}", include_in_schema=False)
def get_upload(
    file_path: str,
    store: Annotated[UploadStore, Depends(get_upload_store)],
) -> FileResponse:
    """Serve a previously uploaded image."""
    found = store.locate(file_path)
    if found is None:
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(found)


@router.get("/{full_path:path}", include_in_schema=False)
def get_frontend(
    full_path: str,
    public_dir: Annotated[Path, Depends(get_public_dir)],
) -> FileResponse:
    """
    Serve a built frontend asset, or index.html so client-side routing can
    take over. Unknown /api paths stay 404.
    """
    if full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not Found")
    root = public_dir.resolve()
    if full_path:
        asset = (root / full_path).resolve()
        if asset.is_relative_to(root) and asset.is_file():
            return FileResponse(asset)
    index = root / SPA_INDEX
    if not index.is_file():
        raise HTTPException(status_code=404, detail="Frontend not built")
    return FileResponse(index)
