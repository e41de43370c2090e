"""Paginated CRUD routes for catalog resources (devices, services), behind the bearer token."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.api.auth import get_current_user
from app.api.static import get_upload_store
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.catalog import CatalogFields
from app.schemas.common import MessageResponse
from app.services import catalog
from app.services.catalog import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    CatalogError,
    CatalogResource,
    parse_positive_int,
)
from app.services.storage import UploadStore

logger = logging.getLogger(__name__)

IMAGE_FIELD = "image"


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


def _validate_fields(resource: CatalogResource, data: dict[str, Any]) -> CatalogFields:
    try:
        return resource.fields_schema.model_validate(data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail="Invalid input") from e


async def _read_submission(
    request: Request, resource: CatalogResource
) -> tuple[CatalogFields, UploadFile | None]:
    """
    Read resource fields and the optional image from a multipart form or JSON body.

    A file part named 'image' is the upload; a text part named 'image' is the
    existing reference passed through on update.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        try:
            body = await request.json()
        except ValueError as e:  # bad JSON or bad UTF-8
            raise HTTPException(status_code=400, detail="Invalid input") from e
        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="Invalid input")
        return _validate_fields(resource, body), None
    if content_type in ("multipart/form-data", "application/x-www-form-urlencoded"):
        form = await request.form()
        data: dict[str, Any] = {}
        upload = None
        for key, value in form.multi_items():
            if _is_upload_file(value):
                if key == IMAGE_FIELD and value.filename:
                    upload = value
                continue
            data[key] = value
        return _validate_fields(resource, data), upload
    if not content_type:
        # No body at all: every field is left empty.
        return _validate_fields(resource, {}), None
    raise HTTPException(
        status_code=415,
        detail="Content-Type must be multipart/form-data or application/json.",
    )


def build_router(resource: CatalogResource) -> APIRouter:
    """List/create/update/delete routes for one resource; mount under /<plural>."""
    router = APIRouter(dependencies=[Depends(get_current_user)])

    @router.get("", response_model=resource.list_schema)
    def list_resource(
        db: Annotated[Session, Depends(get_db)],
        page: str | None = None,
        limit: str | None = None,
    ) -> Any:
        """One page of rows; page and limit default to 1 and 10 when absent or invalid."""
        page_no = parse_positive_int(page, DEFAULT_PAGE)
        limit_no = parse_positive_int(limit, DEFAULT_LIMIT)
        try:
            result = catalog.list_items(db, resource, page_no, limit_no)
        except CatalogError as e:
            raise HTTPException(status_code=500, detail=e.message) from e
        items = [resource.item_schema.model_validate(row) for row in result.items]
        return resource.list_schema(
            **{resource.plural: items},
            total=result.total,
            page=result.page,
            limit=result.limit,
        )

    @router.post("", response_model=MessageResponse, status_code=201)
    async def create_resource(
        request: Request,
        db: Annotated[Session, Depends(get_db)],
        store: Annotated[UploadStore, Depends(get_upload_store)],
        user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> MessageResponse:
        """Create a row from form fields; without an image the placeholder is stored."""
        fields, upload = await _read_submission(request, resource)
        try:
            await run_in_threadpool(catalog.create_item, db, store, resource, fields, upload)
        except CatalogError as e:
            raise HTTPException(status_code=500, detail=e.message) from e
        logger.info("%s added", resource.label, extra={"user_id": user.id})
        return MessageResponse(message=f"{resource.label} added")

    @router.put("/{item_id}", response_model=MessageResponse)
    async def update_resource(
        item_id: int,
        request: Request,
        db: Annotated[Session, Depends(get_db)],
        store: Annotated[UploadStore, Depends(get_upload_store)],
        user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> MessageResponse:
        """
        Replace all fields of the row. A new image upload wins; otherwise the
        'image' form value is stored as sent. Unknown ids succeed without effect.
        """
        fields, upload = await _read_submission(request, resource)
        try:
            await run_in_threadpool(
                catalog.update_item, db, store, resource, item_id, fields, upload
            )
        except CatalogError as e:
            raise HTTPException(status_code=500, detail=e.message) from e
        logger.info(
            "%s updated", resource.label, extra={"user_id": user.id, "item_id": item_id}
        )
        return MessageResponse(message=f"{resource.label} updated")

    @router.delete("/{item_id}", response_model=MessageResponse)
    def delete_resource(
        item_id: int,
        db: Annotated[Session, Depends(get_db)],
        user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> MessageResponse:
        """Delete the row. Unknown ids succeed without effect."""
        try:
            catalog.delete_item(db, resource, item_id)
        except CatalogError as e:
            raise HTTPException(status_code=500, detail=e.message) from e
        logger.info(
            "%s deleted", resource.label, extra={"user_id": user.id, "item_id": item_id}
        )
        return MessageResponse(message=f"{resource.label} deleted")

    return router
