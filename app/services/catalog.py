"""
Catalog CRUD shared by devices and services.

Each operation takes the DB session and upload store explicitly and is bound
to one table through a CatalogResource. Store and upload failures are logged
and re-raised as CatalogError with a generic message for the client.
"""

import logging
from dataclasses import dataclass

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import Base, Device, Service
from app.schemas.catalog import (
    CatalogFields,
    DeviceFields,
    DeviceItem,
    DeviceListResponse,
    ServiceFields,
    ServiceItem,
    ServiceListResponse,
)
from app.services.storage import UploadedFile, UploadStore, has_file

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# Largest page or limit accepted; bigger values overflow the driver.
MAX_PAGING_VALUE = 2**31 - 1


class CatalogError(Exception):
    """Raised when a catalog operation cannot complete (store or upload failure)."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


@dataclass(frozen=True)
class CatalogResource:
    """Binds the generic CRUD operations to one table and its schemas."""

    name: str
    plural: str
    model: type[Base]
    fields_schema: type[CatalogFields]
    item_schema: type[BaseModel]
    list_schema: type[BaseModel]

    @property
    def label(self) -> str:
        return self.name.capitalize()


DEVICES = CatalogResource(
    name="device",
    plural="devices",
    model=Device,
    fields_schema=DeviceFields,
    item_schema=DeviceItem,
    list_schema=DeviceListResponse,
)

SERVICES = CatalogResource(
    name="service",
    plural="services",
    model=Service,
    fields_schema=ServiceFields,
    item_schema=ServiceItem,
    list_schema=ServiceListResponse,
)


@dataclass(frozen=True)
class CatalogPage:
    items: list[Base]
    total: int
    page: int
    limit: int


def parse_positive_int(raw: str | None, default: int) -> int:
    """Parse a query value as an int in 1..MAX_PAGING_VALUE; anything else yields default."""
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if 1 <= value <= MAX_PAGING_VALUE else default


def list_items(db: Session, resource: CatalogResource, page: int, limit: int) -> CatalogPage:
    """Return one page of rows ordered by id, plus the total row count."""
    model = resource.model
    offset = (page - 1) * limit
    try:
        rows = db.query(model).order_by(model.id).offset(offset).limit(limit).all()
        total = db.query(model).count()
    except SQLAlchemyError as e:
        logger.exception("Listing %s failed", resource.plural)
        raise CatalogError(f"Failed to fetch {resource.plural}", e) from e
    return CatalogPage(items=rows, total=total, page=page, limit=limit)


def _discard_new_upload(
    store: UploadStore, upload: UploadedFile | None, image: str | None
) -> None:
    # A file saved for a write that did not commit is referenced by no row.
    if has_file(upload) and image is not None:
        store.discard(image)


def create_item(
    db: Session,
    store: UploadStore,
    resource: CatalogResource,
    fields: CatalogFields,
    upload: UploadedFile | None,
) -> Base:
    """Insert a row; image is the saved upload or the placeholder reference."""
    image = None
    committed = False
    try:
        image = store.resolve(upload, fallback=store.placeholder)
        row = resource.model(**fields.column_values(), image=image)
        db.add(row)
        db.commit()
        committed = True
        db.refresh(row)
    except (SQLAlchemyError, OSError) as e:
        db.rollback()
        logger.exception("Creating %s failed", resource.name)
        if not committed:
            _discard_new_upload(store, upload, image)
        raise CatalogError(f"Failed to add {resource.name}", e) from e
    logger.info("%s created", resource.label, extra={"item_id": row.id})
    return row


def update_item(
    db: Session,
    store: UploadStore,
    resource: CatalogResource,
    item_id: int,
    fields: CatalogFields,
    upload: UploadedFile | None,
) -> int:
    """
    Replace every column of the row with the given id; returns rows affected.

    A new upload wins over the image reference sent with the fields. Missing
    ids are not an error: nothing is changed and 0 is returned.
    """
    model = resource.model
    image = None
    try:
        image = store.resolve(upload, fallback=fields.image)
        affected = (
            db.query(model)
            .filter(model.id == item_id)
            .update({**fields.column_values(), "image": image}, synchronize_session=False)
        )
        db.commit()
    except (SQLAlchemyError, OSError) as e:
        db.rollback()
        logger.exception("Updating %s %s failed", resource.name, item_id)
        _discard_new_upload(store, upload, image)
        raise CatalogError(f"Failed to update {resource.name}", e) from e
    if affected == 0:
        logger.info("%s %s not found; update was a no-op", resource.label, item_id)
    return affected


def delete_item(db: Session, resource: CatalogResource, item_id: int) -> int:
    """Delete the row with the given id; returns rows affected (0 when missing)."""
    model = resource.model
    try:
        affected = (
            db.query(model)
            .filter(model.id == item_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Deleting %s %s failed", resource.name, item_id)
        raise CatalogError(f"Failed to delete {resource.name}", e) from e
    return affected
