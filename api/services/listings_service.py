"""Vendor-owned product and service listings.

One set of functions serves both listing kinds; the ``ListingKind`` passed
in decides the table and column names.
"""

from typing import Any

from pydantic import BaseModel

from core.database import Database
from core.errors import NotFound, ValidationFailed
from core.logger import get_logger
from repositories.listing_repository import ListingKind, ListingRepository
from repositories.update_builder import UNSET, build_update

logger = get_logger(__name__)


def _not_found(kind: ListingKind) -> NotFound:
    return NotFound(f"{kind.label} not found")


async def list_listings(
    db: Database, kind: ListingKind, vendor_id: int
) -> list[dict[str, Any]]:
    return await ListingRepository(db, kind).list_for_vendor(vendor_id)


async def get_listing(
    db: Database, kind: ListingKind, vendor_id: int, listing_id: int
) -> dict[str, Any]:
    """A listing owned by ``vendor_id``; someone else's listing is a 404."""
    row = await ListingRepository(db, kind).get_for_vendor(vendor_id, listing_id)
    if row is None:
        raise _not_found(kind)
    return row


async def create_listing(
    db: Database, kind: ListingKind, vendor_id: int, body: BaseModel
) -> dict[str, Any]:
    values = body.model_dump(include=set(kind.writable_columns))
    row = await ListingRepository(db, kind).create(vendor_id, values)
    logger.info(
        "listing.created",
        kind=kind.name,
        vendor_id=vendor_id,
        listing_id=row[kind.id_column],
    )
    return row


async def update_listing(
    db: Database,
    kind: ListingKind,
    vendor_id: int,
    listing_id: int,
    body: BaseModel,
) -> dict[str, Any]:
    fields_set = body.model_fields_set
    candidates = {
        column: getattr(body, column) if column in fields_set else UNSET
        for column in sorted(kind.writable_columns)
    }
    update_set = build_update(candidates, kind.writable_columns)
    if not update_set:
        raise ValidationFailed("No fields to update")

    repo = ListingRepository(db, kind)
    affected = await repo.update(vendor_id, listing_id, update_set)
    if not affected:
        raise _not_found(kind)

    logger.info(
        "listing.updated",
        kind=kind.name,
        vendor_id=vendor_id,
        listing_id=listing_id,
        columns=list(update_set.columns),
    )
    return await get_listing(db, kind, vendor_id, listing_id)


async def delete_listing(
    db: Database, kind: ListingKind, vendor_id: int, listing_id: int
) -> str:
    affected = await ListingRepository(db, kind).delete(vendor_id, listing_id)
    if not affected:
        raise _not_found(kind)

    logger.info(
        "listing.deleted", kind=kind.name, vendor_id=vendor_id, listing_id=listing_id
    )
    return f"{kind.label} deleted"
