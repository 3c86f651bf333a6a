"""CRUD endpoints for a vendor's own products and services.

Both routers are produced by ``build_listing_router`` so the two resources
cannot drift apart.
"""

from typing import Any

from fastapi import APIRouter, status
from pydantic import BaseModel

from core.auth import VendorId
from core.database import DatabaseDep
from repositories.listing_repository import PRODUCT, SERVICE, ListingKind
from schemas import (
    DataResponse,
    MessageResponse,
    Product,
    ProductCreate,
    ProductUpdate,
    Service,
    ServiceCreate,
    ServiceUpdate,
)
from services import listings_service


def build_listing_router(
    kind: ListingKind,
    prefix: str,
    item_model: type[BaseModel],
    create_model: type[BaseModel],
    update_model: type[BaseModel],
) -> APIRouter:
    router = APIRouter(
        prefix=prefix,
        tags=[kind.table],
        responses={401: {"description": "Not authenticated"}},
    )
    not_found = {404: {"description": f"{kind.label} not found"}}

    @router.get("", response_model=DataResponse[list[item_model]])
    async def list_mine(vendor_id: VendorId, db: DatabaseDep) -> Any:
        rows = await listings_service.list_listings(db, kind, vendor_id)
        return DataResponse[list[item_model]](data=rows)

    @router.post(
        "",
        response_model=DataResponse[item_model],
        status_code=status.HTTP_201_CREATED,
    )
    async def create(vendor_id: VendorId, body: create_model, db: DatabaseDep) -> Any:
        row = await listings_service.create_listing(db, kind, vendor_id, body)
        return DataResponse[item_model](data=row)

    @router.get(
        "/{listing_id}", response_model=DataResponse[item_model], responses=not_found
    )
    async def get_one(listing_id: int, vendor_id: VendorId, db: DatabaseDep) -> Any:
        row = await listings_service.get_listing(db, kind, vendor_id, listing_id)
        return DataResponse[item_model](data=row)

    @router.patch(
        "/{listing_id}", response_model=DataResponse[item_model], responses=not_found
    )
    async def update(
        listing_id: int, vendor_id: VendorId, body: update_model, db: DatabaseDep
    ) -> Any:
        row = await listings_service.update_listing(
            db, kind, vendor_id, listing_id, body
        )
        return DataResponse[item_model](data=row)

    @router.delete(
        "/{listing_id}", response_model=MessageResponse, responses=not_found
    )
    async def delete(
        listing_id: int, vendor_id: VendorId, db: DatabaseDep
    ) -> MessageResponse:
        message = await listings_service.delete_listing(db, kind, vendor_id, listing_id)
        return MessageResponse(message=message)

    return router


products_router = build_listing_router(
    PRODUCT, "/api/products", Product, ProductCreate, ProductUpdate
)
services_router = build_listing_router(
    SERVICE, "/api/services", Service, ServiceCreate, ServiceUpdate
)
