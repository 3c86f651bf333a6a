"""Public distance search endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from core.database import DatabaseDep
from schemas import DataResponse, NearbyProduct, NearbyService, NearbyVendor
from services import nearby_service
from services.nearby_service import GeoSearch

router = APIRouter(prefix="/api/nearby", tags=["nearby"])


def geo_search_params(
    latitude: str | None = None,
    longitude: str | None = None,
    radius_km: Annotated[str | None, Query(alias="radiusKm")] = None,
    category: str | None = None,
    limit: str | None = None,
) -> GeoSearch:
    """Query-string values arrive as text; coercion errors become 400s."""
    return nearby_service.parse_geo_search(
        latitude, longitude, radius_km=radius_km, limit=limit, category=category
    )


GeoSearchDep = Annotated[GeoSearch, Depends(geo_search_params)]


@router.get("/vendors", response_model=DataResponse[list[NearbyVendor]])
async def nearby_vendors(
    search: GeoSearchDep, db: DatabaseDep
) -> DataResponse[list[NearbyVendor]]:
    """Vendors within ``radiusKm`` (default 5), nearest first."""
    return DataResponse(data=await nearby_service.nearby_vendors(db, search))


@router.get("/products", response_model=DataResponse[list[NearbyProduct]])
async def nearby_products(
    search: GeoSearchDep, db: DatabaseDep
) -> DataResponse[list[NearbyProduct]]:
    return DataResponse(data=await nearby_service.nearby_products(db, search))


@router.get("/services", response_model=DataResponse[list[NearbyService]])
async def nearby_services(
    search: GeoSearchDep, db: DatabaseDep
) -> DataResponse[list[NearbyService]]:
    return DataResponse(data=await nearby_service.nearby_services(db, search))
