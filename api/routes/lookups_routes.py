"""Public lookup lists for client-side filters."""

from fastapi import APIRouter

from core.database import DatabaseDep
from schemas import Categories, DataResponse
from services import lookups_service

router = APIRouter(prefix="/api/lookups", tags=["lookups"])


@router.get("/categories", response_model=DataResponse[Categories])
async def categories(db: DatabaseDep) -> DataResponse[Categories]:
    """Distinct product categories, service categories and vendor job types."""
    return DataResponse(data=await lookups_service.get_categories(db))


@router.get("/vendor-types", response_model=DataResponse[list[str]])
async def vendor_types() -> DataResponse[list[str]]:
    return DataResponse(data=lookups_service.get_vendor_types())
