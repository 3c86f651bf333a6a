"""Public recommendation endpoints (rating + proximity ranking)."""

from fastapi import APIRouter

from core.database import DatabaseDep
from routes.nearby_routes import GeoSearchDep
from schemas import DataResponse, RecommendedProduct, RecommendedVendor
from services import recommendations_service

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.get("/vendors", response_model=DataResponse[list[RecommendedVendor]])
async def recommended_vendors(
    search: GeoSearchDep, db: DatabaseDep
) -> DataResponse[list[RecommendedVendor]]:
    """Nearby vendors, best blend of rating and closeness first."""
    return DataResponse(data=await recommendations_service.recommend_vendors(db, search))


@router.get("/products", response_model=DataResponse[list[RecommendedProduct]])
async def recommended_products(
    search: GeoSearchDep, db: DatabaseDep
) -> DataResponse[list[RecommendedProduct]]:
    return DataResponse(
        data=await recommendations_service.recommend_products(db, search)
    )
