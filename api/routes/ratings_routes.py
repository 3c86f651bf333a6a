"""Rating endpoints (customer token required)."""

from fastapi import APIRouter

from core.auth import CustomerId
from core.database import DatabaseDep
from schemas import DataResponse, RatingRecord, RatingRequest, RatingSummary
from services import ratings_service

router = APIRouter(
    prefix="/api/ratings",
    tags=["ratings"],
    responses={401: {"description": "Not authenticated"}},
)


@router.post(
    "/vendors/{vendor_id}",
    response_model=DataResponse[RatingSummary],
    responses={404: {"description": "Vendor not found"}},
)
async def rate_vendor(
    vendor_id: int, body: RatingRequest, customer_id: CustomerId, db: DatabaseDep
) -> DataResponse[RatingSummary]:
    """Rate a vendor 1-5. Rating again replaces the previous score."""
    summary = await ratings_service.rate(db, customer_id, "vendor", vendor_id, body)
    return DataResponse(data=summary)


@router.post(
    "/products/{product_id}",
    response_model=DataResponse[RatingSummary],
    responses={404: {"description": "Product not found"}},
)
async def rate_product(
    product_id: int, body: RatingRequest, customer_id: CustomerId, db: DatabaseDep
) -> DataResponse[RatingSummary]:
    summary = await ratings_service.rate(db, customer_id, "product", product_id, body)
    return DataResponse(data=summary)


@router.get("/mine", response_model=DataResponse[list[RatingRecord]])
async def my_ratings(
    customer_id: CustomerId, db: DatabaseDep
) -> DataResponse[list[RatingRecord]]:
    return DataResponse(data=await ratings_service.my_ratings(db, customer_id))
