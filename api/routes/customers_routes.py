"""Customer self-service endpoints (customer token required)."""

from fastapi import APIRouter

from core.auth import CustomerId
from core.database import DatabaseDep
from schemas import Customer, CustomerUpdate, DataResponse
from services import customers_service

router = APIRouter(
    prefix="/api/customer",
    tags=["customers"],
    responses={401: {"description": "Not authenticated"}},
)


@router.get("/me", response_model=DataResponse[Customer])
async def get_me(customer_id: CustomerId, db: DatabaseDep) -> DataResponse[Customer]:
    customer = await customers_service.get_customer(db, customer_id)
    return DataResponse(data=customer)


@router.patch("/me", response_model=DataResponse[Customer])
async def update_me(
    customer_id: CustomerId,
    db: DatabaseDep,
    body: CustomerUpdate = CustomerUpdate(),
) -> DataResponse[Customer]:
    """Partial update: omitted keys are untouched, explicit nulls clear."""
    customer = await customers_service.update_customer(db, customer_id, body)
    return DataResponse(data=customer)
