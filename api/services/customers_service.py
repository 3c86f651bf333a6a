"""Customer profile business logic."""

from core.database import Database
from core.errors import NotFound, ValidationFailed
from core.logger import get_logger
from repositories.customer_repository import UPDATE_COLUMNS, CustomerRepository
from repositories.update_builder import UNSET, build_update
from schemas import Customer, CustomerUpdate

logger = get_logger(__name__)

CUSTOMER_NOT_FOUND = "Customer not found"


async def get_customer(db: Database, customer_id: int) -> Customer:
    row = await CustomerRepository(db).get_by_id(customer_id)
    if row is None:
        raise NotFound(CUSTOMER_NOT_FOUND)
    return Customer.model_validate(row)


async def update_customer(
    db: Database, customer_id: int, body: CustomerUpdate
) -> Customer:
    """Write only the keys present in the body; explicit nulls clear a column."""
    candidates = {
        column: getattr(body, column) if column in body.model_fields_set else UNSET
        for column in ("name", "phone", "address")
    }
    update_set = build_update(candidates, UPDATE_COLUMNS)
    if not update_set:
        raise ValidationFailed("No fields to update")

    affected = await CustomerRepository(db).update(customer_id, update_set)
    if not affected:
        raise NotFound(CUSTOMER_NOT_FOUND)

    logger.info(
        "customer.profile.updated",
        customer_id=customer_id,
        columns=list(update_set.columns),
    )
    return await get_customer(db, customer_id)
