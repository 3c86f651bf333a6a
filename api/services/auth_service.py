"""Registration and login for customers and vendors."""

from core.auth import CUSTOMER_ROLE, VENDOR_ROLE, create_access_token
from core.database import Database
from core.errors import Conflict, Unauthorized, ValidationFailed
from core.logger import get_logger
from core.passwords import hash_password, verify_password
from repositories.customer_repository import CustomerRepository
from repositories.vendor_repository import VendorRepository
from schemas import (
    Customer,
    CustomerAuthResult,
    CustomerRegister,
    LoginRequest,
    VendorAuthResult,
    VendorRegister,
    VendorSummary,
)
from services.coercion import is_blank
from services.vendor_profile_service import (
    EMAIL_TAKEN,
    INVALID_VENDOR_TYPE,
    is_valid_vendor_type,
)

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
DEFAULT_VENDOR_TYPE = "seller"


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def register_customer(db: Database, body: CustomerRegister) -> CustomerAuthResult:
    repo = CustomerRepository(db)
    email = normalize_email(body.email)
    if await repo.email_taken(email):
        raise Conflict(EMAIL_TAKEN)

    row = await repo.create(
        name=body.name.strip(),
        email=email,
        password_hash=hash_password(body.password),
        phone=body.phone or None,
    )
    customer = Customer.model_validate(row)
    logger.info("customer.registered", customer_id=customer.customer_id)
    return CustomerAuthResult(
        token=create_access_token(customer.customer_id, CUSTOMER_ROLE),
        customer=customer,
    )


async def login_customer(db: Database, body: LoginRequest) -> CustomerAuthResult:
    row = await CustomerRepository(db).get_credentials(normalize_email(body.email))
    if row is None or not verify_password(body.password, row.pop("password_hash")):
        logger.info("customer.login.failed")
        raise Unauthorized(INVALID_CREDENTIALS)

    customer = Customer.model_validate(row)
    logger.info("customer.login", customer_id=customer.customer_id)
    return CustomerAuthResult(
        token=create_access_token(customer.customer_id, CUSTOMER_ROLE),
        customer=customer,
    )


async def register_vendor(db: Database, body: VendorRegister) -> VendorAuthResult:
    vendor_type = DEFAULT_VENDOR_TYPE if is_blank(body.vendor_type) else body.vendor_type
    if not is_valid_vendor_type(vendor_type):
        raise ValidationFailed(INVALID_VENDOR_TYPE)

    repo = VendorRepository(db)
    email = normalize_email(body.email)
    if await repo.email_taken(email):
        raise Conflict(EMAIL_TAKEN)

    row = await repo.create(
        company_name=body.company_name.strip(),
        email=email,
        password_hash=hash_password(body.password),
        phone=body.phone,
        location=body.location or None,
        vendor_type=vendor_type,
    )
    vendor = VendorSummary.model_validate(row)
    logger.info("vendor.registered", vendor_id=vendor.vendor_id, vendor_type=vendor_type)
    return VendorAuthResult(
        token=create_access_token(vendor.vendor_id, VENDOR_ROLE),
        vendor=vendor,
    )


async def login_vendor(db: Database, body: LoginRequest) -> VendorAuthResult:
    row = await VendorRepository(db).get_credentials(normalize_email(body.email))
    if row is None or not verify_password(body.password, row.pop("password_hash")):
        logger.info("vendor.login.failed")
        raise Unauthorized(INVALID_CREDENTIALS)

    vendor = VendorSummary.model_validate(row)
    logger.info("vendor.login", vendor_id=vendor.vendor_id)
    return VendorAuthResult(
        token=create_access_token(vendor.vendor_id, VENDOR_ROLE),
        vendor=vendor,
    )
