"""Registration and login endpoints for customers and vendors."""

from fastapi import APIRouter, Request, status

from core.database import DatabaseDep
from core.ratelimit import AUTH_LIMIT, limiter
from schemas import (
    CustomerAuthResult,
    CustomerRegister,
    DataResponse,
    LoginRequest,
    VendorAuthResult,
    VendorRegister,
)
from services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])
vendor_auth_router = APIRouter(prefix="/api/vendor", tags=["auth"])


@router.post(
    "/register",
    response_model=DataResponse[CustomerAuthResult],
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Email already registered"}},
)
@limiter.limit(AUTH_LIMIT)
async def register_customer(
    request: Request, body: CustomerRegister, db: DatabaseDep
) -> DataResponse[CustomerAuthResult]:
    result = await auth_service.register_customer(db, body)
    return DataResponse(data=result)


@router.post(
    "/login",
    response_model=DataResponse[CustomerAuthResult],
    responses={401: {"description": "Invalid email or password"}},
)
@limiter.limit(AUTH_LIMIT)
async def login_customer(
    request: Request, body: LoginRequest, db: DatabaseDep
) -> DataResponse[CustomerAuthResult]:
    result = await auth_service.login_customer(db, body)
    return DataResponse(data=result)


@vendor_auth_router.post(
    "/register",
    response_model=DataResponse[VendorAuthResult],
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Email already registered"}},
)
@limiter.limit(AUTH_LIMIT)
async def register_vendor(
    request: Request, body: VendorRegister, db: DatabaseDep
) -> DataResponse[VendorAuthResult]:
    result = await auth_service.register_vendor(db, body)
    return DataResponse(data=result)


@vendor_auth_router.post(
    "/login",
    response_model=DataResponse[VendorAuthResult],
    responses={401: {"description": "Invalid email or password"}},
)
@limiter.limit(AUTH_LIMIT)
async def login_vendor(
    request: Request, body: LoginRequest, db: DatabaseDep
) -> DataResponse[VendorAuthResult]:
    result = await auth_service.login_vendor(db, body)
    return DataResponse(data=result)
