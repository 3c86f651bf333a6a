"""Vendor self-service profile endpoints (vendor token required)."""

from fastapi import APIRouter

from core.auth import VendorId
from core.database import DatabaseDep
from schemas import (
    DataResponse,
    LocationUpdate,
    MessageResponse,
    VendorProfile,
    VendorProfileUpdate,
    VendorTypeOnly,
    VendorTypeResult,
    VendorTypeUpdate,
    VerificationRequest,
)
from services import vendor_profile_service

router = APIRouter(
    prefix="/api/vendors",
    tags=["vendors"],
    responses={401: {"description": "Not authenticated"}},
)


@router.get(
    "/me",
    response_model=DataResponse[VendorProfile],
    responses={404: {"description": "Vendor not found"}},
)
async def get_my_profile(
    vendor_id: VendorId, db: DatabaseDep
) -> DataResponse[VendorProfile]:
    profile = await vendor_profile_service.get_profile(db, vendor_id)
    return DataResponse(data=profile)


@router.patch("/me", response_model=DataResponse[VendorProfile])
async def update_my_profile(
    vendor_id: VendorId,
    db: DatabaseDep,
    body: VendorProfileUpdate = VendorProfileUpdate(),
) -> DataResponse[VendorProfile]:
    """Replace the editable profile fields.

    company_name, phone, location and email are required. Optional fields
    that are left out are cleared; service_radius_km falls back to 5.
    """
    profile = await vendor_profile_service.update_profile(db, vendor_id, body)
    return DataResponse(data=profile)


@router.patch("/me/type", response_model=DataResponse[VendorTypeResult])
async def update_my_type(
    vendor_id: VendorId,
    db: DatabaseDep,
    body: VendorTypeUpdate = VendorTypeUpdate(),
) -> DataResponse[VendorTypeResult]:
    result = await vendor_profile_service.set_vendor_type(
        db, vendor_id, body.vendor_type
    )
    return DataResponse(data=result)


@router.get("/me/type", response_model=DataResponse[VendorTypeOnly])
async def get_my_type(
    vendor_id: VendorId, db: DatabaseDep
) -> DataResponse[VendorTypeOnly]:
    result = await vendor_profile_service.get_vendor_type(db, vendor_id)
    return DataResponse(data=result)


@router.post("/me/verify", response_model=MessageResponse)
async def request_verification(
    vendor_id: VendorId,
    db: DatabaseDep,
    body: VerificationRequest = VerificationRequest(),
) -> MessageResponse:
    """Submit verification documents; the profile moves to ``pending``."""
    message = await vendor_profile_service.request_verification(db, vendor_id, body)
    return MessageResponse(message=message)


@router.patch("/me/location", response_model=DataResponse[VendorProfile])
async def update_my_location(
    vendor_id: VendorId,
    db: DatabaseDep,
    body: LocationUpdate = LocationUpdate(),
) -> DataResponse[VendorProfile]:
    profile = await vendor_profile_service.update_location(db, vendor_id, body)
    return DataResponse(data=profile)
