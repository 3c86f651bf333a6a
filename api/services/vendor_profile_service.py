"""Vendor profile business logic for the /api/vendors/me routes.

Handles:
- Reading the profile with its JSON text columns decoded
- Full profile updates (required identity fields, defaults for the rest)
- Vendor type changes restricted to seller | service | both
- Verification requests and location updates
"""

from typing import Any

from core.database import Database
from core.errors import Conflict, NotFound, ValidationFailed
from core.json_columns import (
    VERIFICATION_DOCUMENT_FIELDS,
    decode_service_locations,
    decode_verification_documents,
    encode_json,
    encode_verification_documents,
)
from core.logger import get_logger
from models import VENDOR_TYPES
from repositories.update_builder import build_update
from repositories.vendor_repository import PROFILE_UPDATE_COLUMNS, VendorRepository
from schemas import (
    LocationUpdate,
    VendorProfile,
    VendorProfileUpdate,
    VendorTypeOnly,
    VendorTypeResult,
    VerificationRequest,
)
from services.coercion import is_blank, parse_float, parse_int_truncating

logger = get_logger(__name__)

VENDOR_NOT_FOUND = "Vendor not found"
EMAIL_TAKEN = "Email already registered"
REQUIRED_PROFILE_FIELDS = ("company_name", "phone", "location", "email")
DEFAULT_SERVICE_RADIUS_KM = 5
DEFAULT_LOCATION_NAME = "Updated location"
VERIFICATION_SUBMITTED = "your profile has been submitted for verification"
INVALID_VENDOR_TYPE = "vendor_type must be 'seller' | 'service' | 'both'"


def is_valid_vendor_type(value: Any) -> bool:
    """Exact, case-sensitive membership in the three vendor types."""
    return isinstance(value, str) and value in VENDOR_TYPES


def to_vendor_profile(row: dict[str, Any]) -> VendorProfile:
    data = dict(row)
    data["service_locations"] = decode_service_locations(data.get("service_locations"))
    data["verification_documents"] = decode_verification_documents(
        data.get("verification_documents")
    )
    return VendorProfile.model_validate(data)


def _blank_to_none(value: str | None) -> str | None:
    return None if is_blank(value) else value


def _optional_coordinate(value: Any) -> float | None:
    if is_blank(value):
        return None
    try:
        return parse_float(value)
    except ValueError:
        raise ValidationFailed("Invalid latitude or longitude") from None


def _service_radius(value: Any) -> int:
    if not value:
        return DEFAULT_SERVICE_RADIUS_KM
    try:
        radius = parse_int_truncating(value)
    except ValueError:
        raise ValidationFailed("Invalid service_radius_km") from None
    if radius < 0:
        raise ValidationFailed("Invalid service_radius_km")
    return radius


def profile_update_values(body: VendorProfileUpdate) -> dict[str, Any]:
    """Map a PATCH /me body onto vendor columns, applying defaults.

    Raises:
        ValidationFailed: A required field is missing/empty or a numeric
            field cannot be parsed.
    """
    if any(is_blank(getattr(body, field)) for field in REQUIRED_PROFILE_FIELDS):
        raise ValidationFailed("Missing required fields")

    return {
        "vendor_name": body.company_name,
        "vendor_email": body.email.strip().lower(),
        "phone": body.phone,
        "location": body.location,
        "logo_url": _blank_to_none(body.logo_url),
        "job_type": _blank_to_none(body.job_type),
        "vendor_description": _blank_to_none(body.vendor_description),
        "latitude": _optional_coordinate(body.latitude),
        "longitude": _optional_coordinate(body.longitude),
        "whatsapp_link": _blank_to_none(body.whatsapp_link),
        "service_radius_km": _service_radius(body.service_radius_km),
        "visiting_card_url": _blank_to_none(body.visiting_card_url),
        "shop_address": _blank_to_none(body.shop_address),
        "service_locations": (
            encode_json(body.service_locations) if body.service_locations else None
        ),
    }


async def get_profile(db: Database, vendor_id: int) -> VendorProfile:
    row = await VendorRepository(db).get_profile(vendor_id)
    if row is None:
        raise NotFound(VENDOR_NOT_FOUND)
    return to_vendor_profile(row)


async def update_profile(
    db: Database, vendor_id: int, body: VendorProfileUpdate
) -> VendorProfile:
    update_set = build_update(profile_update_values(body), PROFILE_UPDATE_COLUMNS)
    if not update_set:
        raise ValidationFailed("No fields to update")

    repo = VendorRepository(db)
    if await repo.email_taken(
        update_set.params["vendor_email"], exclude_vendor_id=vendor_id
    ):
        raise Conflict(EMAIL_TAKEN)

    affected = await repo.update_profile(vendor_id, update_set)
    if not affected:
        raise NotFound(VENDOR_NOT_FOUND)

    logger.info(
        "vendor.profile.updated", vendor_id=vendor_id, columns=list(update_set.columns)
    )
    return await get_profile(db, vendor_id)


async def get_vendor_type(db: Database, vendor_id: int) -> VendorTypeOnly:
    row = await VendorRepository(db).get_vendor_type(vendor_id)
    if row is None:
        raise NotFound(VENDOR_NOT_FOUND)
    return VendorTypeOnly(vendor_type=row["vendor_type"])


async def set_vendor_type(
    db: Database, vendor_id: int, vendor_type: Any
) -> VendorTypeResult:
    if not is_valid_vendor_type(vendor_type):
        raise ValidationFailed(INVALID_VENDOR_TYPE)

    affected = await VendorRepository(db).set_vendor_type(vendor_id, vendor_type)
    if not affected:
        raise NotFound(VENDOR_NOT_FOUND)

    logger.info("vendor.type.updated", vendor_id=vendor_id, vendor_type=vendor_type)
    return VendorTypeResult(vendor_id=vendor_id, vendor_type=vendor_type)


async def request_verification(
    db: Database, vendor_id: int, body: VerificationRequest
) -> str:
    """Store the submitted documents and mark the vendor pending review."""
    documents = {
        field: _blank_to_none(getattr(body, field))
        for field in VERIFICATION_DOCUMENT_FIELDS
    }
    if not any(documents.values()):
        raise ValidationFailed("Provide at least one verification item")

    affected = await VendorRepository(db).request_verification(
        vendor_id, encode_verification_documents(documents)
    )
    if not affected:
        raise NotFound(VENDOR_NOT_FOUND)

    logger.info(
        "vendor.verification.requested",
        vendor_id=vendor_id,
        documents=[field for field, value in documents.items() if value],
    )
    return VERIFICATION_SUBMITTED


async def update_location(
    db: Database, vendor_id: int, body: LocationUpdate
) -> VendorProfile:
    if not {"latitude", "longitude"} <= body.model_fields_set:
        raise ValidationFailed("latitude and longitude are required")

    try:
        latitude = parse_float(body.latitude)
        longitude = parse_float(body.longitude)
    except ValueError:
        raise ValidationFailed("Invalid latitude or longitude") from None

    location_name = body.location_name or DEFAULT_LOCATION_NAME
    affected = await VendorRepository(db).update_location(
        vendor_id, latitude, longitude, location_name
    )
    if not affected:
        raise NotFound(VENDOR_NOT_FOUND)

    logger.info(
        "vendor.location.updated",
        vendor_id=vendor_id,
        latitude=latitude,
        longitude=longitude,
        location_name=location_name,
    )
    return await get_profile(db, vendor_id)
