"""Pydantic schemas for API request/response validation.

Every JSON response is an envelope: ``{"ok": true, "data": ...}`` or
``{"ok": true, "message": ...}`` on success, ``{"ok": false, "error": ...}``
on failure (see core.errors). ``/api/chat`` is the one exception and
answers ``{"reply": ...}``.

Several request fields are typed ``Any`` on purpose: their coercion rules
and error messages live in the service layer, not in pydantic.
"""

from datetime import datetime
from typing import Any, Generic, Literal, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)

T = TypeVar("T")

VendorType = Literal["seller", "service", "both"]


# --- Envelope ---------------------------------------------------------------


class DataResponse(BaseModel, Generic[T]):
    """Successful response carrying a payload."""

    ok: bool = True
    data: T


class MessageResponse(BaseModel):
    """Successful response carrying only a human-readable message."""

    ok: bool = True
    message: str


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str


# --- Vendor profile ---------------------------------------------------------


class VerificationDocuments(BaseModel):
    nid_no: str | None = None
    live_photo_url: str | None = None
    trade_license_id: str | None = None
    training_certificate: str | None = None


class VendorProfile(BaseModel):
    """A vendor as returned by ``/api/vendors/me``."""

    vendor_id: int
    company_name: str
    email: str
    phone: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    logo_url: str | None = None
    vendor_type: str | None = None
    rating: float | None = None
    job_type: str | None = None
    vendor_description: str | None = None
    whatsapp_link: str | None = None
    service_radius_km: int | None = None
    visiting_card_url: str | None = None
    shop_address: str | None = None
    service_locations: list[Any] | None = None
    verification_status: str | None = None
    verification_requested_at: datetime | None = None
    verification_documents: VerificationDocuments | None = None


class VendorProfileUpdate(BaseModel):
    """Body of PATCH /api/vendors/me.

    The four identity fields are required, but presence is checked by the
    service so the error reads "Missing required fields". Numeric phone
    numbers are accepted and kept as text.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    company_name: str | None = None
    phone: str | None = None
    location: str | None = None
    email: str | None = None
    logo_url: str | None = None
    job_type: str | None = None
    vendor_description: str | None = Field(
        default=None,
        validation_alias=AliasChoices("vendor_description", "Vendor_description"),
    )
    latitude: Any = None
    longitude: Any = None
    whatsapp_link: str | None = None
    service_radius_km: Any = None
    visiting_card_url: str | None = None
    shop_address: str | None = None
    service_locations: Any = None


class VendorTypeUpdate(BaseModel):
    vendor_type: Any = None


class VendorTypeResult(BaseModel):
    vendor_id: int
    vendor_type: VendorType


class VendorTypeOnly(BaseModel):
    vendor_type: str | None


class VerificationRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    nid_no: str | None = None
    live_photo_url: str | None = None
    trade_license_id: str | None = None
    training_certificate: str | None = None


class LocationUpdate(BaseModel):
    """Body of PATCH /api/vendors/me/location.

    ``latitude``/``longitude`` must be present as keys; their values are
    parsed by the service.
    """

    latitude: Any = None
    longitude: Any = None
    location_name: str | None = None


# --- Nearby / recommendations ----------------------------------------------


class NearbyVendor(BaseModel):
    vendor_id: int
    company_name: str
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    latitude: float
    longitude: float
    logo_url: str | None = None
    job_type: str | None = None
    vendor_type: str | None = None
    rating: float | None = None
    vendor_description: str | None = None
    distance_km: float


class NearbyProduct(BaseModel):
    product_id: int
    title: str
    description: str | None = None
    price_bdt: float | None = None
    category_slug: str | None = None
    image_url: str | None = None
    vendor_id: int
    vendor_name: str | None = None
    vendor_location: str | None = None
    vendor_phone: str | None = None
    latitude: float
    longitude: float
    rating: float | None = None
    distance_km: float


class NearbyService(BaseModel):
    service_id: int
    title: str
    description: str | None = None
    rate_bdt: float | None = None
    service_category_slug: str | None = None
    image_url: str | None = None
    vendor_id: int
    vendor_name: str | None = None
    vendor_location: str | None = None
    vendor_phone: str | None = None
    latitude: float
    longitude: float
    rating: float | None = None
    job_type: str | None = None
    distance_km: float


class RecommendedVendor(NearbyVendor):
    score: float


class RecommendedProduct(NearbyProduct):
    score: float


# --- Chat -------------------------------------------------------------------


class ChatRequest(BaseModel):
    message: Any = None


class ChatReply(BaseModel):
    reply: str


# --- Authentication ---------------------------------------------------------


class CustomerRegister(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    phone: str | None = Field(default=None, max_length=50)


class VendorRegister(BaseModel):
    company_name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    phone: str = Field(min_length=1, max_length=50)
    location: str | None = Field(default=None, max_length=255)
    vendor_type: Any = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class Customer(BaseModel):
    """Customer profile. Never includes the password hash."""

    customer_id: int
    name: str
    email: str
    phone: str | None = None
    address: str | None = None
    created_at: datetime | None = None


class CustomerAuthResult(BaseModel):
    token: str
    customer: Customer


class VendorSummary(BaseModel):
    vendor_id: int
    company_name: str
    email: str
    phone: str | None = None
    location: str | None = None
    vendor_type: str | None = None


class VendorAuthResult(BaseModel):
    token: str
    vendor: VendorSummary


class CustomerUpdate(BaseModel):
    """PATCH body; keys left out are untouched, explicit nulls are written."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("name cannot be null")
        return v


# --- Listings ---------------------------------------------------------------


class _ListingCommon(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    description: str | None = None
    image_url: str | None = None


class ProductCreate(_ListingCommon):
    title: str = Field(min_length=1, max_length=255)
    price_bdt: float = Field(ge=0, allow_inf_nan=False)
    category_slug: str | None = Field(default=None, max_length=100)


class ServiceCreate(_ListingCommon):
    title: str = Field(min_length=1, max_length=255)
    rate_bdt: float = Field(ge=0, allow_inf_nan=False)
    service_category_slug: str | None = Field(default=None, max_length=100)


class _ListingUpdate(_ListingCommon):
    title: str | None = Field(default=None, min_length=1, max_length=255)

    @model_validator(mode="after")
    def title_not_null(self):
        if "title" in self.model_fields_set and self.title is None:
            raise ValueError("title cannot be null")
        return self


class ProductUpdate(_ListingUpdate):
    price_bdt: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    category_slug: str | None = Field(default=None, max_length=100)


class ServiceUpdate(_ListingUpdate):
    rate_bdt: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    service_category_slug: str | None = Field(default=None, max_length=100)


class Product(BaseModel):
    product_id: int
    vendor_id: int
    title: str
    description: str | None = None
    price_bdt: float | None = None
    category_slug: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Service(BaseModel):
    service_id: int
    vendor_id: int
    title: str
    description: str | None = None
    rate_bdt: float | None = None
    service_category_slug: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# --- Ratings ----------------------------------------------------------------


class RatingRequest(BaseModel):
    score: int = Field(ge=1, le=5)
    comment: str | None = Field(default=None, max_length=2000)


class RatingSummary(BaseModel):
    target: Literal["vendor", "product"]
    target_id: int
    score: int
    average: float | None
    count: int


class RatingRecord(BaseModel):
    rating_id: int
    vendor_id: int | None = None
    product_id: int | None = None
    score: int
    comment: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# --- Lookups / health -------------------------------------------------------


class Categories(BaseModel):
    product_categories: list[str]
    service_categories: list[str]
    job_types: list[str]


class HealthResponse(BaseModel):
    ok: bool = True
    message: str = "Server is working"
    timestamp: datetime


class PingResponse(BaseModel):
    ok: bool = True
    where: str = "server"
