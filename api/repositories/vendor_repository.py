"""Vendor repository for database operations."""

from typing import Any

from core.database import Database
from repositories.update_builder import UpdateSet, build_update
from repositories.utils import log_slow_query

PROFILE_COLUMNS = """
    vendor_id,
    vendor_name AS company_name,
    vendor_email AS email,
    phone,
    location,
    latitude,
    longitude,
    logo_url,
    vendor_type,
    rating,
    job_type,
    vendor_description,
    whatsapp_link,
    service_radius_km,
    visiting_card_url,
    shop_address,
    service_locations,
    verification_status,
    verification_requested_at,
    verification_documents
"""

SUMMARY_COLUMNS = """
    vendor_id,
    vendor_name AS company_name,
    vendor_email AS email,
    phone,
    location,
    vendor_type
"""

# Columns PATCH /api/vendors/me may write
PROFILE_UPDATE_COLUMNS: frozenset[str] = frozenset(
    {
        "vendor_name",
        "vendor_email",
        "phone",
        "location",
        "logo_url",
        "job_type",
        "vendor_description",
        "latitude",
        "longitude",
        "whatsapp_link",
        "service_radius_km",
        "visiting_card_url",
        "shop_address",
        "service_locations",
    }
)


class VendorRepository:
    """Repository for vendor rows."""

    def __init__(self, db: Database):
        self.db = db

    @log_slow_query("get_vendor_profile")
    async def get_profile(self, vendor_id: int) -> dict[str, Any] | None:
        """Raw profile row; JSON text columns are not decoded here."""
        return await self.db.fetch_one(
            f"SELECT {PROFILE_COLUMNS} FROM vendors WHERE vendor_id = :vendor_id LIMIT 1",
            {"vendor_id": vendor_id},
        )

    async def exists(self, vendor_id: int) -> bool:
        row = await self.db.fetch_one(
            "SELECT 1 AS found FROM vendors WHERE vendor_id = :vendor_id",
            {"vendor_id": vendor_id},
        )
        return row is not None

    @log_slow_query("update_vendor_profile")
    async def update_profile(self, vendor_id: int, update_set: UpdateSet) -> int:
        """Apply a builder-produced SET clause. Returns affected rows."""
        if not update_set:
            raise ValueError("update_profile called with an empty UpdateSet")
        return await self.db.execute(
            f"UPDATE vendors SET {update_set.clause}, updated_at = CURRENT_TIMESTAMP "
            "WHERE vendor_id = :vendor_id",
            {**update_set.params, "vendor_id": vendor_id},
        )

    async def get_vendor_type(self, vendor_id: int) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            "SELECT vendor_type FROM vendors WHERE vendor_id = :vendor_id LIMIT 1",
            {"vendor_id": vendor_id},
        )

    async def set_vendor_type(self, vendor_id: int, vendor_type: str) -> int:
        update_set = build_update({"vendor_type": vendor_type}, frozenset({"vendor_type"}))
        return await self.db.execute(
            f"UPDATE vendors SET {update_set.clause}, updated_at = CURRENT_TIMESTAMP "
            "WHERE vendor_id = :vendor_id",
            {**update_set.params, "vendor_id": vendor_id},
        )

    async def request_verification(self, vendor_id: int, documents_json: str) -> int:
        return await self.db.execute(
            "UPDATE vendors SET verification_status = 'pending', "
            "verification_requested_at = CURRENT_TIMESTAMP, "
            "verification_documents = :documents, "
            "updated_at = CURRENT_TIMESTAMP "
            "WHERE vendor_id = :vendor_id",
            {"documents": documents_json, "vendor_id": vendor_id},
        )

    async def update_location(
        self,
        vendor_id: int,
        latitude: float,
        longitude: float,
        location_name: str,
    ) -> int:
        return await self.db.execute(
            "UPDATE vendors SET latitude = :latitude, longitude = :longitude, "
            "location = :location, updated_at = CURRENT_TIMESTAMP "
            "WHERE vendor_id = :vendor_id",
            {
                "latitude": latitude,
                "longitude": longitude,
                "location": location_name,
                "vendor_id": vendor_id,
            },
        )

    async def get_credentials(self, email: str) -> dict[str, Any] | None:
        """Summary columns plus password_hash, for login."""
        return await self.db.fetch_one(
            f"SELECT {SUMMARY_COLUMNS}, password_hash FROM vendors "
            "WHERE LOWER(vendor_email) = LOWER(:email) LIMIT 1",
            {"email": email},
        )

    async def email_taken(
        self, email: str, exclude_vendor_id: int | None = None
    ) -> bool:
        """Case-insensitive lookup, optionally ignoring one vendor's own row."""
        query = (
            "SELECT 1 AS found FROM vendors "
            "WHERE LOWER(vendor_email) = LOWER(:email)"
        )
        params: dict[str, Any] = {"email": email}
        if exclude_vendor_id is not None:
            query += " AND vendor_id <> :exclude_vendor_id"
            params["exclude_vendor_id"] = exclude_vendor_id
        row = await self.db.fetch_one(query + " LIMIT 1", params)
        return row is not None

    @log_slow_query("create_vendor")
    async def create(
        self,
        *,
        company_name: str,
        email: str,
        password_hash: str,
        phone: str,
        location: str | None,
        vendor_type: str,
    ) -> dict[str, Any]:
        row = await self.db.execute_returning(
            "INSERT INTO vendors "
            "(vendor_name, vendor_email, password_hash, phone, location, vendor_type) "
            "VALUES (:company_name, :email, :password_hash, :phone, :location, :vendor_type) "
            f"RETURNING {SUMMARY_COLUMNS}",
            {
                "company_name": company_name,
                "email": email,
                "password_hash": password_hash,
                "phone": phone,
                "location": location,
                "vendor_type": vendor_type,
            },
        )
        if row is None:
            raise RuntimeError("INSERT ... RETURNING produced no row")
        return row
