"""VendorRepository and the vendor profile service against a SQLite database.

Covers the profile write path end to end without PostgreSQL: the required
field check, defaults, the decode fallback for stored JSON, and the
verification state transition.
"""

import json

import pytest

from core.errors import Conflict, NotFound, ValidationFailed
from repositories.update_builder import build_update
from repositories.vendor_repository import PROFILE_UPDATE_COLUMNS, VendorRepository
from schemas import LocationUpdate, VendorProfileUpdate, VerificationRequest
from factories import insert_vendor
from services import vendor_profile_service


@pytest.mark.unit
class TestVendorRepository:
    async def test_get_profile_uses_api_names(self, sqlite_db):
        vendor_id = await insert_vendor(
            sqlite_db, vendor_name="Acme", vendor_email="a@b.com"
        )

        row = await VendorRepository(sqlite_db).get_profile(vendor_id)

        assert row["company_name"] == "Acme"
        assert row["email"] == "a@b.com"
        assert "password_hash" not in row

    async def test_get_profile_missing(self, sqlite_db):
        assert await VendorRepository(sqlite_db).get_profile(404) is None

    async def test_exists(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db)
        repo = VendorRepository(sqlite_db)
        assert await repo.exists(vendor_id) is True
        assert await repo.exists(vendor_id + 1) is False

    async def test_update_profile_rejects_empty_set(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db)
        empty = build_update({}, PROFILE_UPDATE_COLUMNS)
        with pytest.raises(ValueError):
            await VendorRepository(sqlite_db).update_profile(vendor_id, empty)

    async def test_update_profile_missing_row_affects_nothing(self, sqlite_db):
        update_set = build_update({"phone": "1"}, PROFILE_UPDATE_COLUMNS)
        affected = await VendorRepository(sqlite_db).update_profile(99, update_set)
        assert affected == 0

    async def test_create_and_credentials(self, sqlite_db):
        repo = VendorRepository(sqlite_db)
        created = await repo.create(
            company_name="Acme",
            email="acme@example.com",
            password_hash="hash",
            phone="017",
            location=None,
            vendor_type="both",
        )
        assert created["company_name"] == "Acme"
        assert created["vendor_type"] == "both"

        credentials = await repo.get_credentials("ACME@example.com")
        assert credentials["vendor_id"] == created["vendor_id"]
        assert credentials["password_hash"] == "hash"
        assert await repo.email_taken("acme@EXAMPLE.com") is True
        assert await repo.email_taken("other@example.com") is False

    async def test_email_taken_can_exclude_own_row(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db, vendor_email="own@example.com")
        repo = VendorRepository(sqlite_db)
        assert await repo.email_taken("OWN@example.com") is True
        assert (
            await repo.email_taken("OWN@example.com", exclude_vendor_id=vendor_id)
            is False
        )


@pytest.mark.unit
class TestProfileUpdateFlow:
    async def test_minimal_patch_updates_row_and_defaults_radius(self, sqlite_db):
        vendor_id = await insert_vendor(
            sqlite_db,
            vendor_name="Old",
            vendor_email="old@example.com",
            vendor_type="service",
            job_type="plumber",
            service_radius_km=12,
            rating=4.5,
        )

        profile = await vendor_profile_service.update_profile(
            sqlite_db,
            vendor_id,
            VendorProfileUpdate(
                company_name="Acme", phone="123", location="Dhaka", email="a@b.com"
            ),
        )

        assert profile.company_name == "Acme"
        assert profile.phone == "123"
        assert profile.location == "Dhaka"
        assert profile.email == "a@b.com"
        assert profile.service_radius_km == 5
        # Optional profile fields not supplied are cleared
        assert profile.job_type is None
        # Columns outside the profile form are untouched
        assert profile.vendor_type == "service"
        assert profile.rating == 4.5

        reread = await vendor_profile_service.get_profile(sqlite_db, vendor_id)
        assert reread == profile

    async def test_full_patch(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db)
        body = VendorProfileUpdate.model_validate(
            {
                "company_name": "Acme",
                "phone": "123",
                "location": "Dhaka",
                "email": "a@b.com",
                "Vendor_description": "Handmade furniture",
                "latitude": "23.81",
                "longitude": 90.41,
                "service_radius_km": 7.9,
                "service_locations": ["Gulshan", "Banani"],
                "logo_url": "",
            }
        )

        profile = await vendor_profile_service.update_profile(sqlite_db, vendor_id, body)

        assert profile.vendor_description == "Handmade furniture"
        assert profile.latitude == pytest.approx(23.81)
        assert profile.longitude == pytest.approx(90.41)
        assert profile.service_radius_km == 7
        assert profile.service_locations == ["Gulshan", "Banani"]
        assert profile.logo_url is None

        raw = await sqlite_db.fetch_one(
            "SELECT service_locations FROM vendors WHERE vendor_id = :id",
            {"id": vendor_id},
        )
        assert json.loads(raw["service_locations"]) == ["Gulshan", "Banani"]

    async def test_missing_required_field_changes_nothing(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db, vendor_name="Keep")

        with pytest.raises(ValidationFailed, match="Missing required fields"):
            await vendor_profile_service.update_profile(
                sqlite_db,
                vendor_id,
                VendorProfileUpdate(company_name="Acme", phone="123", location="Dhaka"),
            )

        profile = await vendor_profile_service.get_profile(sqlite_db, vendor_id)
        assert profile.company_name == "Keep"

    async def test_unknown_vendor_is_404(self, sqlite_db):
        with pytest.raises(NotFound, match="Vendor not found"):
            await vendor_profile_service.update_profile(
                sqlite_db,
                12345,
                VendorProfileUpdate(
                    company_name="Acme", phone="123", location="Dhaka", email="a@b.com"
                ),
            )


    @pytest.mark.parametrize("email", ["taken@example.com", "Taken@Example.COM"])
    async def test_email_of_another_vendor_is_409(self, sqlite_db, email):
        await insert_vendor(sqlite_db, vendor_email="taken@example.com")
        vendor_id = await insert_vendor(sqlite_db, vendor_email="mine@example.com")

        with pytest.raises(Conflict, match="Email already registered"):
            await vendor_profile_service.update_profile(
                sqlite_db,
                vendor_id,
                VendorProfileUpdate(
                    company_name="Acme", phone="123", location="Dhaka", email=email
                ),
            )

        profile = await vendor_profile_service.get_profile(sqlite_db, vendor_id)
        assert profile.email == "mine@example.com"

    async def test_own_email_in_other_case_is_kept(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db, vendor_email="mine@example.com")

        profile = await vendor_profile_service.update_profile(
            sqlite_db,
            vendor_id,
            VendorProfileUpdate(
                company_name="Acme",
                phone="123",
                location="Dhaka",
                email="MINE@example.com",
            ),
        )

        assert profile.email == "mine@example.com"
        credentials = await VendorRepository(sqlite_db).get_credentials(
            "Mine@Example.com"
        )
        assert credentials["vendor_id"] == vendor_id


@pytest.mark.unit
class TestStoredJsonFallback:
    async def test_malformed_service_locations_reads_as_empty(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db, service_locations="{not json")

        profile = await vendor_profile_service.get_profile(sqlite_db, vendor_id)
        assert profile.service_locations == []

        # Reading again gives the same answer and leaves the row alone
        again = await vendor_profile_service.get_profile(sqlite_db, vendor_id)
        assert again.service_locations == []
        raw = await sqlite_db.fetch_one(
            "SELECT service_locations FROM vendors WHERE vendor_id = :id",
            {"id": vendor_id},
        )
        assert raw["service_locations"] == "{not json"

    async def test_object_service_locations_reads_as_empty(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db, service_locations='{"a": 1}')
        profile = await vendor_profile_service.get_profile(sqlite_db, vendor_id)
        assert profile.service_locations == []

    async def test_null_service_locations_stays_null(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db)
        profile = await vendor_profile_service.get_profile(sqlite_db, vendor_id)
        assert profile.service_locations is None

    async def test_malformed_verification_documents_read_as_null(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db, verification_documents="nope")
        profile = await vendor_profile_service.get_profile(sqlite_db, vendor_id)
        assert profile.verification_documents is None


@pytest.mark.unit
class TestVerificationFlow:
    async def test_no_documents_is_400_and_row_untouched(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db)

        with pytest.raises(ValidationFailed, match="at least one verification item"):
            await vendor_profile_service.request_verification(
                sqlite_db, vendor_id, VerificationRequest()
            )

        row = await sqlite_db.fetch_one(
            "SELECT verification_status, verification_documents FROM vendors "
            "WHERE vendor_id = :id",
            {"id": vendor_id},
        )
        assert row == {"verification_status": "none", "verification_documents": None}

    async def test_one_document_marks_pending(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db)

        message = await vendor_profile_service.request_verification(
            sqlite_db, vendor_id, VerificationRequest(trade_license_id="TL-2024-77")
        )

        assert message == "your profile has been submitted for verification"
        row = await sqlite_db.fetch_one(
            "SELECT verification_status, verification_requested_at, "
            "verification_documents FROM vendors WHERE vendor_id = :id",
            {"id": vendor_id},
        )
        assert row["verification_status"] == "pending"
        assert row["verification_requested_at"] is not None
        assert json.loads(row["verification_documents"]) == {
            "nid_no": None,
            "live_photo_url": None,
            "trade_license_id": "TL-2024-77",
            "training_certificate": None,
        }

    async def test_unknown_vendor_is_404(self, sqlite_db):
        with pytest.raises(NotFound):
            await vendor_profile_service.request_verification(
                sqlite_db, 999, VerificationRequest(nid_no="1")
            )


@pytest.mark.unit
class TestLocationAndTypeFlow:
    async def test_updates_coordinates_and_default_name(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db, location="Old place")

        profile = await vendor_profile_service.update_location(
            sqlite_db,
            vendor_id,
            LocationUpdate.model_validate({"latitude": "23.75", "longitude": 90.39}),
        )

        assert profile.latitude == pytest.approx(23.75)
        assert profile.longitude == pytest.approx(90.39)
        assert profile.location == "Updated location"

    async def test_vendor_type_round_trip(self, sqlite_db):
        vendor_id = await insert_vendor(sqlite_db)

        result = await vendor_profile_service.set_vendor_type(sqlite_db, vendor_id, "both")
        assert result.vendor_type == "both"

        current = await vendor_profile_service.get_vendor_type(sqlite_db, vendor_id)
        assert current.vendor_type == "both"
