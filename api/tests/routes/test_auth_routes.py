"""Route tests for registration and login."""

import pytest

from core.auth import CUSTOMER_ROLE, VENDOR_ROLE, decode_access_token
from core.passwords import hash_password
from factories import CustomerRowFactory


def _vendor_row(**overrides):
    row = {
        "vendor_id": 9,
        "company_name": "Acme Furniture",
        "email": "acme@example.com",
        "phone": "01700000000",
        "location": "Dhaka",
        "vendor_type": "seller",
    }
    row.update(overrides)
    return row


@pytest.mark.unit
class TestCustomerAuthRoutes:
    async def test_register_201(self, client, fake_db):
        fake_db.fetch_one.return_value = None
        fake_db.execute_returning.return_value = CustomerRowFactory.build(
            customer_id=42, email="rahim@example.com"
        )

        response = await client.post(
            "/api/auth/register",
            json={"name": "Rahim", "email": "rahim@example.com", "password": "secret1"},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["customer"]["customer_id"] == 42
        assert "password_hash" not in data["customer"]
        assert decode_access_token(data["token"], CUSTOMER_ROLE) == 42

    async def test_register_duplicate_is_409(self, client, fake_db):
        fake_db.fetch_one.return_value = {"found": 1}
        response = await client.post(
            "/api/auth/register",
            json={"name": "Rahim", "email": "rahim@example.com", "password": "secret1"},
        )
        assert response.status_code == 409
        assert response.json() == {"ok": False, "error": "Email already registered"}

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Rahim", "email": "not-an-email", "password": "secret1"},
            {"name": "Rahim", "email": "rahim@example.com", "password": "123"},
            {"email": "rahim@example.com", "password": "secret1"},
        ],
    )
    async def test_register_invalid_is_400(self, client, fake_db, payload):
        response = await client.post("/api/auth/register", json=payload)
        assert response.status_code == 400
        assert response.json()["ok"] is False
        fake_db.execute_returning.assert_not_called()

    async def test_login(self, client, fake_db):
        row = CustomerRowFactory.build(customer_id=42, email="rahim@example.com")
        row["password_hash"] = hash_password("secret1")
        fake_db.fetch_one.return_value = row

        response = await client.post(
            "/api/auth/login",
            json={"email": "Rahim@example.com", "password": "secret1"},
        )

        assert response.status_code == 200
        assert decode_access_token(response.json()["data"]["token"], CUSTOMER_ROLE) == 42
        _, params = fake_db.fetch_one.call_args.args
        assert params == {"email": "rahim@example.com"}

    async def test_login_bad_password_is_401(self, client, fake_db):
        row = CustomerRowFactory.build(customer_id=42)
        row["password_hash"] = hash_password("secret1")
        fake_db.fetch_one.return_value = row

        response = await client.post(
            "/api/auth/login",
            json={"email": "rahim@example.com", "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json() == {"ok": False, "error": "Invalid email or password"}


@pytest.mark.unit
class TestVendorAuthRoutes:
    async def test_register_201(self, client, fake_db):
        fake_db.fetch_one.return_value = None
        fake_db.execute_returning.return_value = _vendor_row(vendor_type="service")

        response = await client.post(
            "/api/vendor/register",
            json={
                "company_name": "Acme Furniture",
                "email": "acme@example.com",
                "password": "secret1",
                "phone": "01700000000",
                "location": "Dhaka",
                "vendor_type": "service",
            },
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["vendor"]["vendor_type"] == "service"
        assert decode_access_token(data["token"], VENDOR_ROLE) == 9

    async def test_register_bad_type_is_400(self, client, fake_db):
        response = await client.post(
            "/api/vendor/register",
            json={
                "company_name": "Acme",
                "email": "acme@example.com",
                "password": "secret1",
                "phone": "017",
                "vendor_type": "wholesale",
            },
        )
        assert response.status_code == 400
        assert response.json()["error"] == (
            "vendor_type must be 'seller' | 'service' | 'both'"
        )
        assert fake_db.mock_calls == []

    async def test_login(self, client, fake_db):
        fake_db.fetch_one.return_value = {
            **_vendor_row(),
            "password_hash": hash_password("secret1"),
        }

        response = await client.post(
            "/api/vendor/login",
            json={"email": "acme@example.com", "password": "secret1"},
        )

        assert response.status_code == 200
        vendor_token = response.json()["data"]["token"]
        assert decode_access_token(vendor_token, VENDOR_ROLE) == 9
        assert decode_access_token(vendor_token, CUSTOMER_ROLE) is None

    async def test_login_unknown_is_401(self, client, fake_db):
        fake_db.fetch_one.return_value = None
        response = await client.post(
            "/api/vendor/login",
            json={"email": "ghost@example.com", "password": "secret1"},
        )
        assert response.status_code == 401
