"""Route tests for /api/customer/me."""

import pytest

from factories import CustomerRowFactory

ME = "/api/customer/me"


@pytest.mark.unit
class TestCustomerMe:
    async def test_get(self, client, fake_db, customer_headers):
        fake_db.fetch_one.return_value = CustomerRowFactory.build(
            customer_id=42, name="Rahim", email="rahim@example.com"
        )

        response = await client.get(ME, headers=customer_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["customer_id"] == 42
        assert data["name"] == "Rahim"
        assert "password_hash" not in data

    async def test_get_missing_is_404(self, client, fake_db, customer_headers):
        fake_db.fetch_one.return_value = None
        response = await client.get(ME, headers=customer_headers)
        assert response.status_code == 404
        assert response.json() == {"ok": False, "error": "Customer not found"}

    async def test_patch_partial(self, client, fake_db, customer_headers):
        fake_db.execute.return_value = 1
        fake_db.fetch_one.return_value = CustomerRowFactory.build(
            customer_id=42, address="Gulshan 2"
        )

        response = await client.patch(
            ME, headers=customer_headers, json={"address": "Gulshan 2"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["address"] == "Gulshan 2"
        _, params = fake_db.execute.call_args.args
        assert params == {"address": "Gulshan 2", "customer_id": 42}

    async def test_patch_empty_is_400(self, client, fake_db, customer_headers):
        response = await client.patch(ME, headers=customer_headers, json={})
        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "No fields to update"}
        fake_db.execute.assert_not_called()

    async def test_patch_null_name_is_400(self, client, fake_db, customer_headers):
        response = await client.patch(ME, headers=customer_headers, json={"name": None})
        assert response.status_code == 400
        assert response.json()["ok"] is False
        fake_db.execute.assert_not_called()
