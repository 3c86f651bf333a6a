"""Customer repository for database operations."""

from typing import Any

from core.database import Database
from repositories.update_builder import UpdateSet
from repositories.utils import log_slow_query

PUBLIC_COLUMNS = "customer_id, name, email, phone, address, created_at"

# Columns PATCH /api/customer/me may write
UPDATE_COLUMNS: frozenset[str] = frozenset({"name", "phone", "address"})


class CustomerRepository:
    """Repository for customer rows. Never returns password hashes except for login."""

    def __init__(self, db: Database):
        self.db = db

    async def get_by_id(self, customer_id: int) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            f"SELECT {PUBLIC_COLUMNS} FROM customers WHERE customer_id = :customer_id",
            {"customer_id": customer_id},
        )

    async def get_credentials(self, email: str) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            f"SELECT {PUBLIC_COLUMNS}, password_hash FROM customers "
            "WHERE LOWER(email) = LOWER(:email) LIMIT 1",
            {"email": email},
        )

    async def email_taken(self, email: str) -> bool:
        row = await self.db.fetch_one(
            "SELECT 1 AS found FROM customers WHERE LOWER(email) = LOWER(:email)",
            {"email": email},
        )
        return row is not None

    @log_slow_query("create_customer")
    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        phone: str | None,
    ) -> dict[str, Any]:
        row = await self.db.execute_returning(
            "INSERT INTO customers (name, email, password_hash, phone) "
            "VALUES (:name, :email, :password_hash, :phone) "
            f"RETURNING {PUBLIC_COLUMNS}",
            {
                "name": name,
                "email": email,
                "password_hash": password_hash,
                "phone": phone,
            },
        )
        if row is None:
            raise RuntimeError("INSERT ... RETURNING produced no row")
        return row

    @log_slow_query("update_customer")
    async def update(self, customer_id: int, update_set: UpdateSet) -> int:
        if not update_set:
            raise ValueError("update called with an empty UpdateSet")
        return await self.db.execute(
            f"UPDATE customers SET {update_set.clause}, updated_at = CURRENT_TIMESTAMP "
            "WHERE customer_id = :customer_id",
            {**update_set.params, "customer_id": customer_id},
        )
