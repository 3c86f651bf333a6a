"""Repository for vendor listings (products and services).

Both tables share one shape: an id, an owning vendor, a title, a price
column and a category column. ``ListingKind`` names the differences.
"""

from dataclasses import dataclass
from typing import Any

from core.database import Database
from repositories.update_builder import UpdateSet
from repositories.utils import log_slow_query


@dataclass(frozen=True)
class ListingKind:
    name: str
    label: str
    table: str
    id_column: str
    price_column: str
    category_column: str

    @property
    def columns(self) -> tuple[str, ...]:
        return (
            self.id_column,
            "vendor_id",
            "title",
            "description",
            self.price_column,
            self.category_column,
            "image_url",
            "created_at",
            "updated_at",
        )

    @property
    def writable_columns(self) -> frozenset[str]:
        return frozenset(
            {
                "title",
                "description",
                self.price_column,
                self.category_column,
                "image_url",
            }
        )

    @property
    def select_list(self) -> str:
        return ", ".join(self.columns)


PRODUCT = ListingKind(
    name="product",
    label="Product",
    table="products",
    id_column="product_id",
    price_column="price_bdt",
    category_column="category_slug",
)

SERVICE = ListingKind(
    name="service",
    label="Service",
    table="services",
    id_column="service_id",
    price_column="rate_bdt",
    category_column="service_category_slug",
)


class ListingRepository:
    """Repository for one listing table, scoped to the owning vendor."""

    def __init__(self, db: Database, kind: ListingKind):
        self.db = db
        self.kind = kind

    @log_slow_query("list_vendor_listings")
    async def list_for_vendor(self, vendor_id: int) -> list[dict[str, Any]]:
        kind = self.kind
        return await self.db.fetch_all(
            f"SELECT {kind.select_list} FROM {kind.table} "
            "WHERE vendor_id = :vendor_id "
            f"ORDER BY created_at DESC, {kind.id_column} DESC",
            {"vendor_id": vendor_id},
        )

    async def get_for_vendor(
        self, vendor_id: int, listing_id: int
    ) -> dict[str, Any] | None:
        kind = self.kind
        return await self.db.fetch_one(
            f"SELECT {kind.select_list} FROM {kind.table} "
            f"WHERE {kind.id_column} = :listing_id AND vendor_id = :vendor_id",
            {"listing_id": listing_id, "vendor_id": vendor_id},
        )

    async def exists(self, listing_id: int) -> bool:
        kind = self.kind
        row = await self.db.fetch_one(
            f"SELECT 1 AS found FROM {kind.table} WHERE {kind.id_column} = :listing_id",
            {"listing_id": listing_id},
        )
        return row is not None

    @log_slow_query("create_listing")
    async def create(self, vendor_id: int, values: dict[str, Any]) -> dict[str, Any]:
        kind = self.kind
        unknown = set(values) - kind.writable_columns
        if unknown:
            raise ValueError(f"Columns not writable on {kind.table}: {sorted(unknown)}")

        columns = ["vendor_id", *values]
        placeholders = ", ".join(f":{column}" for column in columns)
        row = await self.db.execute_returning(
            f"INSERT INTO {kind.table} ({', '.join(columns)}) "
            f"VALUES ({placeholders}) RETURNING {kind.select_list}",
            {"vendor_id": vendor_id, **values},
        )
        if row is None:
            raise RuntimeError("INSERT ... RETURNING produced no row")
        return row

    @log_slow_query("update_listing")
    async def update(
        self, vendor_id: int, listing_id: int, update_set: UpdateSet
    ) -> int:
        if not update_set:
            raise ValueError("update called with an empty UpdateSet")
        kind = self.kind
        return await self.db.execute(
            f"UPDATE {kind.table} SET {update_set.clause}, "
            "updated_at = CURRENT_TIMESTAMP "
            f"WHERE {kind.id_column} = :listing_id AND vendor_id = :vendor_id",
            {**update_set.params, "listing_id": listing_id, "vendor_id": vendor_id},
        )

    async def delete(self, vendor_id: int, listing_id: int) -> int:
        kind = self.kind
        return await self.db.execute(
            f"DELETE FROM {kind.table} "
            f"WHERE {kind.id_column} = :listing_id AND vendor_id = :vendor_id",
            {"listing_id": listing_id, "vendor_id": vendor_id},
        )
