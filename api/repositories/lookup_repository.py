"""Read-only lookups for building client filters."""

from core.database import Database


class LookupRepository:
    def __init__(self, db: Database):
        self.db = db

    async def _distinct(self, table: str, column: str) -> list[str]:
        rows = await self.db.fetch_all(
            f"SELECT DISTINCT {column} AS value FROM {table} "
            f"WHERE {column} IS NOT NULL AND {column} <> '' "
            f"ORDER BY {column}"
        )
        return [row["value"] for row in rows]

    async def product_categories(self) -> list[str]:
        return await self._distinct("products", "category_slug")

    async def service_categories(self) -> list[str]:
        return await self._distinct("services", "service_category_slug")

    async def job_types(self) -> list[str]:
        return await self._distinct("vendors", "job_type")
