"""Rating repository for database operations."""

from typing import Any, Literal

from core.database import Database
from repositories.utils import log_slow_query

RatingTarget = Literal["vendor", "product"]

_TARGET_COLUMNS: dict[str, str] = {"vendor": "vendor_id", "product": "product_id"}


def _target_column(target: RatingTarget) -> str:
    try:
        return _TARGET_COLUMNS[target]
    except KeyError:
        raise ValueError(f"Unknown rating target: {target!r}") from None


class RatingRepository:
    """Repository for customer ratings of vendors and products."""

    def __init__(self, db: Database):
        self.db = db

    @log_slow_query("upsert_rating")
    async def upsert(
        self,
        customer_id: int,
        target: RatingTarget,
        target_id: int,
        score: int,
        comment: str | None,
    ) -> None:
        """One rating per customer per target; re-rating overwrites."""
        column = _target_column(target)
        await self.db.execute(
            f"INSERT INTO ratings (customer_id, {column}, score, comment) "
            f"VALUES (:customer_id, :target_id, :score, :comment) "
            f"ON CONFLICT (customer_id, {column}) DO UPDATE SET "
            "score = EXCLUDED.score, comment = EXCLUDED.comment, "
            "updated_at = CURRENT_TIMESTAMP",
            {
                "customer_id": customer_id,
                "target_id": target_id,
                "score": score,
                "comment": comment,
            },
        )

    async def summary(self, target: RatingTarget, target_id: int) -> dict[str, Any]:
        """Rounded average (one decimal) and count for one target."""
        column = _target_column(target)
        row = await self.db.fetch_one(
            "SELECT ROUND(CAST(AVG(score) AS NUMERIC), 1) AS average, "
            "COUNT(*) AS count "
            f"FROM ratings WHERE {column} = :target_id",
            {"target_id": target_id},
        )
        return row or {"average": None, "count": 0}

    @log_slow_query("recompute_vendor_rating")
    async def recompute_vendor_rating(self, vendor_id: int) -> int:
        return await self.db.execute(
            "UPDATE vendors SET rating = ("
            "  SELECT ROUND(CAST(AVG(score) AS NUMERIC), 1) FROM ratings "
            "  WHERE vendor_id = :vendor_id"
            "), updated_at = CURRENT_TIMESTAMP "
            "WHERE vendor_id = :vendor_id",
            {"vendor_id": vendor_id},
        )

    async def list_for_customer(self, customer_id: int) -> list[dict[str, Any]]:
        return await self.db.fetch_all(
            "SELECT rating_id, vendor_id, product_id, score, comment, "
            "created_at, updated_at "
            "FROM ratings WHERE customer_id = :customer_id "
            "ORDER BY updated_at DESC, rating_id DESC",
            {"customer_id": customer_id},
        )
