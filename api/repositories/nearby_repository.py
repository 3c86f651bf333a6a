"""Executes distance queries built by repositories.geo_queries."""

from typing import Any

from core.database import Database
from repositories.geo_queries import (
    GeoResource,
    build_nearby_query,
    build_recommendation_query,
)
from repositories.utils import log_slow_query


class NearbyRepository:
    def __init__(self, db: Database):
        self.db = db

    @log_slow_query("find_nearby")
    async def find_nearby(
        self,
        resource: GeoResource,
        *,
        latitude: float,
        longitude: float,
        radius_km: float,
        limit: int,
        category: str | None = None,
    ) -> list[dict[str, Any]]:
        query = build_nearby_query(
            resource,
            latitude=latitude,
            longitude=longitude,
            radius_km=radius_km,
            limit=limit,
            category=category,
        )
        return await self.db.fetch_all(query.sql, query.params)

    @log_slow_query("find_recommended")
    async def find_recommended(
        self,
        resource: GeoResource,
        *,
        latitude: float,
        longitude: float,
        radius_km: float,
        limit: int,
        category: str | None = None,
    ) -> list[dict[str, Any]]:
        query = build_recommendation_query(
            resource,
            latitude=latitude,
            longitude=longitude,
            radius_km=radius_km,
            limit=limit,
            category=category,
        )
        return await self.db.fetch_all(query.sql, query.params)
