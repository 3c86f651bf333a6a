"""Location-based discovery of vendors, products and services."""

from dataclasses import dataclass
from typing import Any

from core.database import Database
from core.errors import ValidationFailed
from core.logger import get_logger
from repositories.geo_queries import PRODUCTS, SERVICES, VENDORS, GeoResource
from repositories.nearby_repository import NearbyRepository
from schemas import NearbyProduct, NearbyService, NearbyVendor
from services.coercion import is_blank, parse_float, parse_positive_int

logger = get_logger(__name__)

DEFAULT_RADIUS_KM = 5.0
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class GeoSearch:
    """A validated distance search."""

    latitude: float
    longitude: float
    radius_km: float = DEFAULT_RADIUS_KM
    limit: int = DEFAULT_LIMIT
    category: str | None = None

    def as_query_kwargs(self) -> dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "radius_km": self.radius_km,
            "limit": self.limit,
            "category": self.category,
        }


def parse_geo_search(
    latitude: str | None,
    longitude: str | None,
    radius_km: str | None = None,
    limit: str | None = None,
    category: str | None = None,
) -> GeoSearch:
    """Validate raw query-string values.

    Raises:
        ValidationFailed: With the message clients rely on for each case.
    """
    if is_blank(latitude) or is_blank(longitude):
        raise ValidationFailed("latitude and longitude required")

    try:
        lat = parse_float(latitude)
        lng = parse_float(longitude)
        radius = DEFAULT_RADIUS_KM if is_blank(radius_km) else parse_float(radius_km)
    except ValueError:
        raise ValidationFailed("Invalid coordinates or radius") from None
    if radius < 0:
        raise ValidationFailed("Invalid coordinates or radius")

    try:
        row_limit = DEFAULT_LIMIT if is_blank(limit) else parse_positive_int(limit)
    except ValueError:
        raise ValidationFailed("Invalid limit") from None

    return GeoSearch(
        latitude=lat,
        longitude=lng,
        radius_km=radius,
        limit=row_limit,
        category=None if is_blank(category) else category,
    )


async def _find(
    db: Database, resource: GeoResource, search: GeoSearch
) -> list[dict[str, Any]]:
    rows = await NearbyRepository(db).find_nearby(resource, **search.as_query_kwargs())
    logger.debug(
        "nearby.searched",
        resource=resource.name,
        radius_km=search.radius_km,
        category=search.category,
        results=len(rows),
    )
    return rows


async def nearby_vendors(db: Database, search: GeoSearch) -> list[NearbyVendor]:
    rows = await _find(db, VENDORS, search)
    return [NearbyVendor.model_validate(row) for row in rows]


async def nearby_products(db: Database, search: GeoSearch) -> list[NearbyProduct]:
    rows = await _find(db, PRODUCTS, search)
    return [NearbyProduct.model_validate(row) for row in rows]


async def nearby_services(db: Database, search: GeoSearch) -> list[NearbyService]:
    rows = await _find(db, SERVICES, search)
    return [NearbyService.model_validate(row) for row in rows]
