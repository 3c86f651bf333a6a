"""Great-circle distance queries.

One SQL template serves every location-based listing. A ``GeoResource``
says which table to read, what to project and which column the optional
category filter applies to. Distances come from the spherical law of
cosines, computed once in an inner select and filtered/ordered outside.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple

EARTH_RADIUS_KM = 6371

# Weights for recommendation ranking; they sum to 1.
RATING_WEIGHT = 0.6
PROXIMITY_WEIGHT = 0.4
MAX_RATING = 5

# acos() outside [-1, 1] is an error on PostgreSQL; drift near distance 0 can
# push the cosine sum just past 1.
DISTANCE_EXPR = (
    f"{EARTH_RADIUS_KM} * acos(LEAST(1.0, GREATEST(-1.0, "
    "cos(radians(:lat)) * cos(radians(v.latitude)) "
    "* cos(radians(v.longitude) - radians(:lng)) "
    "+ sin(radians(:lat)) * sin(radians(v.latitude))"
    ")))"
)

RADIUS_PARAM = "CAST(:radius_km AS DOUBLE PRECISION)"


@dataclass(frozen=True)
class GeoResource:
    """Describes one resource that can be searched by distance.

    The vendor table is always aliased ``v``; its coordinates are the ones
    measured.
    """

    name: str
    from_clause: str
    columns: tuple[str, ...]
    category_column: str


class GeoQuery(NamedTuple):
    sql: str
    params: dict[str, Any]


VENDORS = GeoResource(
    name="vendors",
    from_clause="vendors v",
    columns=(
        "v.vendor_id",
        "v.vendor_name AS company_name",
        "v.vendor_email AS email",
        "v.phone",
        "v.location",
        "v.latitude",
        "v.longitude",
        "v.logo_url",
        "v.job_type",
        "v.vendor_type",
        "v.rating",
        "v.vendor_description",
    ),
    category_column="v.job_type",
)

PRODUCTS = GeoResource(
    name="products",
    from_clause="products p JOIN vendors v ON v.vendor_id = p.vendor_id",
    columns=(
        "p.product_id",
        "p.title",
        "p.description",
        "p.price_bdt",
        "p.category_slug",
        "p.image_url",
        "p.vendor_id",
        "v.vendor_name",
        "v.location AS vendor_location",
        "v.phone AS vendor_phone",
        "v.latitude",
        "v.longitude",
        "v.rating",
    ),
    category_column="p.category_slug",
)

SERVICES = GeoResource(
    name="services",
    from_clause="services s JOIN vendors v ON v.vendor_id = s.vendor_id",
    columns=(
        "s.service_id",
        "s.title",
        "s.description",
        "s.rate_bdt",
        "s.service_category_slug",
        "s.image_url",
        "s.vendor_id",
        "v.vendor_name",
        "v.location AS vendor_location",
        "v.phone AS vendor_phone",
        "v.latitude",
        "v.longitude",
        "v.rating",
        "v.job_type",
    ),
    category_column="s.service_category_slug",
)


def _distance_select(resource: GeoResource, category: str | None) -> str:
    projection = ",\n           ".join(resource.columns)
    where = ["v.latitude IS NOT NULL", "v.longitude IS NOT NULL"]
    if category is not None:
        where.append(f"{resource.category_column} = :category")
    return (
        f"SELECT {projection},\n"
        f"           {DISTANCE_EXPR} AS distance_km\n"
        f"    FROM {resource.from_clause}\n"
        f"    WHERE {' AND '.join(where)}"
    )


def _params(
    latitude: float,
    longitude: float,
    radius_km: float,
    limit: int,
    category: str | None,
) -> dict[str, Any]:
    params: dict[str, Any] = {
        "lat": float(latitude),
        "lng": float(longitude),
        "radius_km": float(radius_km),
        "limit": int(limit),
    }
    if category is not None:
        params["category"] = category
    return params


def build_nearby_query(
    resource: GeoResource,
    *,
    latitude: float,
    longitude: float,
    radius_km: float,
    limit: int,
    category: str | None = None,
) -> GeoQuery:
    """Rows within ``radius_km`` of the point, nearest first."""
    sql = (
        "SELECT * FROM (\n"
        f"    {_distance_select(resource, category)}\n"
        ") AS nearby\n"
        f"WHERE distance_km <= {RADIUS_PARAM}\n"
        "ORDER BY distance_km ASC\n"
        "LIMIT :limit"
    )
    return GeoQuery(sql, _params(latitude, longitude, radius_km, limit, category))


def build_recommendation_query(
    resource: GeoResource,
    *,
    latitude: float,
    longitude: float,
    radius_km: float,
    limit: int,
    category: str | None = None,
) -> GeoQuery:
    """Rows within ``radius_km``, ranked by a blend of rating and proximity.

    ``score = 0.6 * rating/5 + 0.4 * (1 - distance_km/radius_km)``; unrated
    rows count as 0 and a zero radius scores proximity as 1.
    """
    proximity = (
        f"CASE WHEN {RADIUS_PARAM} > 0 "
        f"THEN 1 - nearby.distance_km / {RADIUS_PARAM} ELSE 1 END"
    )
    sql = (
        "SELECT * FROM (\n"
        "    SELECT nearby.*,\n"
        f"           {RATING_WEIGHT} * (COALESCE(nearby.rating, 0) / {MAX_RATING}.0)"
        f" + {PROXIMITY_WEIGHT} * ({proximity}) AS score\n"
        "    FROM (\n"
        f"        {_distance_select(resource, category)}\n"
        "    ) AS nearby\n"
        f"    WHERE nearby.distance_km <= {RADIUS_PARAM}\n"
        ") AS ranked\n"
        "ORDER BY score DESC, distance_km ASC\n"
        "LIMIT :limit"
    )
    return GeoQuery(sql, _params(latitude, longitude, radius_km, limit, category))
