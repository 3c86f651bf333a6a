"""Nearby vendors and products ranked by rating and proximity."""

from core.database import Database
from core.logger import get_logger
from repositories.geo_queries import PRODUCTS, VENDORS
from repositories.nearby_repository import NearbyRepository
from schemas import RecommendedProduct, RecommendedVendor
from services.nearby_service import GeoSearch

logger = get_logger(__name__)


async def recommend_vendors(db: Database, search: GeoSearch) -> list[RecommendedVendor]:
    rows = await NearbyRepository(db).find_recommended(
        VENDORS, **search.as_query_kwargs()
    )
    logger.debug("recommendations.vendors", results=len(rows))
    return [RecommendedVendor.model_validate(row) for row in rows]


async def recommend_products(
    db: Database, search: GeoSearch
) -> list[RecommendedProduct]:
    rows = await NearbyRepository(db).find_recommended(
        PRODUCTS, **search.as_query_kwargs()
    )
    logger.debug("recommendations.products", results=len(rows))
    return [RecommendedProduct.model_validate(row) for row in rows]
