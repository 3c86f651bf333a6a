"""Static and data-derived lookup lists."""

import asyncio

from core.database import Database
from models import VENDOR_TYPES
from repositories.lookup_repository import LookupRepository
from schemas import Categories


async def get_categories(db: Database) -> Categories:
    repo = LookupRepository(db)
    products, services, job_types = await asyncio.gather(
        repo.product_categories(),
        repo.service_categories(),
        repo.job_types(),
    )
    return Categories(
        product_categories=products,
        service_categories=services,
        job_types=job_types,
    )


def get_vendor_types() -> list[str]:
    return list(VENDOR_TYPES)
