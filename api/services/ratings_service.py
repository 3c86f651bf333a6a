"""Customer ratings of vendors and products."""

from core.database import Database
from core.errors import NotFound
from core.logger import get_logger
from repositories.listing_repository import PRODUCT, ListingRepository
from repositories.rating_repository import RatingRepository, RatingTarget
from repositories.vendor_repository import VendorRepository
from schemas import RatingRecord, RatingRequest, RatingSummary

logger = get_logger(__name__)


async def _target_exists(db: Database, target: RatingTarget, target_id: int) -> bool:
    if target == "vendor":
        return await VendorRepository(db).exists(target_id)
    return await ListingRepository(db, PRODUCT).exists(target_id)


async def rate(
    db: Database,
    customer_id: int,
    target: RatingTarget,
    target_id: int,
    body: RatingRequest,
) -> RatingSummary:
    """Create or replace the caller's rating, then report the new average.

    A vendor rating also refreshes ``vendors.rating``.
    """
    if not await _target_exists(db, target, target_id):
        raise NotFound(f"{target.capitalize()} not found")

    repo = RatingRepository(db)
    await repo.upsert(customer_id, target, target_id, body.score, body.comment)
    if target == "vendor":
        await repo.recompute_vendor_rating(target_id)

    summary = await repo.summary(target, target_id)
    logger.info(
        "rating.saved",
        customer_id=customer_id,
        target=target,
        target_id=target_id,
        score=body.score,
    )
    return RatingSummary(
        target=target,
        target_id=target_id,
        score=body.score,
        average=summary["average"],
        count=summary["count"],
    )


async def my_ratings(db: Database, customer_id: int) -> list[RatingRecord]:
    rows = await RatingRepository(db).list_for_customer(customer_id)
    return [RatingRecord.model_validate(row) for row in rows]
