"""Repository layer for database operations.

Repositories encapsulate all SQL, keeping routes thin and focused on HTTP
handling. Every statement is parameterized; table and column names come
only from constants defined in this package.
"""

from repositories.customer_repository import CustomerRepository
from repositories.listing_repository import (
    PRODUCT,
    SERVICE,
    ListingKind,
    ListingRepository,
)
from repositories.lookup_repository import LookupRepository
from repositories.nearby_repository import NearbyRepository
from repositories.rating_repository import RatingRepository
from repositories.update_builder import UNSET, UpdateSet, build_update
from repositories.utils import log_slow_query
from repositories.vendor_repository import VendorRepository

__all__ = [
    "CustomerRepository",
    "ListingKind",
    "ListingRepository",
    "LookupRepository",
    "NearbyRepository",
    "PRODUCT",
    "RatingRepository",
    "SERVICE",
    "UNSET",
    "UpdateSet",
    "VendorRepository",
    "build_update",
    "log_slow_query",
]
