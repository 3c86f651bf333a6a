"""API route modules."""

from routes.auth_routes import router as auth_router
from routes.auth_routes import vendor_auth_router
from routes.chat_routes import router as chat_router
from routes.customers_routes import router as customers_router
from routes.health_routes import router as health_router
from routes.listings_routes import products_router, services_router
from routes.lookups_routes import router as lookups_router
from routes.nearby_routes import router as nearby_router
from routes.ratings_routes import router as ratings_router
from routes.recommendations_routes import router as recommendations_router
from routes.vendors_routes import router as vendors_router

__all__ = [
    "auth_router",
    "chat_router",
    "customers_router",
    "health_router",
    "lookups_router",
    "nearby_router",
    "products_router",
    "ratings_router",
    "recommendations_router",
    "services_router",
    "vendor_auth_router",
    "vendors_router",
]
