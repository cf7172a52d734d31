# API Routes

from .cart import router as cart_router
from .checkout import router as checkout_router
from .catalog import router as catalog_router
from .admin_auth import router as admin_auth_router
from .admin_catalog import router as admin_catalog_router
from .admin_orders import router as admin_orders_router
from .admin_notifications import router as admin_notifications_router
from .admin_reports import router as admin_reports_router

__all__ = [
    "cart_router",
    "checkout_router",
    "catalog_router",
    "admin_auth_router",
    "admin_catalog_router",
    "admin_orders_router",
    "admin_notifications_router",
    "admin_reports_router",
]
