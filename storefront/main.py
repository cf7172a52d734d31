"""
Atlantic Leather Storefront Service

Cart, checkout and catalog API for the Atlantic Leather shop, plus the
admin back-office proxy in front of the backend API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables before settings are read elsewhere
load_dotenv()

from .core.config import settings
from .routes import (
    cart_router,
    checkout_router,
    catalog_router,
    admin_auth_router,
    admin_catalog_router,
    admin_orders_router,
    admin_notifications_router,
    admin_reports_router,
)
from .routes.deps import close_clients
from .security import CSRFMiddleware, RateLimitMiddleware, SecurityHeadersMiddleware

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"{settings.app_name} starting up...")
    logger.info(f"Backend API: {settings.backend_url}")
    logger.info(f"Public API key: {'configured' if settings.public_api_configured else 'NOT configured'}")
    logger.info(f"Cart storage: {settings.cart_storage_dir or 'memory'}")
    yield
    logger.info(f"{settings.app_name} shutting down...")
    await close_clients()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Storefront and admin API for the Atlantic Leather shop",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.csrf_enabled:
    app.add_middleware(CSRFMiddleware, secure_cookie=not settings.debug)
else:
    logger.warning("CSRF protection disabled")

app.add_middleware(SecurityHeadersMiddleware, connect_src=settings.backend_url)
app.add_middleware(
    RateLimitMiddleware,
    max_requests=settings.rate_limit_max_requests,
    window_seconds=settings.rate_limit_window_seconds,
)

# Include API routers
app.include_router(catalog_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(admin_auth_router)
app.include_router(admin_catalog_router)
app.include_router(admin_orders_router)
app.include_router(admin_notifications_router)
app.include_router(admin_reports_router)


@app.get("/")
async def home():
    """Service index"""
    return {
        "message": f"{settings.app_name} API",
        "docs": "/docs",
        "endpoints": {
            "products": "/api/products",
            "categories": "/api/categories",
            "cart": "/api/cart",
            "checkout": "/api/checkout",
            "admin": "/api/admin",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "atlantic-leather-storefront"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
