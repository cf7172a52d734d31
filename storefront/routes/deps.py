"""Shared route dependencies"""

import logging
from typing import Optional

from fastapi import Depends, Header, Response

from ..core.config import settings
from ..core.session import CartSession, CartSessionManager
from ..database.storage import create_storage
from ..services.backend_client import BackendClient
from ..services.checkout import CheckoutService
from ..services.public_client import PublicClient

logger = logging.getLogger(__name__)

CART_SESSION_HEADER = "X-Cart-Session"

# Initialized on first use, closed on shutdown
session_manager: Optional[CartSessionManager] = None
public_client: Optional[PublicClient] = None
backend_client: Optional[BackendClient] = None


def get_session_manager() -> CartSessionManager:
    """Get or create the cart session manager"""
    global session_manager
    if session_manager is None:
        session_manager = CartSessionManager(
            storage=create_storage(settings.cart_storage_dir),
            storage_key=settings.cart_storage_key,
        )
    return session_manager


def get_cart_session(
    response: Response,
    x_cart_session: Optional[str] = Header(None),
    manager: CartSessionManager = Depends(get_session_manager),
) -> CartSession:
    """Resolve the caller's cart session, echoing its id back in a header"""
    session = manager.get_or_create(x_cart_session)
    response.headers[CART_SESSION_HEADER] = session.session_id
    return session


def get_public_client() -> PublicClient:
    """Get or create the public catalog client"""
    global public_client
    if public_client is None:
        public_client = PublicClient(
            public_api_url=settings.public_api_url,
            asset_base_url=settings.backend_url,
            api_key=settings.public_api_key,
            timeout=settings.request_timeout,
        )
    return public_client


def get_backend_client() -> BackendClient:
    """Get or create the client the admin routes proxy through"""
    global backend_client
    if backend_client is None:
        backend_client = BackendClient(
            settings.backend_url,
            timeout=settings.request_timeout,
        )
    return backend_client


def get_checkout_service(
    client: PublicClient = Depends(get_public_client),
) -> CheckoutService:
    return CheckoutService(client)


async def close_clients() -> None:
    """Close the shared HTTP clients"""
    global public_client, backend_client
    if public_client is not None:
        await public_client.close()
        public_client = None
    if backend_client is not None:
        await backend_client.close()
        backend_client = None
