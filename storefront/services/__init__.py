# Backend clients and business services

from .backend_client import BackendClient, BackendClientError, BackendUnavailableError
from .auth import AuthenticationError, RefreshingTokenAuth, TokenStore
from .public_client import PublicClient
from .admin_client import AdminClient
from .checkout import CheckoutService, OrderValidationError
from .documents import render_receipt, render_report

__all__ = [
    "BackendClient",
    "BackendClientError",
    "BackendUnavailableError",
    "AuthenticationError",
    "RefreshingTokenAuth",
    "TokenStore",
    "PublicClient",
    "AdminClient",
    "CheckoutService",
    "OrderValidationError",
    "render_receipt",
    "render_report",
]
