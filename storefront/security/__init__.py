# Security middleware and dependencies

from .middleware import (
    SecurityHeadersMiddleware,
    RateLimitMiddleware,
    CSRFMiddleware,
    generate_csrf_token,
)
from .auth import BearerDependency, require_bearer

__all__ = [
    "SecurityHeadersMiddleware",
    "RateLimitMiddleware",
    "CSRFMiddleware",
    "generate_csrf_token",
    "BearerDependency",
    "require_bearer",
]
