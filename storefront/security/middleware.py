"""
HTTP Security Middleware

Security headers, per-client rate limiting and double-submit CSRF
protection for the storefront API.
"""

import re
import time
import secrets
import logging
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse, Response

logger = logging.getLogger(__name__)

CSRF_COOKIE_NAME = "csrf-token"
CSRF_HEADER_NAME = "x-csrf-token"
CSRF_COOKIE_MAX_AGE = 60 * 60 * 24
CSRF_SAFE_METHODS = ("GET", "HEAD", "OPTIONS")
CSRF_EXEMPT_PREFIXES = ("/api/admin/auth/",)
CSRF_TOKEN_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def generate_csrf_token() -> str:
    """32 random bytes as 64 lowercase hex chars"""
    return secrets.token_hex(32)


def valid_csrf_token(header_token: str, cookie_token: str) -> bool:
    if not header_token or not cookie_token:
        return False
    if not CSRF_TOKEN_PATTERN.match(cookie_token) or not CSRF_TOKEN_PATTERN.match(header_token):
        return False
    return secrets.compare_digest(header_token, cookie_token)


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, then the peer address"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client:
        return request.client.host
    return "unknown"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds browser hardening headers to every response"""

    def __init__(self, app, connect_src: str = "http://localhost:3001"):
        super().__init__(app)
        self.headers = {
            "X-Frame-Options": "DENY",
            "X-Content-Type-Options": "nosniff",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "X-XSS-Protection": "1; mode=block",
            "Content-Security-Policy": "; ".join([
                "default-src 'self'",
                "script-src 'self' 'unsafe-eval' 'unsafe-inline'",
                "style-src 'self' 'unsafe-inline'",
                "img-src 'self' data: https: http:",
                "font-src 'self'",
                f"connect-src 'self' {connect_src} https:",
                "frame-ancestors 'none'",
                "base-uri 'self'",
                "form-action 'self'",
            ]),
        }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers[name] = value
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window rate limit per client IP.

    Counters live in process memory; each client gets ``max_requests``
    per ``window_seconds`` starting from its first request in the window.
    """

    def __init__(self, app, max_requests: int = 100, window_seconds: float = 900):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        # ip -> (count, reset_at)
        self._windows: dict[str, tuple[int, float]] = {}

    def allow(self, ip: str, now: float) -> bool:
        count, reset_at = self._windows.get(ip, (0, 0.0))

        if now > reset_at:
            self._prune(now)
            self._windows[ip] = (1, now + self.window_seconds)
            return True

        if count >= self.max_requests:
            return False

        self._windows[ip] = (count + 1, reset_at)
        return True

    def _prune(self, now: float) -> None:
        expired = [ip for ip, (_, reset_at) in self._windows.items() if now > reset_at]
        for ip in expired:
            del self._windows[ip]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        ip = client_ip(request)
        if not self.allow(ip, time.monotonic()):
            logger.warning(f"Rate limit exceeded for {ip}")
            return PlainTextResponse("Too Many Requests", status_code=429)
        return await call_next(request)


class CSRFMiddleware(BaseHTTPMiddleware):
    """
    Double-submit CSRF check for state-changing API calls.

    The ``x-csrf-token`` header must match the ``csrf-token`` cookie.
    Clients without the cookie get a fresh one on their next response.
    """

    def __init__(self, app, secure_cookie: bool = True):
        super().__init__(app)
        self.secure_cookie = secure_cookie

    def requires_check(self, request: Request) -> bool:
        path = request.url.path
        if not path.startswith("/api/"):
            return False
        if request.method in CSRF_SAFE_METHODS:
            return False
        return not path.startswith(CSRF_EXEMPT_PREFIXES)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        cookie_token = request.cookies.get(CSRF_COOKIE_NAME)

        if self.requires_check(request):
            header_token = request.headers.get(CSRF_HEADER_NAME)
            if not valid_csrf_token(header_token, cookie_token):
                logger.warning(f"CSRF check failed: {request.method} {request.url.path}")
                return PlainTextResponse("Invalid CSRF token", status_code=403)

        response = await call_next(request)

        if not cookie_token:
            response.set_cookie(
                CSRF_COOKIE_NAME,
                generate_csrf_token(),
                max_age=CSRF_COOKIE_MAX_AGE,
                httponly=True,
                secure=self.secure_cookie,
                samesite="strict",
            )
        return response
