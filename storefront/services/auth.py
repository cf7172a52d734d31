"""
Admin token handling

Token storage for the admin SDK and the httpx auth flow that refreshes
the access token when the backend answers 401.
"""

import time
import logging
from typing import Optional, Generator

import httpx
import jwt

from .backend_client import BackendClientError

logger = logging.getLogger(__name__)


class AuthenticationError(BackendClientError):
    """Authentication-related errors"""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, status_code=401)


class TokenStore:
    """Access/refresh token pair plus the signed-in admin user"""

    def __init__(
        self,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        user: Optional[dict] = None,
    ):
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.user = user

    def set_tokens(
        self,
        access_token: str,
        refresh_token: str,
        user: Optional[dict] = None,
    ) -> None:
        self.access_token = access_token
        self.refresh_token = refresh_token
        if user is not None:
            self.user = user

    def clear(self) -> None:
        self.access_token = None
        self.refresh_token = None
        self.user = None

    def access_token_expiry(self) -> Optional[int]:
        """Read the ``exp`` claim without verifying the signature"""
        if not self.access_token:
            return None
        try:
            claims = jwt.decode(self.access_token, options={"verify_signature": False})
        except jwt.PyJWTError:
            return None
        exp = claims.get("exp")
        return int(exp) if exp is not None else None

    def is_authenticated(self) -> bool:
        """True while an unexpired access token is held"""
        expiry = self.access_token_expiry()
        return expiry is not None and expiry > int(time.time())


class RefreshingTokenAuth(httpx.Auth):
    """
    Bearer auth that refreshes the access token on 401.

    The original request is replayed once with the new token. When a
    concurrent request already rotated the token, the replay uses it
    without another refresh call.
    """

    requires_response_body = True

    def __init__(self, tokens: TokenStore, refresh_url: str):
        self.tokens = tokens
        self.refresh_url = refresh_url

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        sent_token = self.tokens.access_token
        if sent_token:
            request.headers["Authorization"] = f"Bearer {sent_token}"

        response = yield request

        if response.status_code != 401:
            return

        if self.tokens.access_token and self.tokens.access_token != sent_token:
            request.headers["Authorization"] = f"Bearer {self.tokens.access_token}"
            yield request
            return

        if not self.tokens.refresh_token:
            self.tokens.clear()
            raise AuthenticationError("Session expired, please log in again")

        refresh_response = yield httpx.Request(
            "POST",
            self.refresh_url,
            json={"refreshToken": self.tokens.refresh_token},
        )

        if not self._store_refreshed_tokens(refresh_response):
            logger.warning(f"Token refresh failed: {refresh_response.status_code}")
            self.tokens.clear()
            raise AuthenticationError("Token refresh failed")

        logger.info("Refreshed admin access token")
        request.headers["Authorization"] = f"Bearer {self.tokens.access_token}"
        yield request

    def _store_refreshed_tokens(self, response: httpx.Response) -> bool:
        if response.status_code >= 400:
            return False
        try:
            body = response.json()
        except ValueError:
            return False
        if not isinstance(body, dict):
            return False

        # Backend wraps tokens in ``data``; the admin proxy returns them flat
        data = body.get("data") if isinstance(body.get("data"), dict) else body
        access_token = data.get("accessToken")
        refresh_token = data.get("refreshToken")
        if not access_token or not refresh_token:
            return False

        self.tokens.set_tokens(access_token, refresh_token, data.get("user"))
        return True
