"""
Backend API Client

HTTP client for the backend API server that owns the shop database.
Shared by the public catalog client, the admin SDK and the admin proxy routes.
"""

import logging
from typing import Optional, Any

import httpx

logger = logging.getLogger(__name__)


class BackendClientError(Exception):
    """Backend rejected a request or could not be reached"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendUnavailableError(BackendClientError):
    """Transport-level failure (connection refused, timeout, ...)"""
    pass


def error_message(response: httpx.Response) -> str:
    """Pull the human readable message out of a backend error response"""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value

    return f"Backend responded with {response.status_code}"


class BackendClient:
    """
    Thin async wrapper around httpx for the backend API.

    ``request`` returns raw responses; ``request_json`` decodes the body and
    turns any status >= 400 into BackendClientError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        headers: Optional[dict[str, str]] = None,
        auth: Optional[httpx.Auth] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize backend client.

        Args:
            base_url: Base URL of the backend (no trailing slash needed)
            timeout: Request timeout in seconds
            headers: Headers sent with every request
            auth: httpx auth flow (e.g. token refresh middleware)
            transport: Custom transport, used by tests
        """
        self.base_url = base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            auth=auth,
            transport=transport,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[Any] = None,
        content: Optional[bytes] = None,
        data: Optional[dict[str, Any]] = None,
        files: Optional[Any] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        """Make an HTTP request and return the raw response"""
        try:
            return await self._http_client.request(
                method=method,
                url=path,
                params=params,
                json=json,
                content=content,
                data=data,
                files=files,
                headers=headers,
            )
        except httpx.TransportError as e:
            logger.error(f"Backend unreachable: {method} {path} - {e}")
            raise BackendUnavailableError(f"Backend unreachable: {e}") from e

    async def request_json(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> Any:
        """Make an HTTP request and decode the JSON body"""
        response = await self.request(method, path, **kwargs)

        if response.status_code >= 400:
            message = error_message(response)
            logger.error(f"Request failed: {method} {path} - {response.status_code} - {message}")
            raise BackendClientError(message, status_code=response.status_code)

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise BackendClientError(
                "Invalid response format", status_code=response.status_code
            ) from e
