"""
Admin proxy helpers

Admin routes hand requests to the backend API unchanged: the caller's
Authorization header, query string and raw body (JSON or multipart) are
forwarded, and backend failures are mapped onto HTTP errors.
"""

import logging
from typing import Any, Optional

from fastapi import HTTPException, Request

from ..services.backend_client import BackendClient, BackendClientError

logger = logging.getLogger(__name__)


def backend_error(action: str, error: BackendClientError) -> HTTPException:
    """
    Map a backend failure onto an HTTPException.

    Client errors keep their status; server errors and unreachable
    backends become 502.
    """
    status_code = error.status_code
    if status_code is None or status_code >= 500:
        status_code = 502
    return HTTPException(status_code=status_code, detail=f"{action}: {error.message}")


def forwarded_headers(request: Request, with_body: bool = False) -> dict[str, str]:
    headers = {}
    authorization = request.headers.get("Authorization")
    if authorization:
        headers["Authorization"] = authorization
    if with_body:
        headers["Content-Type"] = request.headers.get("content-type", "application/json")
    return headers


async def forward(
    request: Request,
    backend: BackendClient,
    method: str,
    path: str,
    action: str,
    json: Optional[Any] = None,
) -> Any:
    """
    Forward the incoming request to ``path`` on the backend.

    Args:
        request: Incoming admin request
        backend: Client for the backend origin
        method: HTTP method to use upstream
        path: Backend path, e.g. ``/api/orders``
        action: Prefix for error details, e.g. "Failed to fetch orders"
        json: Replacement body; the raw incoming body is sent when omitted

    Returns:
        Decoded backend response body
    """
    content = None
    if json is None and method in ("POST", "PUT", "PATCH"):
        content = await request.body() or None

    try:
        return await backend.request_json(
            method,
            path,
            params=dict(request.query_params) or None,
            json=json,
            content=content,
            headers=forwarded_headers(request, with_body=content is not None),
        )
    except BackendClientError as e:
        logger.warning(f"{action}: {e.status_code} - {e.message}")
        raise backend_error(action, e)


async def read_json_body(request: Request) -> Any:
    """Decode the request body, None if it is missing or not JSON"""
    try:
        return await request.json()
    except ValueError:
        return None


def as_dict(body: Any) -> dict:
    return body if isinstance(body, dict) else {}
