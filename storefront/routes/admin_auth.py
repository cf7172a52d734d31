"""Admin authentication routes"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Request

from ..models.auth import AuthResponse, LoginRequest, RefreshRequest, validate_login_input
from ..services.backend_client import BackendClient, BackendClientError
from ..security.middleware import client_ip
from .admin_proxy import read_json_body
from .deps import get_backend_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/auth", tags=["Admin Auth"])


def _auth_response(body: dict) -> AuthResponse:
    """Flatten the backend's ``{message, data:{tokens, user}}`` envelope"""
    if not isinstance(body, dict):
        body = {}
    data = body.get("data") if isinstance(body.get("data"), dict) else {}
    if not data.get("accessToken") or not data.get("refreshToken"):
        raise HTTPException(status_code=502, detail="Invalid response format")
    return AuthResponse(
        success=True,
        message=body.get("message"),
        accessToken=data["accessToken"],
        refreshToken=data["refreshToken"],
        user=data.get("user"),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    """Validate and sanitize credentials, then sign in against the backend"""
    body = await read_json_body(request)

    errors = validate_login_input(body)
    if errors:
        raise HTTPException(status_code=400, detail=", ".join(errors))

    credentials = LoginRequest(username=body["username"], password=body["password"])

    try:
        result = await backend.request_json(
            "POST",
            "/api/auth/login",
            json=credentials.model_dump(),
            headers={"X-Forwarded-For": client_ip(request)},
        )
    except BackendClientError as e:
        if e.status_code is None or e.status_code >= 500:
            raise HTTPException(status_code=502, detail=f"Login failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message or "Login failed")

    logger.info(f"Admin login: {credentials.username}")
    return _auth_response(result)


@router.post("/refresh", response_model=AuthResponse)
async def refresh(
    request: Optional[RefreshRequest] = None,
    backend: BackendClient = Depends(get_backend_client),
):
    """Exchange a refresh token for a new token pair"""
    if request is None or not request.refreshToken:
        raise HTTPException(status_code=400, detail="Refresh token is required")

    try:
        result = await backend.request_json(
            "POST",
            "/api/auth/refresh",
            json={"refreshToken": request.refreshToken},
        )
    except BackendClientError as e:
        if e.status_code is None or e.status_code >= 500:
            raise HTTPException(status_code=502, detail=f"Token refresh failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message or "Token refresh failed")

    return _auth_response(result)
