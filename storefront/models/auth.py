"""Admin authentication models"""

import re
from pydantic import BaseModel, field_validator
from typing import Any, Optional

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")


def validate_login_input(body: Any) -> list[str]:
    """
    Validate a raw login body.

    Returns the list of problems; an empty list means the body is usable.
    """
    errors: list[str] = []

    if not isinstance(body, dict):
        return ["Invalid request body"]

    username = body.get("username")
    if not username or not isinstance(username, str):
        errors.append("Username is required")
    elif len(username) < 3 or len(username) > 50:
        errors.append("Username must be between 3 and 50 characters")
    elif not USERNAME_PATTERN.match(username):
        errors.append("Username can only contain letters, numbers, and underscores")

    password = body.get("password")
    if not password or not isinstance(password, str):
        errors.append("Password is required")
    elif len(password) < 6:
        errors.append("Password must be at least 6 characters")
    elif len(password) > 128:
        errors.append("Password is too long")

    return errors


class LoginRequest(BaseModel):
    """Sanitized admin credentials"""
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        return v.strip().lower()


class RefreshRequest(BaseModel):
    refreshToken: Optional[str] = None


class AuthResponse(BaseModel):
    """Token response returned to admin clients"""
    success: bool = True
    message: Optional[str] = None
    accessToken: str
    refreshToken: str
    user: Optional[dict] = None
