"""
Admin request authentication

The storefront never validates admin tokens itself; the backend does.
Routes only insist that a bearer header is present before proxying.
"""

from fastapi import Request, HTTPException


class BearerDependency:
    """
    FastAPI dependency returning the incoming Authorization header.

    Used on routes the backend must never see anonymously.
    """

    async def __call__(self, request: Request) -> str:
        authorization = request.headers.get("Authorization")

        if not authorization:
            raise HTTPException(
                status_code=401,
                detail="Authorization header required",
            )

        return authorization


# Dependency instance
require_bearer = BearerDependency()
