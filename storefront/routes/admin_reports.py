"""Admin report and profile routes"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from ..security.auth import require_bearer
from ..services.backend_client import BackendClient
from ..services.documents import render_report, report_filename
from .admin_proxy import as_dict, forward, read_json_body
from .deps import get_backend_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin Reports"])


# ==================== Reports ====================

@router.get("/reports")
async def get_report(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(request, backend, "GET", "/api/reports", "Failed to fetch reports")


@router.post("/reports/export", dependencies=[Depends(require_bearer)])
async def export_report(request: Request):
    """Download a business report for ``{dateRange, reportData}`` as HTML"""
    body = as_dict(await read_json_body(request))
    date_range = body.get("dateRange", "30")

    html = render_report(as_dict(body.get("reportData")), date_range)
    logger.info(f"Exported report for last {date_range} days")
    return Response(
        content=html,
        media_type="text/html",
        headers={"Content-Disposition": f'attachment; filename="{report_filename()}"'},
    )


# ==================== Profile ====================

@router.get("/profile")
async def get_profile(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(request, backend, "GET", "/api/admin/profile", "Failed to fetch profile")


@router.put("/change-password")
async def change_password(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "PUT", "/api/admin/change-password", "Failed to change password"
    )
