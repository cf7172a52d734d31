"""Admin order and customer routes"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from ..security.auth import require_bearer
from ..services.backend_client import BackendClient
from ..services.documents import receipt_filename, render_receipt
from .admin_proxy import as_dict, forward
from .deps import get_backend_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin Orders"])


# ==================== Orders ====================

@router.get("/orders")
async def list_orders(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    """List orders; filters in the query string are passed through"""
    return await forward(request, backend, "GET", "/api/orders", "Failed to fetch orders")


@router.get("/orders/{order_id}")
async def get_order(
    order_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(request, backend, "GET", f"/api/orders/{order_id}", "Failed to fetch order")


@router.put("/orders/{order_id}/status")
async def update_order_status(
    order_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "PUT", f"/api/orders/{order_id}/status", "Failed to update order status"
    )


@router.post("/orders/{order_id}/confirm")
async def confirm_order(
    order_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "POST", f"/api/orders/{order_id}/confirm", "Failed to confirm order"
    )


@router.post("/orders/{order_id}/mark-sold", dependencies=[Depends(require_bearer)])
async def mark_order_sold(
    order_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "POST", f"/api/orders/{order_id}/mark-sold", "Failed to mark order as sold"
    )


@router.api_route(
    "/orders/{order_id}/receipt",
    methods=["GET", "POST"],
    dependencies=[Depends(require_bearer)],
)
async def order_receipt(
    order_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    """Download the order receipt as an HTML document"""
    body = as_dict(await forward(
        request, backend, "GET", f"/api/orders/{order_id}", "Failed to fetch order details"
    ))
    order = body.get("data") if isinstance(body.get("data"), dict) else body

    html = render_receipt(order)
    logger.info(f"Generated receipt for order {order_id}")
    return Response(
        content=html,
        media_type="text/html",
        headers={"Content-Disposition": f'attachment; filename="{receipt_filename(order_id)}"'},
    )


# ==================== Customers ====================

@router.get("/customers")
async def list_customers(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(request, backend, "GET", "/api/customers", "Failed to fetch customers")


@router.get("/customers/{email}")
async def get_customer(
    email: str,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(request, backend, "GET", f"/api/customers/{email}", "Failed to fetch customer")
