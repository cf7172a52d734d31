"""Checkout API routes for the storefront"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.session import CartSession
from ..models.checkout import CheckoutResponse, CustomerInfo
from ..services.checkout import CheckoutService, OrderValidationError
from .deps import get_cart_session, get_checkout_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


@router.post("", response_model=CheckoutResponse)
async def checkout(
    customer: CustomerInfo,
    session: CartSession = Depends(get_cart_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Submit the session's cart as an order.

    Invalid input is rejected with 400 before the backend is contacted.
    Backend failures come back as an unsuccessful CheckoutResponse and
    leave the cart untouched.
    """
    try:
        result = await service.submit(session.cart, customer)
    except OrderValidationError as e:
        return JSONResponse(
            status_code=400,
            content={"message": e.message, "errors": e.errors},
        )

    if result.success:
        logger.info(f"Order {result.order_id} placed from session {session.session_id}")
    session.touch()
    return result
