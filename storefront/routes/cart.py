"""Cart API routes for the storefront"""

from typing import Optional

from fastapi import APIRouter, Depends

from ..core.session import CartSession
from ..models.cart import (
    CartLine,
    CartResponse,
    RestoreCartRequest,
    UpdateOptionsRequest,
    UpdateQuantityRequest,
)
from .deps import get_cart_session

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def _response(session: CartSession, message: Optional[str] = None) -> CartResponse:
    session.touch()
    return CartResponse(
        session_id=session.session_id,
        cart=session.cart.state,
        message=message,
    )


@router.get("", response_model=CartResponse)
async def get_cart(session: CartSession = Depends(get_cart_session)):
    """Get the session's cart"""
    return _response(session)


@router.post("/items", response_model=CartResponse)
async def add_to_cart(
    line: CartLine,
    session: CartSession = Depends(get_cart_session),
):
    """Add a line, merging with an existing line of the same product, size and color"""
    session.cart.add_line(line)
    return _response(session, f"Added {line.quantity}x {line.name} to cart")


@router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: int,
    request: UpdateQuantityRequest,
    session: CartSession = Depends(get_cart_session),
):
    """Set item quantity; zero or less removes the product"""
    session.cart.set_quantity(product_id, request.quantity)
    message = "Item removed" if request.quantity <= 0 else "Cart updated"
    return _response(session, message)


@router.patch("/items/{product_id}/options", response_model=CartResponse)
async def update_cart_item_options(
    product_id: int,
    request: UpdateOptionsRequest,
    session: CartSession = Depends(get_cart_session),
):
    """Change size and/or color of a cart line"""
    session.cart.update_options(product_id, size=request.size, color=request.color)
    return _response(session, "Options updated")


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: int,
    session: CartSession = Depends(get_cart_session),
):
    """Remove every line of a product"""
    session.cart.remove_line(product_id)
    return _response(session, "Item removed")


@router.delete("", response_model=CartResponse)
async def clear_cart(session: CartSession = Depends(get_cart_session)):
    """Clear all items from cart"""
    session.cart.clear()
    return _response(session, "Cart cleared")


@router.put("", response_model=CartResponse)
async def restore_cart(
    request: RestoreCartRequest,
    session: CartSession = Depends(get_cart_session),
):
    """Replace the cart contents with the given lines"""
    session.cart.restore(request.items)
    return _response(session, "Cart restored")


@router.get("/contains/{product_id}")
async def cart_contains(
    product_id: int,
    size: Optional[str] = None,
    color: Optional[str] = None,
    session: CartSession = Depends(get_cart_session),
):
    """Check whether a product (optionally a specific variant) is in the cart"""
    return {
        "session_id": session.session_id,
        "in_cart": session.cart.is_in_cart(product_id, size=size, color=color),
    }
