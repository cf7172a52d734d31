"""
Order submission

Turns a session cart into an order request for the backend order API.
The backend performs stock checks, persistence and status transitions;
this side only validates input and reports the outcome.
"""

import re
import logging

from ..database.carts import CartStore
from ..models.checkout import (
    CheckoutResponse,
    CustomerInfo,
    OrderItem,
    OrderItemOptions,
    OrderRequest,
)
from .backend_client import BackendUnavailableError
from .public_client import PublicClient

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

SUBMIT_FAILED_MESSAGE = "Failed to submit order. Please try again."
SUBMIT_SUCCESS_MESSAGE = (
    "Order submitted successfully! We will contact you within 24 hours "
    "for payment and delivery details."
)


class OrderValidationError(Exception):
    """Order rejected before reaching the backend"""

    def __init__(self, message: str, errors: dict[str, str]):
        super().__init__(message)
        self.message = message
        self.errors = errors


class CheckoutService:
    """Validates, serializes and submits carts as orders"""

    def __init__(self, public_client: PublicClient):
        self.public_client = public_client

    def validate(self, cart: CartStore, customer: CustomerInfo) -> None:
        """Raise OrderValidationError if the order cannot be submitted"""
        if not cart.lines:
            raise OrderValidationError("Cart is empty", {"items": "Cart is empty"})

        missing_options = [line for line in cart.lines if not line.size or not line.color]
        if missing_options:
            names = ", ".join(line.name for line in missing_options)
            message = (
                f"The following items are missing size or color selections: {names}. "
                "Please select options for all items before proceeding."
            )
            raise OrderValidationError(message, {"items": message})

        errors: dict[str, str] = {}
        if not customer.name.strip():
            errors["name"] = "Name is required"
        if not customer.email.strip():
            errors["email"] = "Email is required"
        elif not EMAIL_PATTERN.search(customer.email):
            errors["email"] = "Please enter a valid email"
        if not customer.phone.strip():
            errors["phone"] = "Phone is required"

        if errors:
            raise OrderValidationError("Please fill in all required fields correctly", errors)

    def build_order_request(self, cart: CartStore, customer: CustomerInfo) -> OrderRequest:
        """Serialize the cart and customer contact into an order request"""
        notes = (customer.notes or "").strip() or None
        return OrderRequest(
            customer_name=customer.name.strip(),
            customer_email=customer.email.strip(),
            customer_phone=customer.phone.strip(),
            items=[
                OrderItem(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=line.price,
                    size=line.size,
                    color=line.color,
                    options=OrderItemOptions(size=line.size, color=line.color),
                )
                for line in cart.lines
            ],
            total_amount=cart.total_amount,
            notes=notes,
        )

    async def submit(self, cart: CartStore, customer: CustomerInfo) -> CheckoutResponse:
        """
        Submit the cart as an order.

        The cart is cleared only after the backend accepts the order.
        Failures are reported once and never retried.
        """
        self.validate(cart, customer)
        order = self.build_order_request(cart, customer)

        try:
            result = await self.public_client.submit_order(order)
        except BackendUnavailableError as e:
            logger.error(f"Order submission error: {e}")
            return CheckoutResponse(success=False, error_message=SUBMIT_FAILED_MESSAGE)

        if not result.success:
            return CheckoutResponse(
                success=False,
                error_message=f"Order submission failed: {result.error}",
            )

        cart.clear()
        return CheckoutResponse(
            success=True,
            order_id=result.order_id,
            message=SUBMIT_SUCCESS_MESSAGE,
        )
