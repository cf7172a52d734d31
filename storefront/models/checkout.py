"""Checkout models for the storefront"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, Union


class CustomerInfo(BaseModel):
    """Customer contact fields entered at checkout"""
    name: str = ""
    email: str = ""
    phone: str = ""
    notes: Optional[str] = None


class OrderItemOptions(BaseModel):
    """Variant options of an ordered item"""
    size: Optional[str] = None
    color: Optional[str] = None


class OrderItem(BaseModel):
    """Line item of an order request"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: int
    quantity: int = Field(gt=0)
    price: float
    size: Optional[str] = None
    color: Optional[str] = None
    options: OrderItemOptions = Field(default_factory=OrderItemOptions)


class OrderRequest(BaseModel):
    """Order request sent to the backend order API"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer_name: str
    customer_email: str
    customer_phone: str
    items: list[OrderItem]
    total_amount: float
    notes: Optional[str] = None

    def to_payload(self) -> dict:
        """Wire representation (camelCase, unset options dropped)"""
        return self.model_dump(by_alias=True, exclude_none=True)


class OrderResult(BaseModel):
    """Outcome reported by the backend order API"""
    success: bool
    order_id: Optional[Union[int, str]] = None
    error: Optional[str] = None


class CheckoutResponse(BaseModel):
    """Response from checkout"""
    success: bool
    order_id: Optional[Union[int, str]] = None
    message: Optional[str] = None
    error_message: Optional[str] = None
