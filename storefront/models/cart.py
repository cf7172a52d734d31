"""Cart models for the storefront"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional


class CartLine(BaseModel):
    """
    One product/variant/quantity entry in a pending order.

    Serialized with the browser-side names (``id``, ``originalPrice``, ...)
    so persisted carts stay readable by the storefront frontend.
    """
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(
        validation_alias=AliasChoices("id", "productId", "product_id"),
        serialization_alias="id",
    )
    name: str
    price: float = Field(ge=0)
    original_price: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("originalPrice", "original_price"),
        serialization_alias="originalPrice",
    )
    image: str = Field(
        default="",
        validation_alias=AliasChoices("image", "imageRef", "image_ref"),
    )
    category: str = ""
    quantity: int = Field(gt=0)
    size: Optional[str] = None
    color: Optional[str] = None
    material: str = ""

    @property
    def key(self) -> tuple[int, Optional[str], Optional[str]]:
        """Uniqueness key of a line inside a cart"""
        return (self.product_id, self.size, self.color)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class CartState(BaseModel):
    """Shopping cart with derived totals"""
    model_config = ConfigDict(populate_by_name=True)

    items: list[CartLine] = []
    total_items: int = Field(default=0, alias="totalItems")
    total_amount: float = Field(default=0.0, alias="totalAmount")


class UpdateQuantityRequest(BaseModel):
    """Request to set a line quantity (<= 0 removes the product)"""
    quantity: int


class UpdateOptionsRequest(BaseModel):
    """Request to change size and/or color of a cart line"""
    size: Optional[str] = None
    color: Optional[str] = None


class RestoreCartRequest(BaseModel):
    """Request to replace the cart contents"""
    items: list[CartLine] = []


class CartResponse(BaseModel):
    """Cart API response"""
    session_id: str
    cart: CartState
    message: Optional[str] = None
