# Storefront Models

from .cart import (
    CartLine,
    CartState,
    CartResponse,
    UpdateQuantityRequest,
    UpdateOptionsRequest,
    RestoreCartRequest,
)
from .checkout import (
    CustomerInfo,
    OrderItem,
    OrderItemOptions,
    OrderRequest,
    OrderResult,
    CheckoutResponse,
)
from .product import Product, ProductColor, ProductFeature, Category, ProductListResponse
from .auth import LoginRequest, RefreshRequest, AuthResponse, validate_login_input

__all__ = [
    "CartLine",
    "CartState",
    "CartResponse",
    "UpdateQuantityRequest",
    "UpdateOptionsRequest",
    "RestoreCartRequest",
    "CustomerInfo",
    "OrderItem",
    "OrderItemOptions",
    "OrderRequest",
    "OrderResult",
    "CheckoutResponse",
    "Product",
    "ProductColor",
    "ProductFeature",
    "Category",
    "ProductListResponse",
    "LoginRequest",
    "RefreshRequest",
    "AuthResponse",
    "validate_login_input",
]
