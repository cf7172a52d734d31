"""
Public Catalog Client

Client for the backend's public API: catalog browsing and customer
order submission. Requests carry the storefront API key.
"""

import logging
from typing import Optional

import httpx

from ..models.checkout import OrderRequest, OrderResult
from ..models.product import Category, Product
from .backend_client import BackendClient, BackendClientError

logger = logging.getLogger(__name__)


class PublicClient:
    """Client for ``<backend>/api/public``"""

    def __init__(
        self,
        public_api_url: str,
        asset_base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize public client.

        Args:
            public_api_url: Base URL of the public API
            asset_base_url: Prefix for relative image paths
            api_key: Storefront API key sent as ``x-api-key``
            timeout: Request timeout in seconds
            transport: Custom transport, used by tests
        """
        headers = {
            "Accept": "application/json",
            "X-Requested-With": "XMLHttpRequest",
        }
        if api_key:
            headers["x-api-key"] = api_key
        else:
            logger.warning("No public API key configured - catalog requests may be rejected")

        self.asset_base_url = asset_base_url.rstrip("/")
        self.backend = BackendClient(
            public_api_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    async def close(self) -> None:
        await self.backend.close()

    def _product(self, raw: dict) -> Product:
        return Product.model_validate(raw).with_absolute_images(self.asset_base_url)

    # ==================== Catalog APIs ====================

    async def list_products(self) -> list[Product]:
        """List active products"""
        body = await self.backend.request_json("GET", "/products")

        # Public routes answer {success, data}, admin-shaped routes {error, products}
        if isinstance(body, dict) and isinstance(body.get("data"), list):
            raw_products = body["data"]
        elif isinstance(body, dict) and isinstance(body.get("products"), list):
            raw_products = body["products"]
        else:
            raise BackendClientError("Invalid response format")

        return [self._product(p) for p in raw_products]

    async def get_product(self, product_id: int) -> Product:
        """Get product details"""
        body = await self.backend.request_json("GET", f"/products/{product_id}")
        raw = body.get("data") if isinstance(body, dict) else None
        if not isinstance(raw, dict):
            raise BackendClientError("Product not found", status_code=404)
        return self._product(raw)

    async def list_categories(self) -> list[Category]:
        """List product categories"""
        body = await self.backend.request_json("GET", "/categories")

        if isinstance(body, dict) and isinstance(body.get("data"), list):
            raw_categories = body["data"]
        elif isinstance(body, dict) and isinstance(body.get("categories"), list):
            raw_categories = body["categories"]
        else:
            raise BackendClientError("Invalid response format")

        return [Category.model_validate(c) for c in raw_categories]

    async def featured_products(self) -> list[Product]:
        """Products flagged as featured"""
        body = await self.backend.request_json("GET", "/featured-products")
        raw_products = body.get("data") if isinstance(body, dict) else body
        if not isinstance(raw_products, list):
            raise BackendClientError("Invalid response format")
        return [self._product(p) for p in raw_products]

    # ==================== Order APIs ====================

    async def submit_order(self, order: OrderRequest) -> OrderResult:
        """
        Submit a customer order.

        Backend rejections come back as an unsuccessful OrderResult;
        transport failures raise BackendUnavailableError.
        """
        response = await self.backend.request("POST", "/orders", json=order.to_payload())

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.status_code >= 400 or body.get("success") is False:
            message = body.get("message") or body.get("error")
            logger.warning(f"Order rejected by backend: {response.status_code} - {message}")
            return OrderResult(
                success=False,
                error=message if isinstance(message, str) and message else "Failed to submit order",
            )

        data = body.get("data") if isinstance(body.get("data"), dict) else {}
        order_id = data.get("orderId")
        logger.info(f"Order {order_id} submitted: {order.total_amount} for {order.customer_email}")
        return OrderResult(success=True, order_id=order_id)
