"""
Admin API Client

Async SDK for the back-office API. Every call carries the admin bearer
token; an expired token is refreshed once through RefreshingTokenAuth and
the call replayed.
"""

import logging
from typing import Optional, Any

import httpx

from .backend_client import BackendClient, BackendClientError
from .auth import AuthenticationError, RefreshingTokenAuth, TokenStore

logger = logging.getLogger(__name__)

ORDER_STATUSES = ("pending", "confirmed", "processing", "shipped", "delivered", "cancelled")
WEBHOOK_PLATFORMS = ("slack", "discord", "custom")


def _unwrap(body: Any) -> Any:
    """Backend envelopes are ``{success, data}``; older routes answer bare"""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


class AdminClient:
    """
    Client for the admin endpoints of ``<backend>/api``.

    Methods return the ``data`` payload of the backend envelope and raise
    BackendClientError on rejection.
    """

    def __init__(
        self,
        backend_url: str,
        tokens: Optional[TokenStore] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize admin client.

        Args:
            backend_url: Backend origin, e.g. http://localhost:3001
            tokens: Token store shared with the caller; a new one if omitted
            timeout: Request timeout in seconds
            transport: Custom transport, used by tests
        """
        api_url = f"{backend_url.rstrip('/')}/api"
        self.tokens = tokens or TokenStore()

        # Login must not go through the refresh flow
        self._anonymous = BackendClient(api_url, timeout=timeout, transport=transport)
        self.backend = BackendClient(
            api_url,
            timeout=timeout,
            auth=RefreshingTokenAuth(self.tokens, f"{api_url}/auth/refresh"),
            transport=transport,
        )

    async def close(self) -> None:
        await self._anonymous.close()
        await self.backend.close()

    async def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        return _unwrap(await self.backend.request_json(method, path, **kwargs))

    # ==================== Auth ====================

    async def login(self, username: str, password: str) -> dict:
        """Sign in and keep the issued token pair"""
        body = await self._anonymous.request_json(
            "POST",
            "/auth/login",
            json={"username": username, "password": password},
        )
        data = _unwrap(body)
        if not isinstance(data, dict) or not data.get("accessToken") or not data.get("refreshToken"):
            raise AuthenticationError("Login failed")

        self.tokens.set_tokens(data["accessToken"], data["refreshToken"], data.get("user"))
        logger.info(f"Admin signed in: {username}")
        return data

    async def logout(self) -> None:
        """Tell the backend and drop the tokens, whether or not the call succeeds"""
        try:
            if self.tokens.access_token:
                await self.backend.request_json("POST", "/auth/logout")
        except BackendClientError as e:
            logger.warning(f"Logout error: {e}")
        finally:
            self.tokens.clear()

    async def get_profile(self) -> dict:
        return await self._call("GET", "/auth/profile")

    @property
    def user(self) -> Optional[dict]:
        return self.tokens.user

    def is_authenticated(self) -> bool:
        return self.tokens.is_authenticated()

    # ==================== Products ====================

    async def list_products(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Any:
        """Admin product listing, inactive products included"""
        params = {
            "page": page,
            "limit": limit,
            "category": category,
            "search": search,
            "status": status,
        }
        body = await self.backend.request_json(
            "GET",
            "/products/admin",
            params={k: v for k, v in params.items() if v is not None},
        )
        if isinstance(body, dict) and "products" in body:
            return body["products"]
        return _unwrap(body)

    async def get_product(self, product_id: int) -> Any:
        body = await self.backend.request_json("GET", f"/products/admin/{product_id}")
        if isinstance(body, dict) and "product" in body:
            return body["product"]
        return _unwrap(body)

    async def create_product(
        self,
        fields: dict[str, Any],
        images: Optional[list[tuple[str, bytes, str]]] = None,
    ) -> Any:
        """
        Create a product.

        Args:
            fields: Product form fields
            images: (filename, content, content_type) tuples uploaded as ``images``
        """
        if not images:
            return await self._call("POST", "/products", json=fields)

        return await self._call(
            "POST",
            "/products",
            data={k: str(v) for k, v in fields.items() if v is not None},
            files=[("images", image) for image in images],
        )

    async def update_product(self, product_id: int, fields: dict[str, Any]) -> Any:
        return await self._call("PUT", f"/products/{product_id}", json=fields)

    async def delete_product(self, product_id: int) -> Any:
        return await self._call("DELETE", f"/products/{product_id}")

    async def set_primary_image(self, product_id: int, image_id: int) -> Any:
        return await self._call(
            "PATCH",
            f"/products/{product_id}/primary-image",
            json={"image_id": image_id},
        )

    async def delete_product_image(self, product_id: int, image_id: int) -> Any:
        return await self._call("DELETE", f"/products/{product_id}/images/{image_id}")

    # ==================== Categories ====================

    async def list_categories(self) -> Any:
        body = await self.backend.request_json("GET", "/categories")
        if isinstance(body, dict) and "categories" in body:
            return body["categories"]
        return _unwrap(body)

    async def create_category(self, fields: dict[str, Any]) -> Any:
        return await self._call("POST", "/categories", json=fields)

    async def update_category(self, category_id: int, fields: dict[str, Any]) -> Any:
        return await self._call("PUT", f"/categories/{category_id}", json=fields)

    async def delete_category(self, category_id: int) -> Any:
        return await self._call("DELETE", f"/categories/{category_id}")

    # ==================== Orders ====================

    async def list_orders(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        payment_status: Optional[str] = None,
        search: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> Any:
        params = {
            "page": page,
            "limit": limit,
            "status": status,
            "paymentStatus": payment_status,
            "search": search,
            "dateFrom": date_from,
            "dateTo": date_to,
        }
        return await self._call(
            "GET",
            "/orders",
            params={k: v for k, v in params.items() if v is not None},
        )

    async def get_order(self, order_id: int) -> Any:
        return await self._call("GET", f"/orders/{order_id}")

    async def update_order_status(
        self,
        order_id: int,
        status: str,
        admin_notes: Optional[str] = None,
    ) -> Any:
        """Move an order through its lifecycle"""
        if status not in ORDER_STATUSES:
            raise ValueError(f"Invalid order status: {status}")

        payload: dict[str, Any] = {"status": status}
        if admin_notes is not None:
            payload["admin_notes"] = admin_notes
        return await self._call("PUT", f"/orders/{order_id}/status", json=payload)

    async def confirm_order(self, order_id: int) -> Any:
        return await self._call("POST", f"/orders/{order_id}/confirm")

    async def mark_order_sold(self, order_id: int) -> Any:
        return await self._call("POST", f"/orders/{order_id}/mark-sold")

    # ==================== Customers ====================

    async def list_customers(self) -> Any:
        return await self._call("GET", "/customers")

    async def get_customer(self, email: str) -> Any:
        return await self._call("GET", f"/customers/{email}")

    # ==================== Notifications ====================

    async def get_notification_settings(self) -> Any:
        return await self._call("GET", "/notifications/settings")

    async def update_notification_settings(self, settings: dict[str, Any]) -> Any:
        return await self._call("PUT", "/notifications/settings", json=settings)

    async def send_test_email(self, admin_email: str) -> Any:
        return await self._call("POST", "/notifications/test-email", json={"admin_email": admin_email})

    async def send_test_webhook(self, webhook_url: str) -> Any:
        return await self._call("POST", "/notifications/test-webhook", json={"webhook_url": webhook_url})

    async def list_notifications(self, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._call("GET", "/notifications-api", params=params)

    async def unread_notification_count(self) -> int:
        data = await self._call("GET", "/notifications-api/unread-count")
        if isinstance(data, dict):
            return int(data.get("count", 0))
        return int(data or 0)

    async def mark_notification_read(self, notification_id: int) -> Any:
        return await self._call("PUT", f"/notifications-api/{notification_id}/read")

    async def mark_all_notifications_read(self) -> Any:
        return await self._call("PUT", "/notifications-api/mark-all-read")

    async def delete_notification(self, notification_id: int) -> Any:
        return await self._call("DELETE", f"/notifications-api/{notification_id}")

    # ==================== Webhooks ====================

    async def get_webhook_settings(self) -> Any:
        return await self._call("GET", "/webhooks/settings")

    async def update_webhook_settings(self, settings: dict[str, Any]) -> Any:
        return await self._call("PUT", "/webhooks/settings", json=settings)

    async def test_webhook(self, platform: str, url: str) -> Any:
        if platform not in WEBHOOK_PLATFORMS:
            raise ValueError(f"Unsupported webhook platform: {platform}")
        return await self._call(
            "POST",
            f"/webhooks/test/{platform}",
            json={f"{platform}_webhook_url": url},
        )

    # ==================== Communication ====================

    async def send_email(
        self,
        order_id: int,
        email_type: str = "order-confirmation",
        custom_message: Optional[str] = None,
    ) -> Any:
        payload: dict[str, Any] = {"order_id": order_id, "email_type": email_type}
        if custom_message:
            payload["custom_message"] = custom_message
        return await self._call("POST", "/communication/email/order-confirmation", json=payload)

    async def send_sms(self, phone_number: str, message: str, order_id: Optional[int] = None) -> Any:
        payload: dict[str, Any] = {"phone_number": phone_number, "message": message}
        if order_id is not None:
            payload["order_id"] = order_id
        return await self._call("POST", "/communication/sms/send", json=payload)

    async def communication_logs(self, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._call("GET", "/communication/logs", params=params)

    # ==================== Reports ====================

    async def get_report(self, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._call("GET", "/reports", params=params)
