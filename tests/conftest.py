"""Shared fixtures for the storefront test suite"""

import os

# Settings are read once at import time
os.environ.setdefault("CSRF_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_MAX_REQUESTS", "100000")
os.environ.setdefault("PUBLIC_API_KEY", "test-public-key")

import json
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from storefront.core.session import CartSessionManager
from storefront.database.carts import CartStore
from storefront.database.storage import MemoryStorage
from storefront.models.cart import CartLine
from storefront.routes import deps
from storefront.services.backend_client import BackendClient
from storefront.services.public_client import PublicClient

BACKEND_URL = "http://backend.test"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def cart(storage) -> CartStore:
    return CartStore(storage, "atlantic-leather-cart:test")


@pytest.fixture
def make_line() -> Callable[..., CartLine]:
    """Build a cart line with sensible defaults"""

    def _make_line(**overrides) -> CartLine:
        fields = {
            "id": 1,
            "name": "Classic Leather Jacket",
            "price": 100.0,
            "image": "/uploads/jacket.jpg",
            "category": "Jackets",
            "quantity": 1,
            "size": "M",
            "color": "Black",
            "material": "Leather",
        }
        fields.update(overrides)
        return CartLine.model_validate(fields)

    return _make_line


class FakeBackend:
    """
    Scripted backend for httpx.MockTransport.

    Handlers are registered per (method, path); every request is recorded.
    Unregistered routes answer 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, handler=None, status_code: int = 200, json_body=None):
        if handler is None:
            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status_code, json=json_body)
        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": "Not found"})
        return handler(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @staticmethod
    def body(request: httpx.Request):
        return json.loads(request.content) if request.content else None


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def public_client(backend) -> PublicClient:
    return PublicClient(
        public_api_url=f"{BACKEND_URL}/api/public",
        asset_base_url=BACKEND_URL,
        api_key="test-public-key",
        transport=backend.transport(),
    )


@pytest.fixture
def session_manager(storage) -> CartSessionManager:
    return CartSessionManager(storage, "atlantic-leather-cart")


@pytest.fixture
def client(backend, public_client, session_manager):
    """TestClient with the backend faked and fresh in-memory carts"""
    from storefront.main import app

    proxy_client = BackendClient(BACKEND_URL, transport=backend.transport())

    app.dependency_overrides[deps.get_session_manager] = lambda: session_manager
    app.dependency_overrides[deps.get_public_client] = lambda: public_client
    app.dependency_overrides[deps.get_backend_client] = lambda: proxy_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
