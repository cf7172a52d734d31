"""Catalog API routes for the storefront"""

from fastapi import APIRouter, HTTPException, Depends

from ..models.product import Category, Product, ProductListResponse
from ..services.backend_client import BackendClientError
from ..services.public_client import PublicClient
from .deps import get_public_client

router = APIRouter(prefix="/api", tags=["Catalog"])


def _catalog_error(action: str, error: BackendClientError) -> HTTPException:
    if error.status_code == 404:
        return HTTPException(status_code=404, detail=error.message)
    return HTTPException(status_code=502, detail=f"{action}: {error.message}")


@router.get("/products", response_model=ProductListResponse)
async def list_products(client: PublicClient = Depends(get_public_client)):
    """List active products"""
    try:
        products = await client.list_products()
    except BackendClientError as e:
        raise _catalog_error("Failed to fetch products", e)
    return ProductListResponse(products=products, total=len(products))


@router.get("/products/{product_id}", response_model=Product)
async def get_product(
    product_id: int,
    client: PublicClient = Depends(get_public_client),
):
    """Get product details"""
    try:
        return await client.get_product(product_id)
    except BackendClientError as e:
        raise _catalog_error("Failed to fetch product", e)


@router.get("/categories", response_model=list[Category])
async def list_categories(client: PublicClient = Depends(get_public_client)):
    """List product categories"""
    try:
        return await client.list_categories()
    except BackendClientError as e:
        raise _catalog_error("Failed to fetch categories", e)


@router.get("/featured-products", response_model=list[Product])
async def featured_products(client: PublicClient = Depends(get_public_client)):
    """Products flagged as featured"""
    try:
        return await client.featured_products()
    except BackendClientError as e:
        raise _catalog_error("Failed to fetch featured products", e)
