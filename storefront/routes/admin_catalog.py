"""Admin product and category routes"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Request

from ..services.backend_client import BackendClient
from .admin_proxy import as_dict, forward, read_json_body
from .deps import get_backend_client

router = APIRouter(prefix="/api/admin", tags=["Admin Catalog"])


# ==================== Products ====================

@router.get("/products")
async def list_products(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    """Admin product listing, reshaped to ``{data, pagination}``"""
    body = as_dict(await forward(
        request, backend, "GET", "/api/products/admin", "Failed to fetch products"
    ))
    return {
        "data": body.get("products") or [],
        "pagination": body.get("pagination") or {},
        "error": body.get("error") or False,
        "message": body.get("message"),
    }


@router.post("/products")
async def create_product(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    """Create a product; multipart image uploads pass through untouched"""
    return await forward(request, backend, "POST", "/api/products", "Failed to create product")


@router.get("/products/{product_id}")
async def get_product(
    product_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    body = as_dict(await forward(
        request, backend, "GET", f"/api/products/admin/{product_id}", "Failed to fetch product"
    ))
    return {
        "data": body.get("product"),
        "error": body.get("error") or False,
        "message": body.get("message"),
    }


@router.put("/products/{product_id}")
async def update_product(
    product_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "PUT", f"/api/products/{product_id}", "Failed to update product"
    )


@router.patch("/products/{product_id}")
async def patch_product(
    product_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    # The backend only knows PUT for product updates
    return await forward(
        request, backend, "PUT", f"/api/products/{product_id}", "Failed to update product"
    )


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "DELETE", f"/api/products/{product_id}", "Failed to delete product"
    )


@router.patch("/products/{product_id}/primary-image")
async def set_primary_image(
    product_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    """Mark one of the product's images as primary"""
    body = await read_json_body(request)
    image_id: Optional[int] = body.get("image_id") if isinstance(body, dict) else None
    if not image_id:
        raise HTTPException(status_code=400, detail="Image ID is required")

    return await forward(
        request,
        backend,
        "PATCH",
        f"/api/products/{product_id}/primary-image",
        "Failed to update primary image",
        json={"image_id": image_id},
    )


@router.delete("/products/{product_id}/images/{image_id}")
async def delete_product_image(
    product_id: int,
    image_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request,
        backend,
        "DELETE",
        f"/api/products/{product_id}/images/{image_id}",
        "Failed to delete image",
    )


# ==================== Categories ====================

@router.get("/categories")
async def list_categories(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    """Category listing, reshaped to ``{data}``"""
    body = as_dict(await forward(
        request, backend, "GET", "/api/categories", "Failed to fetch categories"
    ))
    return {
        "data": body.get("categories") or body.get("data") or [],
        "error": body.get("error") or False,
        "message": body.get("message"),
    }


@router.post("/categories")
async def create_category(
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(request, backend, "POST", "/api/categories", "Failed to create category")


@router.put("/categories/{category_id}")
async def update_category(
    category_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "PUT", f"/api/categories/{category_id}", "Failed to update category"
    )


@router.delete("/categories/{category_id}")
async def delete_category(
    category_id: int,
    request: Request,
    backend: BackendClient = Depends(get_backend_client),
):
    return await forward(
        request, backend, "DELETE", f"/api/categories/{category_id}", "Failed to delete category"
    )
