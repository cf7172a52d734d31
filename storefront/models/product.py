"""Catalog models for the storefront"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_int(value: Any) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


class ProductColor(BaseModel):
    color_name: str
    color_code: Optional[str] = None


class ProductFeature(BaseModel):
    feature_name: str
    feature_value: Optional[str] = None


class Product(BaseModel):
    """
    Product in the catalog.

    The backend returns numbers as strings and flags as 0/1 depending on
    the route, so every field is coerced on the way in.
    """
    model_config = ConfigDict(extra="ignore", from_attributes=True)

    id: int
    title: str
    description: str = ""
    price: float = 0.0
    original_price: float = 0.0
    is_on_sale: bool = False
    sale_price: float = 0.0
    stock_quantity: int = 0
    active: bool = False
    is_featured: bool = False
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    colors: list[ProductColor] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)
    features: list[ProductFeature] = Field(default_factory=list)

    @field_validator("price", "original_price", "sale_price", mode="before")
    @classmethod
    def parse_amount(cls, v: Any) -> float:
        return _to_float(v)

    @field_validator("stock_quantity", mode="before")
    @classmethod
    def parse_stock(cls, v: Any) -> int:
        return _to_int(v)

    @field_validator("is_on_sale", "active", "is_featured", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes")
        return bool(v)

    @field_validator("description", mode="before")
    @classmethod
    def parse_description(cls, v: Any) -> str:
        return v or ""

    @field_validator("images", "colors", "features", mode="before")
    @classmethod
    def parse_list(cls, v: Any) -> list:
        return v or []

    @field_validator("sizes", mode="before")
    @classmethod
    def parse_sizes(cls, v: Any) -> list:
        # Admin routes return size rows, public routes return plain names
        return [s.get("size_name", "") if isinstance(s, dict) else s for s in (v or [])]

    def with_absolute_images(self, base_url: str) -> "Product":
        """Return a copy whose relative image paths point at the backend"""
        base = base_url.rstrip("/")
        images = [img if img.startswith("http") else f"{base}{img}" for img in self.images]
        return self.model_copy(update={"images": images})


class Category(BaseModel):
    """Product category"""
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None


class ProductListResponse(BaseModel):
    """Response from product listing"""
    products: list[Product]
    total: int
