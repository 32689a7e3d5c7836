from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from storefront.schemas.common import CamelModel, Money

Gender = Literal["men", "women", "unisex"]


def _positive_sizes(v):
    if v is not None and any(s <= 0 for s in v):
        raise ValueError("sizes must be positive integers")
    return v


class ProductOut(CamelModel):
    id: int
    name: str
    slug: str
    brand: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Money
    discount_price: Optional[Money] = None
    effective_price: Money
    images: List[str] = []
    sizes: List[int] = Field(default_factory=list, validation_alias="size_values")
    colors: List[str] = []
    gender: Optional[str] = None
    rating: float = 0
    total_reviews: int = 0
    is_best_seller: bool = False
    is_new_arrival: bool = False
    is_on_sale: bool = False
    is_active: bool = True
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


class ProductSummary(CamelModel):
    """Display fields used by wishlist views."""

    id: int
    name: str
    slug: str
    brand: Optional[str] = None
    price: Money
    discount_price: Optional[Money] = None
    images: List[str] = []
    is_active: bool = True


class ProductIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=256)
    brand: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Money = Field(..., ge=0)
    discount_price: Optional[Money] = Field(None, ge=0)
    images: List[str] = []
    sizes: List[int] = []
    colors: List[str] = []
    gender: Optional[Gender] = None
    is_best_seller: bool = False
    is_new_arrival: bool = False
    is_on_sale: bool = False
    is_active: bool = True

    _check_sizes = field_validator("sizes")(_positive_sizes)


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=256)
    brand: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Money] = Field(None, ge=0)
    discount_price: Optional[Money] = Field(None, ge=0)
    images: Optional[List[str]] = None
    sizes: Optional[List[int]] = None
    colors: Optional[List[str]] = None
    gender: Optional[Gender] = None
    is_best_seller: Optional[bool] = None
    is_new_arrival: Optional[bool] = None
    is_on_sale: Optional[bool] = None
    is_active: Optional[bool] = None

    _check_sizes = field_validator("sizes")(_positive_sizes)

    @field_validator(
        "name", "price", "images", "sizes", "colors",
        "is_best_seller", "is_new_arrival", "is_on_sale", "is_active",
    )
    @classmethod
    def _not_null(cls, v, info):
        # omit the field to leave it unchanged; these columns cannot be cleared
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v
