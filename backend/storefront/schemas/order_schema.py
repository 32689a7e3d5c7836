from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, Field

from storefront.schemas.common import CamelModel, Money


class OrderItemIn(CamelModel):
    product_id: int = Field(..., validation_alias=AliasChoices("product", "productId", "product_id"))
    name: str
    price: Money = Field(..., ge=0)
    quantity: int = Field(..., gt=0, validation_alias=AliasChoices("quantity", "qty"))
    size: Optional[int] = None
    image: Optional[str] = None


class CheckoutIn(CamelModel):
    order_items: List[OrderItemIn] = []
    shipping_address: Optional[Dict[str, Any]] = None
    payment_method: Optional[str] = None
    items_price: Money = Field(0, ge=0)
    tax_price: Money = Field(0, ge=0)
    shipping_price: Money = Field(0, ge=0)
    total_price: Money = Field(0, ge=0)


class StatusIn(CamelModel):
    status: str


class OrderItemOut(CamelModel):
    product: int = Field(..., validation_alias="product_id")
    name: str
    price: Money
    quantity: int
    size: Optional[int] = None
    image: Optional[str] = None


class OwnerOut(CamelModel):
    id: int
    name: str
    email: str


class OrderOut(CamelModel):
    id: int
    user: OwnerOut
    order_items: List[OrderItemOut] = Field(..., validation_alias="items")
    shipping_address: Optional[Dict[str, Any]] = None
    payment_method: Optional[str] = None
    items_price: Money
    tax_price: Money
    shipping_price: Money
    total_price: Money
    status: str
    is_paid: bool
    paid_at: Optional[datetime] = None
    created_at: datetime
