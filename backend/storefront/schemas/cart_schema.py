from typing import List, Optional

from pydantic import Field

from storefront.schemas.common import CamelModel, Money


class AddToCartIn(CamelModel):
    product_id: int
    size: int
    quantity: int = Field(1, gt=0)


class UpdateCartItemIn(CamelModel):
    item_id: str
    quantity: int  # <= 0 removes the line


class CartLineOut(CamelModel):
    id: str
    product_id: int
    name: str
    slug: str
    brand: Optional[str] = None
    image: Optional[str] = None
    available: bool
    size: int
    quantity: int
    price: Money
    line_total: Money


class CartOut(CamelModel):
    id: Optional[int] = None
    items: List[CartLineOut] = []
    subtotal: Money
