import uuid

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.db import Base


def _item_id() -> str:
    return uuid.uuid4().hex


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(String(32), primary_key=True, default=_item_id)
    cart_id = Column(
        Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # no relationship to Product: lines are resolved through ProductRepository
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    size = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(12, 2), nullable=False)  # effective price at last touch
    position = Column(Integer, nullable=False, default=0)

    cart = relationship("Cart", back_populates="items")

    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", "size", name="u_cart_product_size"),
    )
