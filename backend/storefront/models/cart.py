from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship

from storefront.db import Base


class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id"), unique=True, index=True, nullable=False
    )  # one cart per user
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.position",
    )

    def recalculate_subtotal(self) -> Decimal:
        # subtotal is derived; this is the only place it is assigned
        self.subtotal = sum(
            (Decimal(it.price) * it.quantity for it in self.items), Decimal("0")
        )
        return self.subtotal

    def find_line(self, product_id: int, size: int):
        return next(
            (it for it in self.items if it.product_id == product_id and it.size == size),
            None,
        )

    def find_item(self, item_id: str):
        return next((it for it in self.items if it.id == item_id), None)
