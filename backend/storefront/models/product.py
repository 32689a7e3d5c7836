from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from storefront.db import Base

GENDERS = ("men", "women", "unisex")


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)  # creating admin
    name = Column(String(256), nullable=False)
    slug = Column(String(300), unique=True, index=True, nullable=False)
    brand = Column(String(128), nullable=True, index=True)
    category = Column(String(128), nullable=True, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    discount_price = Column(Numeric(12, 2), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    colors = Column(JSON, nullable=False, default=list)
    gender = Column(String(16), nullable=True)
    rating = Column(Float, nullable=False, default=0)
    total_reviews = Column(Integer, nullable=False, default=0)
    is_best_seller = Column(Boolean, nullable=False, default=False)
    is_new_arrival = Column(Boolean, nullable=False, default=False)
    is_on_sale = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    sizes = relationship(
        "ProductSize",
        cascade="all, delete-orphan",
        order_by="ProductSize.size",
        lazy="selectin",
    )

    @property
    def effective_price(self) -> Decimal:
        """Discount price when one is set and positive, list price otherwise."""
        if self.discount_price:
            return Decimal(self.discount_price)
        return Decimal(self.price or 0)

    @property
    def size_values(self) -> List[int]:
        return [s.size for s in self.sizes]

    @size_values.setter
    def size_values(self, values: List[int]):
        wanted = sorted(set(int(v) for v in values or []))
        # keep existing rows: the flush inserts before it deletes orphans
        existing = {s.size: s for s in self.sizes}
        self.sizes = [existing.get(v) or ProductSize(size=v) for v in wanted]

    @property
    def image(self) -> Optional[str]:
        return self.images[0] if self.images else None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def __repr__(self):
        return f"<Product id={self.id} slug={self.slug}>"


class ProductSize(Base):
    __tablename__ = "product_sizes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    size = Column(Integer, nullable=False, index=True)

    __table_args__ = (UniqueConstraint("product_id", "size", name="u_product_size"),)
