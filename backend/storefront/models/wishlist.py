from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.db import Base


class Wishlist(Base):
    __tablename__ = "wishlists"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id"), unique=True, index=True, nullable=False
    )
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    entries = relationship(
        "WishlistEntry",
        back_populates="wishlist",
        cascade="all, delete-orphan",
        order_by="WishlistEntry.position",
    )

    @property
    def product_ids(self):
        return [e.product_id for e in self.entries]

    def contains(self, product_id: int) -> bool:
        return any(e.product_id == product_id for e in self.entries)


class WishlistEntry(Base):
    __tablename__ = "wishlist_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    wishlist_id = Column(
        Integer, ForeignKey("wishlists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    wishlist = relationship("Wishlist", back_populates="entries")

    __table_args__ = (
        UniqueConstraint("wishlist_id", "product_id", name="u_wishlist_product"),
    )
