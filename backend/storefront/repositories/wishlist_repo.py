from typing import Optional

from sqlalchemy.orm import Session, selectinload

from storefront.models.wishlist import Wishlist, WishlistEntry


class WishlistRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: int) -> Optional[Wishlist]:
        return (
            self.db.query(Wishlist)
            .options(selectinload(Wishlist.entries))
            .filter(Wishlist.user_id == user_id)
            .first()
        )

    def create_for_user(self, user_id: int) -> Wishlist:
        w = Wishlist(user_id=user_id)
        self.db.add(w)
        self.db.flush()
        return w

    def append(self, wishlist: Wishlist, product_id: int) -> WishlistEntry:
        position = max((e.position for e in wishlist.entries), default=-1) + 1
        entry = WishlistEntry(product_id=product_id, position=position)
        wishlist.entries.append(entry)
        self.db.flush()
        return entry

    def remove(self, wishlist: Wishlist, product_id: int) -> None:
        wishlist.entries = [e for e in wishlist.entries if e.product_id != product_id]
        self.db.flush()
