from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.errors import Conflict, NotFound
from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.wishlist_repo import WishlistRepository
from storefront.utils.transactions import atomic


class WishlistService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = WishlistRepository(db)
        self.product_repo = ProductRepository(db)

    def get_wishlist(self, user_id: int) -> List[Product]:
        """Products in insertion order; references that no longer resolve are dropped."""
        wishlist = self.repo.get_by_user(user_id)
        if not wishlist:
            return []
        ids = wishlist.product_ids
        products = self.product_repo.get_many(ids)
        return [products[pid] for pid in ids if pid in products]

    def add(self, user_id: int, product_id: int) -> None:
        if not self.product_repo.get(product_id):
            raise NotFound("Product not found")
        try:
            with atomic(self.db):
                wishlist = self.repo.get_by_user(user_id) or self.repo.create_for_user(user_id)
                if wishlist.contains(product_id):
                    raise Conflict("Product already in wishlist")
                self.repo.append(wishlist, product_id)
        except IntegrityError:
            # a concurrent request created the wishlist or entry first
            raise Conflict("Wishlist was changed by another request, please retry")

    def remove(self, user_id: int, product_id: int) -> None:
        with atomic(self.db):
            wishlist = self.repo.get_by_user(user_id)
            if not wishlist:
                raise NotFound("Wishlist not found")
            if not wishlist.contains(product_id):
                raise NotFound("Product not in wishlist")
            self.repo.remove(wishlist, product_id)
