from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.errors import Conflict, InvalidInput, NotFound
from storefront.models.cart import Cart
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.utils.logging import get_logger
from storefront.utils.transactions import atomic

log = get_logger(__name__)


class CartService:
    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.product_repo = ProductRepository(db)

    def _view(self, cart: Optional[Cart]) -> dict:
        """
        Read model of a cart. Lines are joined to the live catalog; lines whose
        product is gone or soft-deleted are hidden here but stay in storage.
        """
        if cart is None:
            return {"id": None, "items": [], "subtotal": Decimal("0")}
        products = self.product_repo.get_many(it.product_id for it in cart.items)
        lines = []
        for it in cart.items:
            product = products.get(it.product_id)
            if product is None:
                continue
            price = Decimal(it.price)
            lines.append(
                {
                    "id": it.id,
                    "product_id": it.product_id,
                    "name": product.name,
                    "slug": product.slug,
                    "brand": product.brand,
                    "image": product.image,
                    "available": bool(product.is_active),
                    "size": it.size,
                    "quantity": it.quantity,
                    "price": price,
                    "line_total": price * it.quantity,
                }
            )
        subtotal = sum((ln["line_total"] for ln in lines), Decimal("0"))
        return {"id": cart.id, "items": lines, "subtotal": subtotal}

    def _require_cart(self, user_id: int) -> Cart:
        cart = self.cart_repo.get_by_user(user_id)
        if not cart:
            raise NotFound("Cart not found")
        return cart

    def get_cart(self, user_id: int) -> dict:
        return self._view(self.cart_repo.get_by_user(user_id))

    def add_to_cart(self, user_id: int, product_id: int, size: int, quantity: int) -> dict:
        if not isinstance(quantity, int) or quantity <= 0:
            raise InvalidInput("Quantity must be a positive integer")
        product = self.product_repo.get(product_id)
        if not product:
            raise NotFound("Product not found")
        price = product.effective_price

        try:
            with atomic(self.db):
                cart = self.cart_repo.get_by_user(user_id) or self.cart_repo.create_for_user(user_id)
                line = cart.find_line(product_id, size)
                if line:
                    # merge: price snapshot follows the latest add
                    line.quantity += quantity
                    line.price = price
                else:
                    self.cart_repo.append_item(cart, product_id, size, quantity, price)
                self.cart_repo.save(cart)
        except IntegrityError:
            # a concurrent request created the same cart or line first
            log.warning("cart user=%s add product=%s lost a concurrent write", user_id, product_id)
            raise Conflict("Cart was changed by another request, please retry")
        log.info("cart user=%s add product=%s size=%s qty=%s", user_id, product_id, size, quantity)
        return self._view(cart)

    def update_cart_item(self, user_id: int, item_id: str, quantity: int) -> dict:
        with atomic(self.db):
            cart = self._require_cart(user_id)
            item = cart.find_item(item_id)
            if not item:
                raise NotFound("Item not found in cart")
            if quantity <= 0:
                self.cart_repo.remove_item(cart, item)
            else:
                item.quantity = quantity
            self.cart_repo.save(cart)
        log.info("cart user=%s set item=%s qty=%s", user_id, item_id, quantity)
        return self._view(cart)

    def remove_from_cart(self, user_id: int, item_id: str) -> dict:
        with atomic(self.db):
            cart = self._require_cart(user_id)
            item = cart.find_item(item_id)
            if not item:
                raise NotFound("Item not found in cart")
            self.cart_repo.remove_item(cart, item)
            self.cart_repo.save(cart)
        log.info("cart user=%s remove item=%s", user_id, item_id)
        return self._view(cart)

    def clear_cart(self, user_id: int) -> dict:
        cart = self.cart_repo.get_by_user(user_id)
        if cart is None:
            return self._view(None)
        with atomic(self.db):
            cart.items = []
            self.cart_repo.save(cart)
        return self._view(cart)
