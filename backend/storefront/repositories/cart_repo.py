from typing import Optional

from sqlalchemy.orm import Session, selectinload

from storefront.models.cart import Cart
from storefront.models.cart_item import CartItem


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: int) -> Optional[Cart]:
        return (
            self.db.query(Cart)
            .options(selectinload(Cart.items))
            .filter(Cart.user_id == user_id)
            .first()
        )

    def create_for_user(self, user_id: int) -> Cart:
        c = Cart(user_id=user_id, subtotal=0)
        self.db.add(c)
        self.db.flush()
        return c

    def append_item(
        self, cart: Cart, product_id: int, size: int, quantity: int, price
    ) -> CartItem:
        position = max((it.position for it in cart.items), default=-1) + 1
        item = CartItem(
            product_id=product_id,
            size=size,
            quantity=quantity,
            price=price,
            position=position,
        )
        cart.items.append(item)
        return item

    def remove_item(self, cart: Cart, item: CartItem) -> None:
        # delete-orphan cascade removes the row on flush
        cart.items = [it for it in cart.items if it is not item]

    def save(self, cart: Cart) -> Cart:
        """Recompute the derived subtotal and flush; callers commit once afterwards."""
        cart.recalculate_subtotal()
        self.db.add(cart)
        self.db.flush()
        return cart
