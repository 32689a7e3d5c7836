from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.errors import Conflict, Forbidden, InvalidInput, NotFound
from storefront.models.order import ALLOWED_TRANSITIONS, Order, OrderItem, OrderStatus
from storefront.models.user import User
from storefront.repositories.order_repo import OrderRepository
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger
from storefront.utils.transactions import atomic

log = get_logger(__name__)

_CENT = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(_CENT)


class OrderService:
    def __init__(self, db: Session, verify_totals: Optional[bool] = None, enforce_transitions: Optional[bool] = None):
        self.db = db
        self.order_repo = OrderRepository(db)
        self.notifications = NotificationService(db)
        self.verify_totals = (
            settings.VERIFY_CHECKOUT_TOTALS if verify_totals is None else verify_totals
        )
        self.enforce_transitions = (
            settings.ENFORCE_ORDER_TRANSITIONS
            if enforce_transitions is None
            else enforce_transitions
        )

    def _check_totals(self, items: List[Dict], items_price, tax_price, shipping_price, total_price):
        expected_items = sum((_money(it["price"]) * int(it["quantity"]) for it in items), Decimal("0"))
        if _money(items_price) != expected_items:
            raise InvalidInput(
                f"itemsPrice {_money(items_price)} does not match order items ({expected_items})"
            )
        expected_total = _money(items_price) + _money(tax_price) + _money(shipping_price)
        if _money(total_price) != expected_total:
            raise InvalidInput(
                f"totalPrice {_money(total_price)} does not match items + tax + shipping ({expected_total})"
            )

    def create_order(
        self,
        user_id: int,
        order_items: List[Dict],
        shipping_address: Optional[Dict],
        payment_method: Optional[str],
        items_price=0,
        tax_price=0,
        shipping_price=0,
        total_price=0,
    ) -> Order:
        """
        order_items: list of {product_id, name, price, quantity, size?, image?}
        Prices are stored as submitted; the cart is left untouched.
        """
        if not order_items:
            raise InvalidInput("No order items")
        if self.verify_totals:
            self._check_totals(order_items, items_price, tax_price, shipping_price, total_price)

        with atomic(self.db):
            order = Order(
                user_id=user_id,
                shipping_address=shipping_address,
                payment_method=payment_method,
                items_price=items_price,
                tax_price=tax_price,
                shipping_price=shipping_price,
                total_price=total_price,
                status=OrderStatus.PENDING.value,
            )
            for it in order_items:
                order.items.append(
                    OrderItem(
                        product_id=it["product_id"],
                        name=it["name"],
                        price=it["price"],
                        quantity=int(it["quantity"]),
                        size=it.get("size"),
                        image=it.get("image"),
                    )
                )
            self.order_repo.add(order)
        log.info("order %s created for user=%s total=%s", order.id, user_id, total_price)
        return order

    def get_order(self, order_id: int, acting_user: User) -> Order:
        order = self.order_repo.get(order_id)
        if not order:
            raise NotFound("No order found with that ID")
        if order.user_id != acting_user.id and not acting_user.is_admin:
            raise Forbidden("Not authorized to view this order")
        return order

    def get_my_orders(self, user_id: int) -> List[Order]:
        return self.order_repo.list_for_user(user_id)

    def get_all_orders(self) -> List[Order]:
        return self.order_repo.list_all()

    def update_order_status(self, order_id: int, new_status: str) -> Order:
        try:
            target = OrderStatus(new_status)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise InvalidInput(f"Invalid status '{new_status}'. Allowed: {allowed}")

        with atomic(self.db):
            order = self.order_repo.get(order_id)
            if not order:
                raise NotFound("Order not found")
            current = OrderStatus(order.status)
            if self.enforce_transitions and target != current and target not in ALLOWED_TRANSITIONS[current]:
                raise Conflict(f"Cannot change order status from {current.value} to {target.value}")
            order.status = target.value
            self.notifications.notify(
                order.user_id,
                title="Order status updated",
                message=f"Your order #{order.id} is now {target.value}.",
            )
        log.info("order %s status %s -> %s", order_id, current.value, target.value)
        return order

    def mark_paid(self, order_id: int) -> Order:
        with atomic(self.db):
            order = self.order_repo.get(order_id)
            if not order:
                raise NotFound("Order not found")
            if not order.is_paid:
                order.is_paid = True
                order.paid_at = datetime.now(timezone.utc)
        log.info("order %s marked paid", order_id)
        return order
