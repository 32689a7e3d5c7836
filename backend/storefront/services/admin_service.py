from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.models.order import Order, OrderItem
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.user_repo import UserRepository


class AdminService:
    def __init__(self, db: Session):
        self.db = db
        self.orders = OrderRepository(db)
        self.products = ProductRepository(db)
        self.users = UserRepository(db)

    def _revenue(self) -> Decimal:
        total = (
            self.db.query(func.coalesce(func.sum(Order.total_price), 0))
            .filter(Order.is_paid.is_(True))
            .scalar()
        )
        return Decimal(total or 0)

    def _sales_chart(self, days: int = 30):
        since = datetime.now(timezone.utc) - timedelta(days=days)
        day = func.date(Order.created_at)
        rows = (
            self.db.query(day.label("day"), func.sum(Order.total_price).label("total"))
            .filter(Order.created_at >= since, Order.is_paid.is_(True))
            .group_by(day)
            .order_by(day)
            .all()
        )
        return [{"date": str(r.day), "totalSales": float(r.total or 0)} for r in rows]

    def _best_sellers(self, limit: int = 5):
        sold = func.sum(OrderItem.quantity)
        rows = (
            self.db.query(
                OrderItem.product_id,
                func.min(OrderItem.name).label("name"),
                sold.label("total_sold"),
                func.sum(OrderItem.price * OrderItem.quantity).label("revenue"),
            )
            .group_by(OrderItem.product_id)
            .order_by(sold.desc(), OrderItem.product_id)
            .limit(limit)
            .all()
        )
        return [
            {
                "product": r.product_id,
                "name": r.name,
                "totalSold": int(r.total_sold or 0),
                "revenue": float(r.revenue or 0),
            }
            for r in rows
        ]

    def dashboard_stats(self) -> dict:
        """Counts, paid revenue, 30-day sales chart, best sellers and the newest orders."""
        return {
            "counts": {
                "users": self.users.count(),
                "products": self.products.count(),
                "orders": self.db.query(func.count(Order.id)).scalar() or 0,
                "revenue": float(self._revenue()),
            },
            "salesChart": self._sales_chart(),
            "bestSellers": self._best_sellers(),
            "recentOrders": self.orders.recent(5),
        }
