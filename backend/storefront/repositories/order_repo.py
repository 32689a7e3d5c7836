from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.models.order import Order


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, order_id: int) -> Optional[Order]:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def list_for_user(self, user_id: int) -> List[Order]:
        return self.db.query(Order).filter(Order.user_id == user_id).order_by(Order.id).all()

    def list_all(self) -> List[Order]:
        return self.db.query(Order).order_by(Order.id).all()

    def recent(self, limit: int = 5) -> List[Order]:
        return (
            self.db.query(Order)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(limit)
            .all()
        )

    def add(self, order: Order) -> Order:
        self.db.add(order)
        self.db.flush()
        return order
