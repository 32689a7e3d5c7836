from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.errors import NotFound
from storefront.models.notification import Notification
from storefront.repositories.notification_repo import NotificationRepository
from storefront.utils.transactions import atomic


class NotificationService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository(db)

    def notify(
        self, user_id: int, title: str, message: str, product_id: Optional[int] = None
    ) -> Notification:
        """Queue a notification on the caller's session; the caller commits."""
        return self.repo.add(
            Notification(user_id=user_id, title=title, message=message, product_id=product_id)
        )

    def list_for_user(self, user_id: int) -> List[Notification]:
        return self.repo.list_for_user(user_id)

    def mark_as_read(self, user_id: int, notification_id: int) -> Notification:
        with atomic(self.db):
            n = self.repo.get_owned(notification_id, user_id)
            if not n:
                raise NotFound("Notification not found")
            n.is_read = True
        return n

    def clear(self, user_id: int) -> int:
        with atomic(self.db):
            return self.repo.delete_for_user(user_id)
