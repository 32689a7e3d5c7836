from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(User.id == user_id, User.deleted_at.is_(None))
            .first()
        )

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def list_active(self) -> List[User]:
        return self.db.query(User).filter(User.deleted_at.is_(None)).order_by(User.id).all()

    def count(self) -> int:
        return (
            self.db.query(func.count(User.id)).filter(User.deleted_at.is_(None)).scalar() or 0
        )

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def soft_delete(self, user: User) -> User:
        user.deleted_at = datetime.now(timezone.utc)
        self.db.flush()
        return user
