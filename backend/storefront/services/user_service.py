from typing import List

from sqlalchemy.orm import Session

from storefront.errors import Conflict, NotFound
from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository
from storefront.utils.transactions import atomic


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)

    def update_profile(self, user: User, name: str = None, email: str = None) -> User:
        with atomic(self.db):
            if email and email.lower() != user.email.lower():
                other = self.repo.get_by_email(email)
                if other and other.id != user.id:
                    raise Conflict("Email already in use")
                user.email = email
            if name:
                user.name = name
        return user

    def delete_account(self, user: User) -> None:
        with atomic(self.db):
            self.repo.soft_delete(user)

    def list_users(self) -> List[User]:
        return self.repo.list_active()

    def delete_user(self, user_id: int) -> None:
        with atomic(self.db):
            user = self.repo.get(user_id)
            if not user:
                raise NotFound("User not found")
            self.repo.soft_delete(user)
