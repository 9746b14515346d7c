"""
services/user_service.py
-------------------------
Entry point for callers that work with users without touching
the repository directly. Delegates every call unchanged.
"""

from typing import Optional

from models.user import User
from repositories.user_repo import UserRepository


class UserService:
    """Thin facade over a UserRepository."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def find_all(self) -> list[User]:
        return self.user_repo.find_all()

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        return self.user_repo.find_by_id(user_id)

    def save(self, user: User) -> User:
        return self.user_repo.save(user)

    def update(self, user: User) -> None:
        self.user_repo.update(user)

    def delete(self, user: User) -> bool:
        """Delete the stored row for `user` (matched by id)."""
        return self.user_repo.delete_by_id(user.id)
