"""
User repository backing the dashboard's user counters.
"""
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.contracts import UserCountSource
from models.user import User
from store.repositories.base import BaseRepository


class UserRepository(BaseRepository[User], UserCountSource):
    def __init__(self, db: Session):
        super().__init__(User, db)

    def count_users(self) -> int:
        return self.count()

    def count_users_created_since(self, since: datetime) -> int:
        return (
            self.db.query(func.count(User.id))
            .filter(User.created_at > since)
            .scalar()
            or 0
        )
