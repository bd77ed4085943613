"""
Base repository with common read operations.
"""
from typing import TypeVar, Generic
from sqlalchemy.orm import Session
from database.postgres import Base

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common query helpers"""

    def __init__(self, model: type[T], db: Session):
        self.model = model
        self.db = db

    def count(self, **filters) -> int:
        """Count entities matching filters"""
        query = self.db.query(self.model)
        for field, value in filters.items():
            if hasattr(self.model, field):
                query = query.filter(getattr(self.model, field) == value)
        return query.count()
