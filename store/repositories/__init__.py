"""
Repository package for database operations.
Following Repository Pattern for clean separation of data access logic.
"""
from .base import BaseRepository
from .user import UserRepository
from .transactions import TransactionRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "TransactionRepository",
]
