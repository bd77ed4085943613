"""
Dependency injection utilities for FastAPI.
Repositories get a request-scoped session; the engine is assembled from them.
"""
from typing import Callable, Type, TypeVar
from sqlalchemy.orm import Session
from fastapi import Depends

from config.settings import settings
from database.postgres import get_db
from service.aggregation import AnalyticsEngine, RangeDefaults
from store.repositories import TransactionRepository, UserRepository
from store.repositories.base import BaseRepository
from utils.cache import get_cache

T = TypeVar("T", bound=BaseRepository)


def get_repository(repository_class: Type[T]) -> Callable[[Session], T]:
    """
    Generic dependency function that creates and returns repository instances.
    Works with SQLAlchemy repositories that require a db session.

    Usage:
        @router.get("/users/count")
        def count_users(
            user_repo: UserRepository = Depends(get_repository(UserRepository))
        ):
            return user_repo.count_users()

    Args:
        repository_class: The repository class to instantiate

    Returns:
        A callable dependency function that returns the repository instance
    """
    def _get_repository(db: Session = Depends(get_db)) -> T:
        return repository_class(db)

    return _get_repository


def range_defaults_from_settings() -> RangeDefaults:
    return RangeDefaults(
        summary_days=settings.SUMMARY_DEFAULT_SPAN_DAYS,
        daily_days=settings.DAILY_DEFAULT_SPAN_DAYS,
        hourly_days=settings.HOURLY_DEFAULT_SPAN_DAYS,
        payment_methods_days=settings.PAYMENT_METHODS_DEFAULT_SPAN_DAYS,
    )


def get_analytics_engine(
    transaction_repo: TransactionRepository = Depends(get_repository(TransactionRepository)),
    user_repo: UserRepository = Depends(get_repository(UserRepository)),
) -> AnalyticsEngine:
    return AnalyticsEngine(transaction_repo, user_repo, defaults=range_defaults_from_settings())


def get_analytics_cache():
    return get_cache()
