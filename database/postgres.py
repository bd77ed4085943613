"""
PostgreSQL database configuration: pooled engine, session factory and
declarative base shared by the models and repositories.
"""
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import registry, sessionmaker

from config.settings import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.POSTGRES_URI
logger.info(f"Application connecting to database: {make_url(DATABASE_URL).render_as_string(hide_password=True)}")

engine = create_engine(
    DATABASE_URL,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=30,
    pool_recycle=3600,  # Recycle connections after 1 hour
    pool_pre_ping=True,
    echo=settings.DB_ECHO,
    connect_args={
        'connect_timeout': 10,
        'keepalives': 1,
        'keepalives_idle': 30,
        'keepalives_interval': 10,
        'keepalives_count': 5,
    },
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)

mapper_registry = registry()
Base = mapper_registry.generate_base()


def configure_mappers():
    """Configure SQLAlchemy mappers dynamically to avoid circular imports."""
    from models.user import User
    from models.transaction import Transaction

    mapper_registry.configure()
    logger.info("Mappers configured successfully.")


def get_db():
    """
    Dependency for getting database sessions with automatic cleanup
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def init_db():
    """Create tables outside of alembic (local development and tests)."""
    configure_mappers()
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized with tables")


def close_all_connections():
    """Close all database connections (for shutdown)"""
    try:
        engine.dispose()
        logger.info("All database connections closed")
    except Exception as e:
        logger.error(f"Error closing connections: {e}")


def check_database_health() -> dict:
    try:
        with engine.connect() as conn:
            db_name = conn.execute(text("SELECT current_database()")).scalar()
        return {'status': 'healthy', 'database': db_name}
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {'status': 'unhealthy', 'error': str(e)}
