"""Database connection and session management."""

from typing import Generator
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool

from weather_report.config import get_config

# Get configuration
config = get_config()


def _engine_options(url: str) -> dict:
    """Pool settings for the configured backend."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "poolclass": QueuePool,
        "pool_size": config.pool_size,
        "max_overflow": config.max_overflow,
        "pool_timeout": config.pool_timeout,
        "pool_recycle": config.pool_recycle,
        "pool_pre_ping": True,  # Verify connections before using
    }


# Create SQLAlchemy engine with connection pooling
engine = create_engine(
    config.sqlalchemy_url,
    echo=False,  # Set to True for SQL query logging
    **_engine_options(config.sqlalchemy_url),
)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Base class for ORM models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get database session.

    Yields:
        Database session that is automatically closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connection(db: Session) -> bool:
    """
    Check if database connection is healthy.

    Args:
        db: Database session to probe

    Returns:
        True if connection successful, False otherwise.
    """
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def init_db() -> None:
    """Create the report tables if they do not exist yet."""
    # Register ORM models on Base.metadata
    import weather_report.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
