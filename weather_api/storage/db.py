"""Database connection and session management."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session
from typing import Any, Dict, Generator

from weather_api.config import settings
from weather_api.app_logging import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str, timeout: int = settings.DATABASE_TIMEOUT) -> Engine:
    """Create an engine whose connects and statements give up after ``timeout`` seconds."""
    url = make_url(database_url)
    kwargs: Dict[str, Any] = {
        "pool_pre_ping": True,  # Verify connections before using
        "echo": settings.SQL_ECHO,
    }

    if url.get_backend_name() == "sqlite":
        # Sessions cross threads between FastAPI dependencies and handlers
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": timeout}
    else:
        kwargs.update(
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_timeout=timeout,
        )
        if url.get_backend_name() == "postgresql":
            kwargs["connect_args"] = {
                "connect_timeout": timeout,
                "options": f"-c statement_timeout={timeout * 1000}",
            }

    return create_engine(url, **kwargs)


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=bind,
        class_=Session,
        expire_on_commit=False,
    )


engine = build_engine(settings.DATABASE_URL)

# Create session factory
SessionLocal = build_session_factory(engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session.
    Ensures proper cleanup after request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None) -> None:
    """Initialize database - create tables if they don't exist."""
    from weather_api.storage.base import Base
    from weather_api.storage import models  # noqa: F401  registers tables

    logger.info("Initializing database...")
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database initialized successfully")
