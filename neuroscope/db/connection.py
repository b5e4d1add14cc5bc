"""
Database connection and session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from neuroscope.core.config import settings
from neuroscope.core.logging import get_logger

logger = get_logger("db.connection")

# Lazy initialization - don't connect at import time
_engine = None
_SessionLocal = None


def _get_engine():
    """Get or create database engine (lazy initialization)."""
    global _engine
    if _engine is None:
        kwargs = {"pool_pre_ping": True, "echo": False}
        if settings.database_url.startswith("sqlite"):
            # Requests are served from several threads
            kwargs["connect_args"] = {"check_same_thread": False}
        else:
            kwargs.update(pool_size=5, max_overflow=10, pool_timeout=5)
        _engine = create_engine(settings.database_url, **kwargs)
    return _engine


def _get_session_local():
    """Get or create session factory (lazy initialization)."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Dependency for getting database session."""
    SessionLocal = _get_session_local()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    from neuroscope.db.models import Base

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=_get_engine(), checkfirst=True)
    logger.info("Database tables created successfully")
