"""
Database Configuration Module

Sets up SQLAlchemy 2.0 for the catalog.

Session Management Pattern
==========================
The catalog store opens one short-lived session per store call rather
than one per request. That lets a handler issue two queries at the same
time (a genre and its books) without sharing a Session between threads,
which SQLAlchemy does not allow.

expire_on_commit=False keeps the loaded attributes of saved records
readable after their session has closed, so templates can render them.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from catalog.config import Settings, get_settings

settings = get_settings()


def build_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.

    Pool sizing only applies to server databases; SQLite picks its own
    pool class.
    """
    if settings.is_sqlite:
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )

    return create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,  # Verify connections are alive before using
        echo=settings.debug,  # Log SQL in debug mode
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to ``engine``."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


engine = build_engine(settings)
SessionLocal = build_session_factory(engine)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)
