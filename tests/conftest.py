"""
pytest Fixtures for Catalog Tests

Shared fixtures used across all test files.

DATABASE
========
Tests run against a SQLite database file in a temporary directory. The
store opens a new session for every call, and the genre pages issue two
queries at once from different threads, so an in-memory database shared
through a single connection would not behave like the real thing.

Rows are deleted after every test to keep tests independent.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os
import shutil
import tempfile

os.environ["RATE_LIMIT_ENABLED"] = "false"
# The app's own engine points at a directory unique to this run, so
# concurrent test runs never share a database file.
APP_DB_DIR = tempfile.mkdtemp(prefix="catalog-tests-")
os.environ["DATABASE_URL"] = (
    f"sqlite:///{os.path.join(APP_DB_DIR, 'app.db')}"
)

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from catalog.database import Base, build_session_factory
from catalog.dependencies import get_store
from catalog.main import app
from catalog.models import Book, Genre, book_genres
from catalog.services.store import CatalogStore


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="session", autouse=True)
def app_database_dir() -> Generator[str, None, None]:
    """Remove the app engine's database directory after the session."""
    yield APP_DB_DIR
    shutil.rmtree(APP_DB_DIR, ignore_errors=True)


@pytest.fixture(scope="session")
def engine(tmp_path_factory) -> Generator[Engine, None, None]:
    """
    Create a SQLite database file for the whole test session.

    check_same_thread=False lets the threadpool workers share the
    connection pool.
    """
    db_path = tmp_path_factory.mktemp("db") / "catalog.db"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine: Engine) -> Generator[sessionmaker, None, None]:
    """Session factory bound to the test engine; empties the tables afterwards."""
    factory = build_session_factory(engine)

    yield factory

    with factory() as db:
        db.execute(delete(book_genres))
        db.execute(delete(Book))
        db.execute(delete(Genre))
        db.commit()


@pytest.fixture(scope="function")
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """A session for arranging data and checking results directly."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def store(session_factory: sessionmaker) -> CatalogStore:
    return CatalogStore(session_factory)


@pytest.fixture(scope="function")
def client(store: CatalogStore) -> Generator[TestClient, None, None]:
    """
    Create a test client wired to the test store.

    get_store is overridden so every request goes to the test database.
    """
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_genre(db_session: Session) -> Genre:
    """Create a sample genre for testing."""
    genre = Genre(name="Science Fiction")
    db_session.add(genre)
    db_session.commit()
    db_session.refresh(genre)
    return genre


@pytest.fixture
def sample_book(db_session: Session, sample_genre: Genre) -> Book:
    """Create a book that references sample_genre."""
    book = Book(
        title="Foundation",
        isbn="9780553293357",
        summary="The fall of the Galactic Empire.",
        genres=[sample_genre],
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def genre_count(session_factory: sessionmaker):
    """Callable returning the current number of genre rows."""

    def _count() -> int:
        with session_factory() as db:
            return db.execute(select(func.count(Genre.id))).scalar_one()

    return _count
