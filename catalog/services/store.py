"""
Catalog Store

The persistence handle consumed by the genre pages.

Every method is a coroutine that runs its SQLAlchemy work in Starlette's
threadpool with its own Session. Because no Session is shared, a handler
can await two store calls at once:

    genre, books = await asyncio.gather(
        store.get_genre(genre_id),
        store.list_genre_books(genre_id),
    )

Store failures (SQLAlchemyError) are raised to the caller unchanged.
Nothing here retries or swallows errors.

Usage:
    from catalog.database import SessionLocal
    from catalog.services.store import CatalogStore

    store = CatalogStore(SessionLocal)
    genres = await store.list_genres()
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from catalog.models import Book, Genre

logger = logging.getLogger(__name__)


class CatalogStore:
    """Genre and book queries over a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    async def list_genres(self) -> List[Genre]:
        """All genres ordered by name, ascending."""
        return await run_in_threadpool(self._list_genres)

    async def get_genre(self, genre_id: int) -> Optional[Genre]:
        """The genre with ``genre_id``, or None."""
        return await run_in_threadpool(self._get_genre, genre_id)

    async def list_genre_books(self, genre_id: int) -> List[Book]:
        """Books that reference ``genre_id``."""
        return await run_in_threadpool(self._list_genre_books, genre_id)

    async def find_genre_by_name(self, name: str) -> Optional[Genre]:
        """First genre whose name matches ``name`` exactly, or None."""
        return await run_in_threadpool(self._find_genre_by_name, name)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    async def create_genre(self, name: str) -> Genre:
        """Save a new genre and return it with its generated id."""
        return await run_in_threadpool(self._create_genre, name)

    async def update_genre(self, genre_id: int, name: str) -> Optional[Genre]:
        """Replace the name of genre ``genre_id``. None if it does not exist."""
        return await run_in_threadpool(self._update_genre, genre_id, name)

    async def delete_genre(self, genre_id: int) -> bool:
        """Remove genre ``genre_id``. Returns False if it was already gone."""
        return await run_in_threadpool(self._delete_genre, genre_id)

    # -------------------------------------------------------------------------
    # Blocking implementations (run in the threadpool)
    # -------------------------------------------------------------------------
    def _session(self) -> Session:
        return self._session_factory()

    def _list_genres(self) -> List[Genre]:
        with self._session() as db:
            stmt = select(Genre).order_by(Genre.name)
            return list(db.execute(stmt).scalars().all())

    def _get_genre(self, genre_id: int) -> Optional[Genre]:
        with self._session() as db:
            return db.get(Genre, genre_id)

    def _list_genre_books(self, genre_id: int) -> List[Book]:
        with self._session() as db:
            stmt = (
                select(Book)
                .join(Book.genres)
                .where(Genre.id == genre_id)
                .order_by(Book.title)
            )
            return list(db.execute(stmt).scalars().all())

    def _find_genre_by_name(self, name: str) -> Optional[Genre]:
        with self._session() as db:
            stmt = select(Genre).where(Genre.name == name).order_by(Genre.id).limit(1)
            return db.execute(stmt).scalars().first()

    def _create_genre(self, name: str) -> Genre:
        with self._session() as db:
            genre = Genre(name=name)
            try:
                db.add(genre)
                db.commit()
                db.refresh(genre)
            except SQLAlchemyError:
                db.rollback()
                raise

        logger.info(f"Created genre {genre.id} ({genre.name!r})")
        return genre

    def _update_genre(self, genre_id: int, name: str) -> Optional[Genre]:
        with self._session() as db:
            genre = db.get(Genre, genre_id)
            if genre is None:
                return None

            genre.name = name
            try:
                db.commit()
                db.refresh(genre)
            except SQLAlchemyError:
                db.rollback()
                raise

        logger.info(f"Updated genre {genre.id} ({genre.name!r})")
        return genre

    def _delete_genre(self, genre_id: int) -> bool:
        with self._session() as db:
            genre = db.get(Genre, genre_id)
            if genre is None:
                logger.info(f"Genre {genre_id} already removed")
                return False

            try:
                db.delete(genre)
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                raise

        logger.info(f"Deleted genre {genre_id}")
        return True
