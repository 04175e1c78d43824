"""
SQLAlchemy Models Package

Model Relationships:
- Genre <-> Book: Many-to-Many (a book can belong to multiple genres,
                  a genre contains many books)

Importing every model here registers it with Base.metadata, which
Alembic and create_tables() rely on.
"""

from catalog.models.genre import Genre
from catalog.models.book import Book, book_genres

__all__ = [
    "Genre",
    "Book",
    "book_genres",
]
