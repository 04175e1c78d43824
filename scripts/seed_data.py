#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample genres and books for development.

USAGE:
    # From the project root with the virtualenv active
    python scripts/seed_data.py
    python scripts/seed_data.py --keep    # add to existing data

Genre names go through the same sanitisation as the genre form, so the
seeded records look exactly like ones created through the site.
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from catalog.database import SessionLocal, create_tables
from catalog.models import Book, Genre, book_genres
from catalog.schemas import sanitize_genre_name

GENRE_NAMES = [
    "Fantasy",
    "Science Fiction",
    "French Poetry",
    "Mystery",
    "Romance",
]

BOOKS_DATA = [
    {
        "title": "The Name of the Wind",
        "isbn": "9781473211896",
        "summary": "A young man grows to be the most notorious magician his world has ever seen.",
        "genres": ["Fantasy"],
    },
    {
        "title": "The Wise Man's Fear",
        "isbn": "9788401352836",
        "summary": "Picking up the tale of Kvothe Kingkiller once again.",
        "genres": ["Fantasy"],
    },
    {
        "title": "Apes and Angels",
        "isbn": "9780765379528",
        "summary": "Humankind headed out to the stars not for conquest, nor exploration.",
        "genres": ["Science Fiction"],
    },
    {
        "title": "Death Wave",
        "isbn": "9780765379504",
        "summary": "A flood of radiation threatens all life in the galaxy.",
        "genres": ["Science Fiction"],
    },
    {
        "title": "Murder on the Orient Express",
        "isbn": "9780062693662",
        "summary": "Hercule Poirot investigates a murder on a train stuck in a snowdrift.",
        "genres": ["Mystery"],
    },
]


def clear_data(db: Session) -> None:
    """Clear all existing catalog data."""
    print("Clearing existing data...")
    db.execute(delete(book_genres))
    db.execute(delete(Book))
    db.execute(delete(Genre))
    db.commit()
    print("Data cleared.")


def create_genres(db: Session) -> dict[str, Genre]:
    """Create sample genres."""
    print("Creating genres...")
    genres = {}
    for name in GENRE_NAMES:
        genre = Genre(name=sanitize_genre_name(name))
        db.add(genre)
        genres[name] = genre

    db.commit()
    print(f"Created {len(genres)} genres.")
    return genres


def create_books(db: Session, genres: dict[str, Genre]) -> list[Book]:
    """Create sample books linked to their genres."""
    print("Creating books...")
    books = []
    for data in BOOKS_DATA:
        data = dict(data)
        genre_names = data.pop("genres")

        book = Book(**data)
        book.genres = [genres[name] for name in genre_names]
        db.add(book)
        books.append(book)

    db.commit()
    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()
    try:
        if clear_existing:
            clear_data(db)

        genres = create_genres(db)
        books = create_books(db, genres)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print(f"  - Genres: {len(genres)}")
        print(f"  - Books: {len(books)}")
        print("\nBrowse the catalog at http://localhost:8001/catalog/genres")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the catalog database")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing data instead of clearing it first",
    )
    args = parser.parse_args()
    seed_database(clear_existing=not args.keep)
