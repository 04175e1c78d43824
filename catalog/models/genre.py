"""
Genre Model

Represents a book genre/category in the database.

Genres allow books to be categorized for browsing. A book can belong to
multiple genres (e.g., "Science Fiction" and "Dystopian").
"""

from datetime import datetime
from typing import TYPE_CHECKING, List

from markupsafe import Markup
from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from catalog.config import get_settings
from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.book import Book


# Names are stored escaped, and escaping can grow a character to five
# (e.g. "&" becomes "&amp;"), so the column is wider than the form limit.
GENRE_NAME_COLUMN_LENGTH = 500
GENRE_NAME_MIN_LENGTH = 1


class Genre(Base):
    """
    Genre model representing book categories.

    Table: genres

    Relationships:
    - books: Many-to-Many relationship through book_genres table

    Names are not unique at the database level. The create handler
    looks for an existing genre with the same name before saving.

    Example:
        genre = Genre(name="Science Fiction")
        genre.url  # "/catalog/genre/1" once saved
    """

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(GENRE_NAME_COLUMN_LENGTH),
        index=True,
        nullable=False,
        comment="Escaped genre name (e.g., 'Science Fiction', 'Mystery')"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    books: Mapped[List["Book"]] = relationship(
        "Book",
        secondary="book_genres",
        back_populates="genres",
    )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------
    @validates("name")
    def validate_name(self, key: str, name: str) -> str:
        """
        Enforce the form's length bounds on every write.

        The stored value is escaped, so its length is measured after
        unescaping and trimming, i.e. on what the user typed.
        """
        if name is None:
            raise ValueError("Genre name required")

        max_length = get_settings().genre_name_max_length
        length = len(Markup(name).unescape().strip())

        if length < GENRE_NAME_MIN_LENGTH:
            raise ValueError("Genre name required")
        if length > max_length or len(name) > GENRE_NAME_COLUMN_LENGTH:
            raise ValueError(f"Genre name must be at most {max_length} characters")
        return name

    @property
    def url(self) -> str:
        """Reference path of this genre, used for redirects and links."""
        return f"/catalog/genre/{self.id}"

    def __repr__(self) -> str:
        return f"Genre(id={self.id}, name='{self.name}')"
