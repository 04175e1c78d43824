"""
Genre Form Schemas

Validation and sanitisation of the genre create/update form.

Processing a submitted form happens in two stages:
1. validate_genre_form() - pure, no I/O. Trims the name, checks its
   length, and escapes markup. Returns a GenreFormResult.
2. The route handler branches on result.is_valid.

Invalid input is not an exception for the caller: the form is
re-rendered with the sanitised value and the error messages.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from markupsafe import escape
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from catalog.config import get_settings
from catalog.models.genre import GENRE_NAME_MIN_LENGTH


def sanitize_genre_name(value: Optional[str]) -> str:
    """Trim surrounding whitespace and escape HTML markup."""
    return str(escape((value or "").strip()))


class GenreForm(BaseModel):
    """Schema for the submitted genre form."""

    name: str = Field(
        default="",
        description="Genre name",
        examples=["Science Fiction", "Mystery", "Romance"],
    )

    @field_validator("name", mode="before")
    @classmethod
    def name_must_have_valid_length(cls, v: Any) -> str:
        """Trim the name and check its length bounds."""
        v = "" if v is None else str(v).strip()
        max_length = get_settings().genre_name_max_length

        if len(v) < GENRE_NAME_MIN_LENGTH:
            raise PydanticCustomError("genre_name_required", "Genre name required")
        if len(v) > max_length:
            raise PydanticCustomError(
                "genre_name_too_long",
                "Genre name must be at most {max_length} characters",
                {"max_length": max_length},
            )
        return v

    @field_validator("name")
    @classmethod
    def escape_name(cls, v: str) -> str:
        return str(escape(v))


@dataclass
class FormError:
    """A single field error shown next to the form."""

    param: str
    msg: str
    value: str

    def as_dict(self) -> dict:
        return {"param": self.param, "msg": self.msg, "value": self.value}


@dataclass
class GenreFormData:
    """Sanitised form values, used to refill the form on errors."""

    name: str
    id: Optional[int] = None

    @property
    def url(self) -> str:
        return f"/catalog/genre/{self.id}"


@dataclass
class GenreFormResult:
    """Outcome of validate_genre_form()."""

    genre: GenreFormData
    errors: List[FormError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_list(self) -> List[dict]:
        return [error.as_dict() for error in self.errors]


def validate_genre_form(
    name: Optional[str],
    genre_id: Optional[int] = None,
) -> GenreFormResult:
    """
    Validate and sanitise a submitted genre name.

    Args:
        name: Raw value of the "name" form field (may be None if absent)
        genre_id: Id of the genre being edited, if any

    Returns:
        GenreFormResult whose genre.name is always the trimmed, escaped
        value, valid or not.
    """
    try:
        form = GenreForm(name=name)
    except ValidationError as exc:
        sanitized = sanitize_genre_name(name)
        errors = [
            FormError(
                param=".".join(str(part) for part in err["loc"]) or "name",
                msg=err["msg"],
                value=sanitized,
            )
            for err in exc.errors()
        ]
        return GenreFormResult(
            genre=GenreFormData(name=sanitized, id=genre_id),
            errors=errors,
        )

    return GenreFormResult(genre=GenreFormData(name=form.name, id=genre_id))
