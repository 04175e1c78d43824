"""
Form Schemas Package

Pydantic models and result types for validating submitted HTML forms.
"""

from catalog.schemas.genre import (
    FormError,
    GenreForm,
    GenreFormData,
    GenreFormResult,
    sanitize_genre_name,
    validate_genre_form,
)

__all__ = [
    "FormError",
    "GenreForm",
    "GenreFormData",
    "GenreFormResult",
    "sanitize_genre_name",
    "validate_genre_form",
]
