"""
Genres Router

Server-rendered CRUD pages for genres.

Endpoints:
- GET  /catalog/genres               list
- GET  /catalog/genre/create         empty form
- POST /catalog/genre/create         create (or redirect to an existing genre)
- GET  /catalog/genre/{id}/delete    delete confirmation
- POST /catalog/genre/{id}/delete    delete when no book references the genre
- GET  /catalog/genre/{id}/update    pre-filled form
- POST /catalog/genre/{id}/update    rename
- GET  /catalog/genre/{id}           detail with the genre's books

The static "create" path is registered before "/genre/{genre_id}" so it
is not swallowed by the id route.

Store errors are not caught here; they reach the app-level exception
handlers and are rendered as a 500 page.
"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from starlette.responses import Response

from catalog.config import get_settings
from catalog.dependencies import GenreIdField, GenreNameField, Store
from catalog.rendering import render
from catalog.schemas import validate_genre_form
from catalog.services.rate_limiter import limiter
from catalog.services.store import CatalogStore

logger = logging.getLogger(__name__)
settings = get_settings()

GENRE_LIST_URL = "/catalog/genres"

router = APIRouter(
    prefix="/catalog",
    tags=["Genres"],
)


def redirect(url: str) -> RedirectResponse:
    """302 redirect, as used after every successful form submission."""
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


def genre_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Genre not found",
    )


async def fetch_genre_and_books(store: CatalogStore, genre_id: int):
    """
    Load a genre and its books concurrently.

    Both queries must finish before the caller continues; if either
    raises, the exception propagates and the other result is discarded.
    """
    return await asyncio.gather(
        store.get_genre(genre_id),
        store.list_genre_books(genre_id),
    )


# =============================================================================
# List
# =============================================================================
@router.get("/genres", summary="List all genres")
@limiter.limit(settings.rate_limit_default)
async def genre_list(request: Request, store: Store) -> Response:
    """Display all genres sorted by name."""
    genres = await store.list_genres()
    return render(request, "genre_list", {"title": "Genre List", "genre_list": genres})


# =============================================================================
# Create
# =============================================================================
@router.get("/genre/create", summary="Genre create form")
@limiter.limit(settings.rate_limit_default)
async def genre_create_get(request: Request) -> Response:
    """Display an empty genre form."""
    return render(request, "genre_form", {"title": "Create Genre"})


@router.post("/genre/create", summary="Create a genre")
@limiter.limit(settings.rate_limit_write)
async def genre_create_post(
    request: Request,
    store: Store,
    name: GenreNameField = None,
) -> Response:
    """
    Create a genre from the submitted form.

    Invalid input re-renders the form with the error messages. If a genre
    with the same name already exists, redirect to it instead of creating
    a duplicate.
    """
    result = validate_genre_form(name)

    if not result.is_valid:
        return render(
            request,
            "genre_form",
            {"title": "Create Genre", "genre": result.genre, "errors": result.error_list()},
        )

    found_genre = await store.find_genre_by_name(result.genre.name)
    if found_genre is not None:
        logger.info(f"Genre {result.genre.name!r} already exists as {found_genre.id}")
        return redirect(found_genre.url)

    genre = await store.create_genre(result.genre.name)
    return redirect(genre.url)


# =============================================================================
# Delete
# =============================================================================
@router.get("/genre/{genre_id}/delete", summary="Genre delete confirmation")
@limiter.limit(settings.rate_limit_default)
async def genre_delete_get(request: Request, genre_id: int, store: Store) -> Response:
    """
    Display the delete confirmation page.

    A missing genre redirects to the list: the page is revisited after a
    successful delete.
    """
    genre, genre_books = await fetch_genre_and_books(store, genre_id)

    if genre is None:
        return redirect(GENRE_LIST_URL)

    return render(
        request,
        "genre_delete",
        {"title": "Delete Genre", "genre": genre, "genre_books": genre_books},
    )


@router.post("/genre/{genre_id}/delete", summary="Delete a genre")
@limiter.limit(settings.rate_limit_write)
async def genre_delete_post(
    request: Request,
    genre_id: int,
    store: Store,
    genreid: GenreIdField = None,
) -> Response:
    """
    Delete the genre named by the "genreid" form field.

    While any book references the genre, nothing is deleted and the
    confirmation page is shown again with those books.
    """
    genre, genre_books = await fetch_genre_and_books(store, genre_id)

    if genre_books:
        logger.info(
            f"Refused to delete genre {genre_id}: {len(genre_books)} book(s) reference it"
        )
        return render(
            request,
            "genre_delete",
            {"title": "Delete Genre", "genre": genre, "genre_books": genre_books},
        )

    # The form id is trusted as-is; it is not compared with the URL id.
    if genreid is None:
        logger.warning(f"Delete of genre {genre_id} submitted without a genreid")
    else:
        await store.delete_genre(genreid)

    return redirect(GENRE_LIST_URL)


# =============================================================================
# Update
# =============================================================================
@router.get("/genre/{genre_id}/update", summary="Genre update form")
@limiter.limit(settings.rate_limit_default)
async def genre_update_get(request: Request, genre_id: int, store: Store) -> Response:
    """Display the genre form filled with the current record."""
    genre = await store.get_genre(genre_id)

    if genre is None:
        raise genre_not_found()

    return render(request, "genre_form", {"title": "Update Genre", "genre": genre})


@router.post("/genre/{genre_id}/update", summary="Update a genre")
@limiter.limit(settings.rate_limit_write)
async def genre_update_post(
    request: Request,
    genre_id: int,
    store: Store,
    name: GenreNameField = None,
) -> Response:
    """
    Rename a genre.

    Unlike create, the new name is not checked against other genres.
    """
    result = validate_genre_form(name, genre_id=genre_id)

    if not result.is_valid:
        return render(
            request,
            "genre_form",
            {"title": "Update Genre", "genre": result.genre, "errors": result.error_list()},
        )

    genre = await store.update_genre(genre_id, result.genre.name)
    if genre is None:
        raise genre_not_found()

    return redirect(genre.url)


# =============================================================================
# Detail (registered last so the static paths above win)
# =============================================================================
@router.get("/genre/{genre_id}", summary="Genre detail")
@limiter.limit(settings.rate_limit_default)
async def genre_detail(request: Request, genre_id: int, store: Store) -> Response:
    """Display a genre and the books that belong to it."""
    genre, genre_books = await fetch_genre_and_books(store, genre_id)

    if genre is None:
        raise genre_not_found()

    return render(
        request,
        "genre_detail",
        {"title": "Genre Detail", "genre": genre, "genre_books": genre_books},
    )
