"""
Routers Package

Router Structure:
- genres.py: /catalog/genres and /catalog/genre/* pages

Each router is imported and registered in main.py.
"""

from catalog.routers.genres import router as genres_router

__all__ = [
    "genres_router",
]
