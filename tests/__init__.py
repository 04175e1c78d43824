"""
Test Suite for the Catalog

Test Organization:
- conftest.py: Shared fixtures (test database, store, client, sample data)
- test_genres.py: Tests for the /catalog/genre* pages
- test_genre_form.py: Tests for form validation and sanitisation
- test_store.py: Tests for CatalogStore and the concurrent genre/books fetch
- test_app.py: Tests for settings, health check, error pages, rate limiting

Running Tests:
    pip install -e ".[test]"
    pytest
    pytest tests/test_genres.py -v
"""
