"""
Tests for the application shell: configuration, health check, error
pages and rate limiting helpers.
"""

import os

import pytest
from fastapi import status
from pydantic import ValidationError
from starlette.requests import Request

from catalog.config import Settings
from catalog.main import error_detail
from catalog.services.rate_limiter import get_client_ip


def make_request(headers=None, client=("203.0.113.9", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/catalog/genres",
        "headers": [
            (name.lower().encode(), value.encode())
            for name, value in (headers or {}).items()
        ],
        "client": client,
    }
    return Request(scope)


class TestSettings:

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_invalid_environment_rejected(self):
        with pytest.raises(ValidationError):
            Settings(environment="qa")

    def test_is_sqlite(self):
        assert Settings(database_url="sqlite:///./catalog.db").is_sqlite
        assert not Settings(database_url="postgresql://u:p@localhost/db").is_sqlite

    def test_is_production(self):
        assert Settings(environment="Production").is_production


class TestErrorDetail:
    """Exception text reaches the error page only in debug outside production."""

    def test_shown_in_debug(self):
        settings = Settings(debug=True, environment="development")

        assert error_detail(RuntimeError("boom"), settings) == "boom"

    def test_hidden_without_debug(self):
        assert error_detail(RuntimeError("boom"), Settings(debug=False)) is None

    def test_hidden_in_production_even_with_debug(self):
        settings = Settings(debug=True, environment="production")

        assert error_detail(RuntimeError("boom"), settings) is None


class TestClientIp:

    def test_forwarded_for_first_address(self):
        request = make_request({"X-Forwarded-For": "198.51.100.1, 10.0.0.1"})

        assert get_client_ip(request) == "198.51.100.1"

    def test_real_ip_header(self):
        request = make_request({"X-Real-IP": " 198.51.100.2 "})

        assert get_client_ip(request) == "198.51.100.2"

    def test_falls_back_to_connection_address(self):
        assert get_client_ip(make_request()) == "203.0.113.9"


class TestHealthCheck:

    def test_health_reports_database(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"]["healthy"] is True
        assert data["rate_limiting"]["enabled"] is False


class TestErrorPages:

    def test_unknown_path_renders_error_page(self, client):
        response = client.get("/catalog/authors")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.template.name == "error.html"
        assert response.context["status_code"] == 404


class TestAppDatabase:

    def test_app_engine_uses_a_per_run_directory(self, app_database_dir):
        from catalog.database import engine

        assert os.path.dirname(engine.url.database) == app_database_dir
        assert os.path.basename(app_database_dir).startswith("catalog-tests-")
