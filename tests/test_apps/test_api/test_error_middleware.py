"""Tests for ApiErrorMiddleware."""

import logging

import pytest

from server.apps.api import views


@pytest.fixture(autouse=True)
def _propagate_logs(monkeypatch):
    """Let caplog see records of the server logger."""
    monkeypatch.setattr(logging.getLogger('server'), 'propagate', True)


class TestErrorMiddleware:
    """Tests for JSON error rendering."""

    def test_unexpected_error_is_500(self, api, monkeypatch, caplog):
        """Test unhandled exceptions become a logged generic 500."""

        def broken(*args, **kwargs):
            raise RuntimeError('boom')

        monkeypatch.setattr(views, 'list_starred', broken)

        with caplog.at_level(logging.ERROR, logger='server.apps.api.middleware'):
            response = api('GET', '/api/files/starred')

        assert response.status_code == 500
        assert response.json() == {'message': 'Internal server error'}
        assert 'Unhandled error on GET /api/files/starred' in caplog.text

    def test_validation_error_is_logged(self, api, caplog):
        """Test rejected input is logged as a warning."""
        with caplog.at_level(logging.WARNING, logger='server.apps.api.middleware'):
            response = api('GET', '/api/files/search')

        assert response.status_code == 400
        assert "Query parameter 'q' is required" in caplog.text

    def test_method_not_allowed(self, api):
        """Test unsupported methods are rejected by the view."""
        response = api('PUT', '/api/files/file-1', {})

        assert response.status_code == 405
