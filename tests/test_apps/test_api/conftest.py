"""Shared fixtures for API app tests."""

import json

import pytest
from django.apps import apps
from django.conf import settings

from server.apps.files.infrastructure.demo_data import seed_demo_data
from server.apps.files.infrastructure.record_store import RecordStore


@pytest.fixture
def store(monkeypatch):
    """Fresh demo-seeded store installed as the process store.

    Returns:
        RecordStore used by the API views for this test.
    """
    store = RecordStore()
    seed_demo_data(store, settings.DRIVE_DEMO_USER_ID)
    monkeypatch.setattr(apps.get_app_config('files'), 'store', store)
    return store


@pytest.fixture
def api(client, store):
    """JSON helper around the Django test client.

    Returns:
        Callable sending a request and returning the response.
    """

    def request(method, url, payload=None, **extra):
        body = '' if payload is None else json.dumps(payload)
        return client.generic(
            method,
            url,
            data=body,
            content_type='application/json',
            **extra,
        )

    return request
