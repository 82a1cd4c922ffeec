"""Shared fixtures for files app tests."""

import pytest

from server.apps.files.infrastructure.demo_data import seed_demo_data
from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.logic.user_operations import create_user

OWNER_ID = 'owner-1'
OTHER_OWNER_ID = 'owner-2'


@pytest.fixture
def store():
    """Create empty record store.

    Returns:
        RecordStore instance for testing.
    """
    return RecordStore()


@pytest.fixture
def owner(store):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return create_user(
        store,
        username='testuser',
        email='test@example.com',
        first_name='Test',
        last_name='User',
        user_id=OWNER_ID,
    )


@pytest.fixture
def other_owner(store):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return create_user(
        store,
        username='otheruser',
        email='other@example.com',
        first_name='Other',
        last_name='User',
        user_id=OTHER_OWNER_ID,
    )


@pytest.fixture
def demo_store():
    """Record store seeded with the demo data set.

    Returns:
        RecordStore with demo user, folders and files.
    """
    demo_store = RecordStore()
    seed_demo_data(demo_store)
    return demo_store
