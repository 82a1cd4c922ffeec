"""Business logic for user accounts."""

import dataclasses
import logging
from typing import Any

from django.utils import timezone

from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.models import (
    DEFAULT_STORAGE_LIMIT,
    Bag,
    Plan,
    User,
    default_preferences,
)

logger = logging.getLogger(__name__)


def get_user(store: RecordStore, user_id: str) -> User | None:
    """Get a user by id.

    Args:
        store: Record store.
        user_id: User identifier.

    Returns:
        User if found, None otherwise.
    """
    return store.get(User, user_id)


def get_user_by_email(store: RecordStore, email: str) -> User | None:
    """Get a user by email address (exact match).

    Args:
        store: Record store.
        email: Email address.

    Returns:
        User if found, None otherwise.
    """
    return next(
        (user for user in store.all(User) if user.email == email),
        None,
    )


def create_user(  # noqa: WPS211
    store: RecordStore,
    username: str,
    email: str,
    first_name: str,
    last_name: str,
    *,
    user_id: str | None = None,
    job_title: str | None = None,
    avatar: str | None = None,
    plan: Plan = Plan.FREE,
    storage_used: int = 0,
    storage_limit: int = DEFAULT_STORAGE_LIMIT,
    preferences: Bag | None = None,
) -> User:
    """Create a user account.

    Args:
        store: Record store.
        username: Login name.
        email: Email address.
        first_name: Given name.
        last_name: Family name.
        user_id: Fixed identifier; a new one is generated when None.
        job_title: Job title.
        avatar: Avatar URL.
        plan: Subscription tier.
        storage_used: Informational storage usage in bytes.
        storage_limit: Storage limit in bytes.
        preferences: Preferences bag, defaults applied when None.

    Returns:
        Created User instance.
    """
    user = User(
        id=user_id or store.new_id(),
        username=username,
        email=email,
        first_name=first_name,
        last_name=last_name,
        job_title=job_title,
        avatar=avatar,
        plan=plan,
        storage_used=storage_used,
        storage_limit=storage_limit,
        preferences=(
            default_preferences() if preferences is None else dict(preferences)
        ),
        created_at=timezone.now(),
    )
    store.put(User, user)

    logger.info('Created user %s (ID: %s)', user.username, user.id)
    return user


def update_user(
    store: RecordStore,
    user_id: str,
    **updates: Any,
) -> User | None:
    """Merge fields into an existing user.

    Args:
        store: Record store.
        user_id: User identifier.
        updates: Field values to merge (snake_case User attributes).

    Returns:
        Updated User instance, None if the id is unknown.
    """
    user = store.get(User, user_id)
    if user is None:
        logger.debug('Update of unknown user: %s', user_id)
        return None

    updates.pop('id', None)
    updates.pop('created_at', None)
    updated = dataclasses.replace(user, **updates)
    store.put(User, updated)

    logger.info(
        'Updated user %s: %s',
        user_id,
        ', '.join(sorted(updates)) or 'nothing',
    )
    return updated
