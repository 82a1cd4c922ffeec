"""Business logic for the append-only activity log."""

import logging
from typing import Final

from django.utils import timezone

from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.models import Activity, Bag

DEFAULT_ACTIVITY_LIMIT: Final = 50

logger = logging.getLogger(__name__)


def record_activity(
    store: RecordStore,
    user_id: str,
    action: str,
    file_id: str | None = None,
    details: Bag | None = None,
) -> Activity:
    """Append an entry to the activity log.

    Args:
        store: Record store.
        user_id: Acting user.
        action: Verb describing what happened (upload, delete, ...).
        file_id: Affected file, if any.
        details: Extra information.

    Returns:
        Created Activity instance.
    """
    activity = Activity(
        id=store.new_id(),
        user_id=user_id,
        action=action,
        file_id=file_id,
        details=dict(details or {}),
        created_at=timezone.now(),
    )
    store.put(Activity, activity)

    logger.debug('Activity %s by %s on %s', action, user_id, file_id)
    return activity


def list_user_activities(
    store: RecordStore,
    user_id: str,
    limit: int = DEFAULT_ACTIVITY_LIMIT,
) -> list[Activity]:
    """List a user's most recent activities, newest first.

    Args:
        store: Record store.
        user_id: User whose log to read.
        limit: Maximum number of entries.

    Returns:
        Up to limit activities.
    """
    activities = [
        activity
        for activity in store.all(Activity)
        if activity.user_id == user_id
    ]
    # Insertion order breaks ties between equal timestamps
    indexed = list(enumerate(activities))
    indexed.sort(
        key=lambda pair: (pair[1].created_at, pair[0]),
        reverse=True,
    )
    return [activity for _, activity in indexed[:max(limit, 0)]]
