"""Read-only views over a user's files.

Every view is scoped to a single owner and, except for the trash,
excludes soft-deleted records. All views are linear scans over the
store.
"""

import logging
from collections.abc import Callable
from typing import Final

from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.models import File

DEFAULT_RECENT_LIMIT: Final = 10

logger = logging.getLogger(__name__)


def _active_files(
    store: RecordStore,
    owner_id: str,
    predicate: Callable[[File], bool],
) -> list[File]:
    return [
        file_instance
        for file_instance in store.all(File)
        if file_instance.owner_id == owner_id
        and not file_instance.is_deleted
        and predicate(file_instance)
    ]


def list_by_parent(
    store: RecordStore,
    parent_id: str | None,
    owner_id: str,
) -> list[File]:
    """List the direct children of a folder.

    Args:
        store: Record store.
        parent_id: Folder id, None lists the root.
        owner_id: Owner of the files.

    Returns:
        Non-deleted children in store order.
    """
    logger.debug('Listing children of %s for %s', parent_id or 'root', owner_id)
    return _active_files(
        store,
        owner_id,
        lambda file_instance: file_instance.parent_id == parent_id,
    )


def list_recent(
    store: RecordStore,
    owner_id: str,
    limit: int = DEFAULT_RECENT_LIMIT,
) -> list[File]:
    """List recently updated files, newest first.

    Files with equal updated_at are ordered by id (descending) so the
    result is deterministic.

    Args:
        store: Record store.
        owner_id: Owner of the files.
        limit: Maximum number of files returned.

    Returns:
        Up to limit non-deleted files.
    """
    files = _active_files(store, owner_id, lambda _: True)
    files.sort(
        key=lambda file_instance: (file_instance.updated_at, file_instance.id),
        reverse=True,
    )
    return files[:max(limit, 0)]


def list_starred(store: RecordStore, owner_id: str) -> list[File]:
    """List starred files.

    Args:
        store: Record store.
        owner_id: Owner of the files.

    Returns:
        Non-deleted starred files.
    """
    return _active_files(
        store,
        owner_id,
        lambda file_instance: file_instance.is_starred,
    )


def list_shared(store: RecordStore, owner_id: str) -> list[File]:
    """List files the owner has shared.

    Args:
        store: Record store.
        owner_id: Owner of the files.

    Returns:
        Non-deleted shared files.
    """
    return _active_files(
        store,
        owner_id,
        lambda file_instance: file_instance.is_shared,
    )


def list_trash(store: RecordStore, owner_id: str) -> list[File]:
    """List all files in user's trash.

    Args:
        store: Record store.
        owner_id: Owner of the files.

    Returns:
        Soft-deleted files in store order.
    """
    return [
        file_instance
        for file_instance in store.all(File)
        if file_instance.owner_id == owner_id and file_instance.is_deleted
    ]


def search_files(store: RecordStore, owner_id: str, query: str) -> list[File]:
    """Find files whose name contains the query (case-insensitive).

    An empty query matches every non-deleted file; rejecting it is up
    to the caller.

    Args:
        store: Record store.
        owner_id: Owner of the files.
        query: Substring to look for.

    Returns:
        Matching non-deleted files.
    """
    needle = query.casefold()
    logger.debug('Searching files of %s for %r', owner_id, query)
    return _active_files(
        store,
        owner_id,
        lambda file_instance: needle in file_instance.name.casefold(),
    )
