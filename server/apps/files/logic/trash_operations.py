"""Business logic for trash (soft delete) operations."""

import logging

from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.logic.file_operations import update_file
from server.apps.files.logic.query_operations import list_trash
from server.apps.files.models import File

logger = logging.getLogger(__name__)


def soft_delete_file(store: RecordStore, file_id: str) -> File | None:
    """Move file to trash (soft delete).

    Sets is_deleted=True; the record stays in the store and only the
    trash view lists it afterwards. Children of a trashed folder are
    left untouched.

    Args:
        store: Record store.
        file_id: ID of file to soft delete.

    Returns:
        Updated File instance, None if not found.
    """
    file_instance = update_file(store, file_id, is_deleted=True)
    if file_instance is not None:
        logger.info(
            'File moved to trash: %s (ID: %s)',
            file_instance.path,
            file_id,
        )
    return file_instance


def restore_file(store: RecordStore, file_id: str) -> File | None:
    """Restore file from trash.

    Restoring a file that is not in trash only refreshes updated_at.

    Args:
        store: Record store.
        file_id: ID of file to restore.

    Returns:
        Updated File instance, None if not found.
    """
    file_instance = update_file(store, file_id, is_deleted=False)
    if file_instance is not None:
        logger.info(
            'File restored: %s (ID: %s)',
            file_instance.path,
            file_id,
        )
    return file_instance


def permanent_delete_file(store: RecordStore, file_id: str) -> bool:
    """Permanently delete a file record.

    Works on trashed and active records alike. Does not cascade: the
    children of a deleted folder keep their parent_id and become
    orphans, unreachable from the folder listing.

    Args:
        store: Record store.
        file_id: ID of file to permanently delete.

    Returns:
        True if the record was removed, False if it was already absent.
    """
    deleted = store.delete(File, file_id)
    if deleted:
        logger.info('File permanently deleted: ID %s', file_id)
    return deleted


def empty_trash(store: RecordStore, owner_id: str) -> int:
    """Permanently delete all files in a user's trash.

    Args:
        store: Record store.
        owner_id: User whose trash to empty.

    Returns:
        Number of files deleted.
    """
    count = 0
    for file_instance in list_trash(store, owner_id):
        if permanent_delete_file(store, file_instance.id):
            count += 1

    logger.info(
        'Trash emptied for user %s: %d files deleted',
        owner_id,
        count,
    )
    return count
