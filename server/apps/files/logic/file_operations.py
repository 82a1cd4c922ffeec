"""Business logic for creating and updating file records."""

import dataclasses
import logging
from datetime import datetime, timedelta
from typing import Any, Final

from django.utils import timezone

from server.apps.files.infrastructure.metadata import (
    build_display_path,
    detect_mime_type,
)
from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.models import Bag, File, FileType

# Fields fixed at creation; update_file refuses to touch them
_IMMUTABLE_FIELDS: Final = frozenset(('id', 'owner_id', 'created_at'))

# Smallest step used to keep updated_at strictly increasing
_TIMESTAMP_STEP: Final = timedelta(microseconds=1)

logger = logging.getLogger(__name__)


def next_timestamp(previous: datetime) -> datetime:
    """Get a timestamp strictly later than the previous one.

    Two mutations may land within the same clock tick, so the
    current time is bumped when it does not advance.

    Args:
        previous: Last timestamp recorded for the record.

    Returns:
        Current time, or previous plus one microsecond.
    """
    now = timezone.now()
    if now <= previous:
        return previous + _TIMESTAMP_STEP
    return now


def get_file(store: RecordStore, file_id: str) -> File | None:
    """Get a file record by id.

    Args:
        store: Record store.
        file_id: File identifier.

    Returns:
        File if found, None otherwise.
    """
    return store.get(File, file_id)


def get_owned_folder(
    store: RecordStore,
    folder_id: str,
    owner_id: str,
) -> File | None:
    """Get a folder that belongs to the given owner.

    Args:
        store: Record store.
        folder_id: Folder identifier.
        owner_id: Expected owner.

    Returns:
        Folder if it exists, is a folder and is owned by owner_id.
    """
    folder = store.get(File, folder_id)
    if folder is None or not folder.is_folder or folder.owner_id != owner_id:
        return None
    return folder


def create_file(  # noqa: WPS211
    store: RecordStore,
    owner_id: str,
    name: str,
    file_type: FileType = FileType.FILE,
    *,
    parent_id: str | None = None,
    path: str | None = None,
    mime_type: str | None = None,
    size: int = 0,
    is_starred: bool = False,
    is_shared: bool = False,
    thumbnail: str | None = None,
    metadata: Bag | None = None,
) -> File:
    """Create a file record (metadata only, no bytes are stored).

    Applies defaults: flags False, empty metadata, size 0 and no MIME
    type for folders. Files without a MIME type get one guessed from
    their name. When path is omitted it is derived from the parent's
    display path.

    The parent reference is not validated here; callers that accept
    user input check it first.

    Args:
        store: Record store.
        owner_id: Owner of the new record.
        name: Display name.
        file_type: File or folder.
        parent_id: Parent folder id, None for root.
        path: Display path override.
        mime_type: MIME type of a file.
        size: Size in bytes.
        is_starred: Initial starred flag.
        is_shared: Initial shared flag.
        thumbnail: Thumbnail URL.
        metadata: Opaque metadata bag.

    Returns:
        Created File instance.
    """
    if path is None:
        parent = store.get(File, parent_id) if parent_id else None
        path = build_display_path(parent.path if parent else None, name)

    if file_type == FileType.FOLDER:
        mime_type = None
        size = 0
    elif mime_type is None:
        mime_type = detect_mime_type(name)

    now = timezone.now()
    file_instance = File(
        id=store.new_id(),
        name=name,
        type=file_type,
        path=path,
        owner_id=owner_id,
        parent_id=parent_id,
        mime_type=mime_type,
        size=size,
        is_starred=is_starred,
        is_shared=is_shared,
        thumbnail=thumbnail,
        metadata=dict(metadata or {}),
        created_at=now,
        updated_at=now,
    )
    store.put(File, file_instance)

    logger.info(
        'Created %s record: %s (ID: %s)',
        file_type,
        path,
        file_instance.id,
    )
    return file_instance


def create_folder(
    store: RecordStore,
    owner_id: str,
    name: str,
    **fields: Any,
) -> File:
    """Create a folder record.

    Folders start with a static ``fileCount`` of 0 in their metadata
    unless other metadata is given. The count is display data and is
    never kept in sync with the folder's children.

    Args:
        store: Record store.
        owner_id: Owner of the new folder.
        name: Folder name.
        fields: Extra keyword arguments accepted by create_file.

    Returns:
        Created folder.
    """
    fields.setdefault('metadata', {'fileCount': 0})
    return create_file(store, owner_id, name, FileType.FOLDER, **fields)


def update_file(
    store: RecordStore,
    file_id: str,
    **updates: Any,
) -> File | None:
    """Merge fields into an existing file record.

    updated_at is always refreshed, even when updates is empty, and
    always moves forward.

    Args:
        store: Record store.
        file_id: File identifier.
        updates: Field values to merge (snake_case File attributes).

    Returns:
        Updated File instance, None if the id is unknown.

    Raises:
        ValueError: If updates touch id, owner_id or created_at.
    """
    forbidden = _IMMUTABLE_FIELDS.intersection(updates)
    if forbidden:
        raise ValueError(
            'Cannot update immutable fields: {0}'.format(
                ', '.join(sorted(forbidden)),
            ),
        )

    file_instance = store.get(File, file_id)
    if file_instance is None:
        logger.debug('Update of unknown file: %s', file_id)
        return None

    updates.pop('updated_at', None)
    updated = dataclasses.replace(
        file_instance,
        **updates,
        updated_at=next_timestamp(file_instance.updated_at),
    )
    store.put(File, updated)

    logger.info(
        'Updated file %s: %s',
        file_id,
        ', '.join(sorted(updates)) or 'touch',
    )
    return updated


def is_within(store: RecordStore, folder_id: str, ancestor_id: str) -> bool:
    """Check whether a folder is the ancestor itself or lies below it.

    Walks parent references upward from folder_id. Stops on a missing
    parent or on a cycle already present in the data.

    Args:
        store: Record store.
        folder_id: Folder to start from.
        ancestor_id: Candidate ancestor.

    Returns:
        True if ancestor_id is folder_id or one of its ancestors.
    """
    seen: set[str] = set()
    current_id: str | None = folder_id
    while current_id is not None and current_id not in seen:
        if current_id == ancestor_id:
            return True
        seen.add(current_id)
        current = store.get(File, current_id)
        current_id = current.parent_id if current else None
    return False
