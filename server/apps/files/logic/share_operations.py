"""Business logic for sharing files."""

import logging
from datetime import datetime

from django.utils import timezone

from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.logic.file_operations import update_file
from server.apps.files.models import Share, SharePermission

logger = logging.getLogger(__name__)


def get_share(store: RecordStore, share_id: str) -> Share | None:
    """Get a share by id.

    Args:
        store: Record store.
        share_id: Share identifier.

    Returns:
        Share if found, None otherwise.
    """
    return store.get(Share, share_id)


def list_file_shares(store: RecordStore, file_id: str) -> list[Share]:
    """List all shares of a file.

    Expired shares are included; expiry is advisory only.

    Args:
        store: Record store.
        file_id: Shared file.

    Returns:
        Shares in creation order.
    """
    return [share for share in store.all(Share) if share.file_id == file_id]


def create_share(
    store: RecordStore,
    file_id: str,
    shared_by: str,
    shared_with: str | None = None,
    permissions: SharePermission = SharePermission.READ,
    expires_at: datetime | None = None,
) -> Share:
    """Share a file and mark it as shared.

    Args:
        store: Record store.
        file_id: File to share.
        shared_by: Sharing user.
        shared_with: Recipient, None for anyone with the link.
        permissions: Granted access level.
        expires_at: Advisory expiry time.

    Returns:
        Created Share instance.
    """
    share = Share(
        id=store.new_id(),
        file_id=file_id,
        shared_by=shared_by,
        shared_with=shared_with,
        permissions=permissions,
        expires_at=expires_at,
        created_at=timezone.now(),
    )
    store.put(Share, share)
    update_file(store, file_id, is_shared=True)

    logger.info(
        'File %s shared by %s with %s (%s)',
        file_id,
        shared_by,
        shared_with or 'anyone with the link',
        permissions,
    )
    return share


def delete_share(store: RecordStore, share_id: str) -> bool:
    """Remove a share.

    The file loses its shared flag once its last share is gone.

    Args:
        store: Record store.
        share_id: Share identifier.

    Returns:
        True if the share was removed, False if it was absent.
    """
    share = store.get(Share, share_id)
    if share is None:
        return False

    store.delete(Share, share_id)
    if not list_file_shares(store, share.file_id):
        update_file(store, share.file_id, is_shared=False)

    logger.info('Share removed: %s (file: %s)', share_id, share.file_id)
    return True
