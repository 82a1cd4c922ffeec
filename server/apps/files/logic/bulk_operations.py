"""Business logic for bulk actions over many files."""

import enum
import logging
from collections.abc import Sequence
from typing import Final

from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.logic.file_operations import is_within, update_file
from server.apps.files.logic.trash_operations import (
    restore_file,
    soft_delete_file,
)
from server.apps.files.models import File


class BulkAction(enum.StrEnum):
    """Action applied to every id of a bulk request."""

    DELETE = 'delete'
    RESTORE = 'restore'
    STAR = 'star'
    UNSTAR = 'unstar'
    MOVE = 'move'
    COPY = 'copy'


@enum.unique
class _Unset(enum.Enum):
    token = 0


# Distinguishes "no move target given" from "move to root" (None)
UNSET: Final = _Unset.token

logger = logging.getLogger(__name__)


def bulk_apply(
    store: RecordStore,
    action: BulkAction,
    file_ids: Sequence[str],
    target_parent_id: str | None | _Unset = UNSET,
) -> list[File]:
    """Apply one action to many files, independently and in order.

    Unknown ids are skipped, not reported. The operation is not
    atomic: a skipped id leaves the earlier updates applied.

    MOVE without a target is skipped entirely. MOVE also skips a
    folder that would end up inside itself or one of its descendants.
    COPY has no effect.

    Args:
        store: Record store.
        action: Action to apply.
        file_ids: Ids to process, in order.
        target_parent_id: Destination folder for MOVE (None = root).

    Returns:
        Records that were updated, in processing order.
    """
    results: list[File] = []

    for file_id in file_ids:
        file_instance = _apply_one(store, action, file_id, target_parent_id)
        if file_instance is not None:
            results.append(file_instance)

    logger.info(
        'Bulk %s applied to %d of %d files',
        action,
        len(results),
        len(file_ids),
    )
    return results


def _apply_one(
    store: RecordStore,
    action: BulkAction,
    file_id: str,
    target_parent_id: str | None | _Unset,
) -> File | None:
    match action:
        case BulkAction.DELETE:
            return soft_delete_file(store, file_id)
        case BulkAction.RESTORE:
            return restore_file(store, file_id)
        case BulkAction.STAR:
            return update_file(store, file_id, is_starred=True)
        case BulkAction.UNSTAR:
            return update_file(store, file_id, is_starred=False)
        case BulkAction.MOVE:
            if target_parent_id is UNSET:
                return None
            return _move(store, file_id, target_parent_id)
        case _:
            # COPY: no defined effect
            return None


def _move(
    store: RecordStore,
    file_id: str,
    target_parent_id: str | None,
) -> File | None:
    if target_parent_id is not None and is_within(
        store,
        target_parent_id,
        file_id,
    ):
        logger.warning(
            'Skipping move of %s into its own subtree (%s)',
            file_id,
            target_parent_id,
        )
        return None
    return update_file(store, file_id, parent_id=target_parent_id)
