"""In-memory record store backing all entities."""

import logging
import uuid
from typing import Any, TypeVar, final

logger = logging.getLogger(__name__)

_RecordT = TypeVar('_RecordT')


@final
class RecordStore:
    """Keyed in-memory collection per record type.

    Each record type (User, File, Share, Activity) gets its own map from
    id to record. Lookups by key are direct; every other query is a
    linear scan over all(). Cross-record references are not validated.

    Unknown ids are never an error: get() returns None and delete()
    returns False.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._tables: dict[type[Any], dict[str, Any]] = {}

    def new_id(self) -> str:
        """Generate a globally unique record identifier.

        Returns:
            Random 128-bit UUID rendered as a string.
        """
        return str(uuid.uuid4())

    def get(self, record_type: type[_RecordT], record_id: str) -> _RecordT | None:
        """Look up a record by id.

        Args:
            record_type: Record class to look in.
            record_id: Record identifier.

        Returns:
            Record if present, None otherwise.
        """
        return self._table(record_type).get(record_id)

    def put(self, record_type: type[_RecordT], record: _RecordT) -> None:
        """Insert or replace a record, keyed by its id.

        Replacing keeps the record's original iteration position.

        Args:
            record_type: Record class to store under.
            record: Record instance with an ``id`` attribute.
        """
        self._table(record_type)[record.id] = record  # type: ignore[attr-defined]

    def delete(self, record_type: type[Any], record_id: str) -> bool:
        """Remove a record.

        Args:
            record_type: Record class to delete from.
            record_id: Record identifier.

        Returns:
            True if the record existed and was removed, False otherwise.
        """
        table = self._table(record_type)
        if record_id not in table:
            logger.debug(
                'Delete of unknown %s record: %s',
                record_type.__name__,
                record_id,
            )
            return False
        del table[record_id]
        return True

    def all(self, record_type: type[_RecordT]) -> list[_RecordT]:
        """Get all records of a type in insertion order.

        Args:
            record_type: Record class to list.

        Returns:
            Snapshot list of records.
        """
        return list(self._table(record_type).values())

    def count(self, record_type: type[Any]) -> int:
        """Count records of a type.

        Args:
            record_type: Record class to count.

        Returns:
            Number of stored records.
        """
        return len(self._table(record_type))

    def _table(self, record_type: type[Any]) -> dict[str, Any]:
        return self._tables.setdefault(record_type, {})
