"""In-memory records for the files app.

Records are plain dataclasses held by the RecordStore. They carry no
persistence logic; mutations replace a record with an updated copy.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Final, TypeAlias, final, override

# Opaque key-value bags (metadata, preferences, details) hold scalars only
ScalarValue: TypeAlias = str | int | float | bool
Bag: TypeAlias = dict[str, ScalarValue]

# Default storage limit: 5 GB in bytes
DEFAULT_STORAGE_LIMIT: Final = 5 * 1024 * 1024 * 1024


def default_preferences() -> Bag:
    """Preferences assigned to newly created users.

    Returns:
        Fresh preferences dictionary.
    """
    return {
        'theme': 'light',
        'emailNotifications': True,
        'desktopNotifications': False,
    }


class FileType(enum.StrEnum):
    """Kind of entry in the file hierarchy."""

    FILE = 'file'
    FOLDER = 'folder'


class Plan(enum.StrEnum):
    """Subscription tier."""

    FREE = 'free'
    PRO = 'pro'


class SharePermission(enum.StrEnum):
    """Access level granted by a share."""

    READ = 'read'
    WRITE = 'write'
    ADMIN = 'admin'


@final
@dataclass(frozen=True, slots=True)
class User:
    """Account of a drive user.

    storage_used is informational; it is never reconciled with the
    sizes of the user's files.
    """

    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    created_at: datetime
    job_title: str | None = None
    avatar: str | None = None
    plan: Plan = Plan.FREE
    storage_used: int = 0
    storage_limit: int = DEFAULT_STORAGE_LIMIT
    preferences: Bag = field(default_factory=default_preferences)

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.username} <{self.email}>'


@final
@dataclass(frozen=True, slots=True)
class File:
    """File or folder in a user's drive.

    The hierarchy is encoded by parent_id (None means root). The path
    string is a denormalized display value and is never used to
    reconstruct the hierarchy.
    """

    id: str
    name: str
    type: FileType
    path: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    parent_id: str | None = None
    mime_type: str | None = None
    size: int = 0
    is_starred: bool = False
    is_shared: bool = False
    is_deleted: bool = False
    thumbnail: str | None = None
    metadata: Bag = field(default_factory=dict)

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner_id}:{self.path}'

    @property
    def is_folder(self) -> bool:
        """Whether this entry is a folder."""
        return self.type == FileType.FOLDER


@final
@dataclass(frozen=True, slots=True)
class Share:
    """Grant of access to a file.

    shared_with=None means anyone with the link. expires_at is
    advisory and never enforced.
    """

    id: str
    file_id: str
    shared_by: str
    created_at: datetime
    shared_with: str | None = None
    permissions: SharePermission = SharePermission.READ
    expires_at: datetime | None = None


@final
@dataclass(frozen=True, slots=True)
class Activity:
    """Append-only activity log entry."""

    id: str
    user_id: str
    action: str
    created_at: datetime
    file_id: str | None = None
    details: Bag = field(default_factory=dict)
