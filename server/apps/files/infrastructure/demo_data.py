"""Demo data for the single demo tenant.

Seeding is explicit: the files app calls seed_demo_data() at startup
when DRIVE_SEED_DEMO_DATA is on, and tests call it on their own store.
"""

import logging
from datetime import datetime, timedelta
from typing import Final

from django.utils import timezone

from server.apps.files.infrastructure.record_store import RecordStore
from server.apps.files.models import File, FileType, Plan, User

DEMO_USER_ID: Final = 'demo-user-1'

_DAY: Final = timedelta(days=1)
_HOUR: Final = timedelta(hours=1)

_DOCX: Final = (
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
)
_XLSX: Final = (
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
)
_PPTX: Final = (
    'application/vnd.openxmlformats-officedocument.presentationml.presentation'
)

# id, name, starred, shared, fileCount, created ago, updated ago
_FOLDERS: Final = (
    ('folder-1', 'Marketing Campaign', False, False, 24, 7 * _DAY, 2 * _DAY),
    ('folder-2', 'Financial Reports', True, False, 12, 14 * _DAY, _DAY),
    ('folder-3', 'Design Assets', False, True, 156, 30 * _DAY, 3 * _DAY),
    ('folder-4', 'Project Documents', False, False, 8, 21 * _DAY, 4 * _DAY),
    ('folder-5', 'Client Files', True, True, 42, 45 * _DAY, _DAY),
)

# id, name, parent, mime type, size, starred, shared, thumbnail, age
_FILES: Final = (
    (
        'file-1', 'Q4_Report.pdf', 'folder-2', 'application/pdf',
        2516582, True, False, None, 2 * _DAY,
    ),
    (
        'file-2', 'Proposal_Draft.docx', 'folder-1', _DOCX,
        913408, False, True, None, 5 * _HOUR,
    ),
    (
        'file-3', 'Budget_2024.xlsx', 'folder-2', _XLSX,
        1258291, False, False, None, 7 * _DAY,
    ),
    (
        'file-4', 'Office_Setup.jpg', 'folder-3', 'image/jpeg',
        3879731, False, False,
        'https://images.unsplash.com/photo-1586953208448-b95a79798f07'
        '?auto=format&fit=crop&w=48&h=48',
        3 * _DAY,
    ),
    (
        'file-5', 'Presentation.pptx', 'folder-1', _PPTX,
        6081741, False, False, None, 6 * _DAY,
    ),
    (
        'file-6', 'Meeting_Notes.md', None, 'text/markdown',
        2847, True, False, None, 8 * _HOUR,
    ),
    (
        'file-7', 'Team_Photo.jpg', None, 'image/jpeg',
        5421896, False, True,
        'https://images.unsplash.com/photo-1522071820081-009f0129c71c'
        '?auto=format&fit=crop&w=48&h=48',
        12 * _HOUR,
    ),
    (
        'file-8', 'Company_Logo.svg', None, 'image/svg+xml',
        18743, True, False, None, 15 * _DAY,
    ),
    (
        'file-9', 'Contract_Template.docx', 'folder-4', _DOCX,
        1456789, False, False, None, 10 * _DAY,
    ),
    (
        'file-10', 'Brand_Guidelines.pdf', 'folder-3', 'application/pdf',
        8923456, False, True, None, 18 * _DAY,
    ),
)

logger = logging.getLogger(__name__)


def seed_demo_data(
    store: RecordStore,
    user_id: str = DEMO_USER_ID,
    now: datetime | None = None,
) -> User:
    """Populate a store with the demo user, five folders and ten files.

    Record ids are fixed ('folder-1', 'file-1', ...) and timestamps
    are relative to now.

    Args:
        store: Record store to populate.
        user_id: Id of the demo user.
        now: Reference time, defaults to the current time.

    Returns:
        The demo user.
    """
    now = now or timezone.now()

    user = User(
        id=user_id,
        username='sarah.johnson',
        email='sarah.johnson@company.com',
        first_name='Sarah',
        last_name='Johnson',
        job_title='Senior Marketing Manager',
        avatar=None,
        plan=Plan.PRO,
        storage_used=2577891328,  # 2.4 GB
        created_at=now,
    )
    store.put(User, user)

    folder_paths: dict[str, str] = {}
    for folder_id, name, starred, shared, file_count, created, updated in _FOLDERS:
        folder_paths[folder_id] = f'/{name}'
        store.put(File, File(
            id=folder_id,
            name=name,
            type=FileType.FOLDER,
            path=folder_paths[folder_id],
            owner_id=user_id,
            is_starred=starred,
            is_shared=shared,
            metadata={'fileCount': file_count},
            created_at=now - created,
            updated_at=now - updated,
        ))

    for file_row in _FILES:
        file_id, name, parent_id, mime_type, size = file_row[:5]
        starred, shared, thumbnail, age = file_row[5:]
        parent_path = folder_paths[parent_id] if parent_id else ''
        store.put(File, File(
            id=file_id,
            name=name,
            type=FileType.FILE,
            path=f'{parent_path}/{name}',
            owner_id=user_id,
            parent_id=parent_id,
            mime_type=mime_type,
            size=size,
            is_starred=starred,
            is_shared=shared,
            thumbnail=thumbnail,
            created_at=now - age,
            updated_at=now - age,
        ))

    logger.info(
        'Seeded demo data for %s: %d folders, %d files',
        user_id,
        len(_FOLDERS),
        len(_FILES),
    )
    return user
