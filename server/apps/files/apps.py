"""Django app configuration for files app."""

import logging
from typing import override

from django.apps import AppConfig, apps
from django.conf import settings

from server.apps.files.infrastructure.record_store import RecordStore

logger = logging.getLogger(__name__)


class FilesConfig(AppConfig):
    """Configuration for files app.

    Owns the process-wide RecordStore. State lives in memory only and
    is lost on restart.
    """

    name = 'server.apps.files'
    label = 'files'
    verbose_name = 'Files'

    store: RecordStore

    @override
    def ready(self) -> None:
        """Build the record store and seed it when configured."""
        from server.apps.files.infrastructure.demo_data import (  # noqa: WPS433
            seed_demo_data,
        )

        self.store = RecordStore()
        if settings.DRIVE_SEED_DEMO_DATA:
            seed_demo_data(self.store, settings.DRIVE_DEMO_USER_ID)
        else:
            logger.info('Demo data seeding disabled, starting with empty store')


def get_record_store() -> RecordStore:
    """Get the process-wide record store.

    Returns:
        RecordStore owned by the files app.
    """
    config = apps.get_app_config('files')
    return config.store  # type: ignore[attr-defined, no-any-return]
