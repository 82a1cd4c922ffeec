"""Drive settings: demo tenant and listing limits."""

from server.settings.components import config

# Single hardcoded user every request acts for
DRIVE_DEMO_USER_ID = config('DRIVE_DEMO_USER_ID', default='demo-user-1')

# Populate the in-memory store with demo folders and files at startup
DRIVE_SEED_DEMO_DATA = config('DRIVE_SEED_DEMO_DATA', cast=bool, default=True)

# Default sizes of the recent files and activity listings
DRIVE_RECENT_LIMIT = config('DRIVE_RECENT_LIMIT', cast=int, default=10)
DRIVE_ACTIVITY_LIMIT = config('DRIVE_ACTIVITY_LIMIT', cast=int, default=50)
