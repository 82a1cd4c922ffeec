"""Business logic layer for files app.

This package contains all business logic of the drive:
- File and folder creation, field updates, bulk actions
- Listing views (by parent, recent, starred, shared, trash, search)
- Trash lifecycle (soft delete, restore, permanent delete)
- Users, shares and the activity log

Every function takes the RecordStore as its first argument, separate
from records (data layer) and infrastructure (the store itself).
"""
