"""Infrastructure layer for files app.

This package contains the pieces the business logic is built on:
- In-memory record store (keyed collection per record type)
- Demo data seeding for the single demo tenant
- Metadata helpers (MIME type, display paths)

Keep infrastructure concerns separate from business logic.
"""
