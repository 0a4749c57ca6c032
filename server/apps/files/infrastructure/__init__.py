"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Local filesystem blob store
- Session token cache (Redis)
- Metadata repository (Django ORM)
- Input parsing and MIME type lookup

Keep infrastructure concerns separate from business logic.
"""
