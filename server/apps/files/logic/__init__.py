"""Business logic layer for files app.

This package contains all business logic for file records:
- Upload, show, listing, visibility and download
- Thumbnails of uploaded images
- Blob store maintenance

All business logic should be implemented here, separate from
models (data layer), infrastructure (external systems) and views.
"""
