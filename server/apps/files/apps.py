"""Django app configuration for file records."""

from django.apps import AppConfig


class FilesConfig(AppConfig):
    """Folders, uploads and their blobs."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.files'
    label = 'files'
    verbose_name = 'File records'
