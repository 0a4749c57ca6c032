"""WSGI entry point for the files manager API."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'server.settings')

application = get_wsgi_application()

# Apps are loaded now: connect collaborators before the first request
from server.apps.files.logic.file_operations import (  # noqa: E402, I001
    get_file_manager,
)

get_file_manager()
