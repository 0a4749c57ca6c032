"""Health and statistics endpoints."""

from django.contrib.auth import get_user_model
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_GET

from server.apps.core.http import api_errors
from server.apps.files.infrastructure.repository import FileRepository
from server.apps.files.infrastructure.sessions import get_session_store

User = get_user_model()


@require_GET
def status(request: HttpRequest) -> HttpResponse:
    """Report whether the session cache and the database answer."""
    return JsonResponse({
        'redis': get_session_store().is_alive(),
        'db': FileRepository().is_alive(),
    })


@require_GET
@api_errors
def stats(request: HttpRequest) -> HttpResponse:
    """Count users and file records."""
    return JsonResponse({
        'user': User.objects.count(),
        'files': FileRepository().count(),
    })
