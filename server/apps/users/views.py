"""JSON API views for users and sessions."""

from http import HTTPStatus

from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from server.apps.core.http import (
    api_errors,
    get_token,
    parse_json_body,
    result_response,
)
from server.apps.users.logic.auth_operations import (
    connect_user,
    disconnect_user,
    get_current_user,
    register_user,
)


@csrf_exempt
@require_POST
@api_errors
def users_collection(request: HttpRequest) -> HttpResponse:
    """Register a user."""
    body = parse_json_body(request)
    return result_response(
        register_user(body.get('email'), body.get('password')),
    )


@require_GET
@api_errors
def users_me(request: HttpRequest) -> HttpResponse:
    """Describe the caller."""
    return result_response(get_current_user(get_token(request)))


@require_GET
@api_errors
def connect(request: HttpRequest) -> HttpResponse:
    """Exchange Basic credentials for a session token."""
    return result_response(connect_user(request))


@require_GET
@api_errors
def disconnect(request: HttpRequest) -> HttpResponse:
    """End the caller's session."""
    disconnect_user(get_token(request))
    return HttpResponse(status=HTTPStatus.NO_CONTENT)
