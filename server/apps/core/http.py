"""Helpers shared by the JSON API views."""

import functools
import json
import logging
from collections.abc import Callable
from typing import Any, Final

from django.http import HttpRequest, HttpResponse, JsonResponse

from server.apps.files.exceptions import FilesManagerError, InternalError
from server.apps.files.logic.file_operations import OperationResult

logger = logging.getLogger(__name__)

TOKEN_HEADER: Final = 'X-Token'
LEGACY_TOKEN_HEADER: Final = 'token'
_BEARER_PREFIX: Final = 'bearer '

_View = Callable[..., HttpResponse]


def get_token(request: HttpRequest) -> str | None:
    """Extract the session token from the request headers.

    ``X-Token`` wins, then ``Authorization: Bearer <token>``, then the
    bare ``token`` header older clients send.

    Args:
        request: Incoming request.

    Returns:
        Token string, or None if the client sent none.
    """
    token = request.headers.get(TOKEN_HEADER)
    if token:
        return token

    authorization = request.headers.get('Authorization', '')
    if authorization.lower().startswith(_BEARER_PREFIX):
        bearer = authorization[len(_BEARER_PREFIX):].strip()
        if bearer:
            return bearer

    return request.headers.get(LEGACY_TOKEN_HEADER) or None


def parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode a JSON object body.

    Malformed or non-object bodies decode to an empty dict so that
    field validation reports the missing fields.

    Args:
        request: Incoming request.

    Returns:
        Decoded body.
    """
    if not request.body:
        return {}
    try:
        body = json.loads(request.body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.debug('Ignoring malformed JSON body on %s', request.path)
        return {}
    if not isinstance(body, dict):
        return {}
    return body


def error_response(error: FilesManagerError) -> JsonResponse:
    """Render an API error.

    Args:
        error: Error raised by the business logic.

    Returns:
        ``{"error": message}`` with the error's status code.
    """
    return JsonResponse({'error': error.message}, status=error.status_code)


def result_response(result: OperationResult) -> HttpResponse:
    """Render a successful operation.

    Args:
        result: Operation outcome.

    Returns:
        JSON response, or raw content for downloads.
    """
    if isinstance(result.payload, bytes):
        return HttpResponse(
            result.payload,
            status=result.status,
            content_type=result.content_type,
        )
    return JsonResponse(result.payload, status=result.status, safe=False)


def api_errors(view: _View) -> _View:
    """Render errors raised by a view as JSON.

    FilesManagerError keeps its message and status; anything else is
    logged and reported as a generic internal error.
    """
    @functools.wraps(view)
    def decorator(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        try:
            return view(request, *args, **kwargs)
        except FilesManagerError as error:
            return error_response(error)
        except Exception:
            logger.exception('Unhandled error in view %s', view.__name__)
            return error_response(InternalError())
    return decorator
