"""JSON API views for file records."""

from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from server.apps.core.http import (
    api_errors,
    get_token,
    parse_json_body,
    result_response,
)
from server.apps.files.logic.file_operations import get_file_manager
from server.apps.files.models import ROOT_PARENT_ID


@csrf_exempt
@require_http_methods(['GET', 'POST'])
@api_errors
def files_collection(request: HttpRequest) -> HttpResponse:
    """Upload a record (POST) or list a folder (GET)."""
    manager = get_file_manager()
    token = get_token(request)

    if request.method == 'POST':
        body = parse_json_body(request)
        return result_response(manager.upload(
            token,
            name=body.get('name'),
            file_type=body.get('type'),
            parent_id=body.get('parentId', ROOT_PARENT_ID),
            is_public=body.get('isPublic', False),
            data=body.get('data'),
        ))

    return result_response(manager.index(
        token,
        parent_id=request.GET.get('parentId', ROOT_PARENT_ID),
        page=request.GET.get('page', 0),
    ))


@require_GET
@api_errors
def file_detail(request: HttpRequest, file_id: str) -> HttpResponse:
    """Show one record owned by the caller."""
    return result_response(
        get_file_manager().show(get_token(request), file_id),
    )


@csrf_exempt
@require_http_methods(['PUT'])
@api_errors
def file_publish(request: HttpRequest, file_id: str) -> HttpResponse:
    """Make a record public."""
    return result_response(
        get_file_manager().publish(get_token(request), file_id),
    )


@csrf_exempt
@require_http_methods(['PUT'])
@api_errors
def file_unpublish(request: HttpRequest, file_id: str) -> HttpResponse:
    """Make a record private."""
    return result_response(
        get_file_manager().unpublish(get_token(request), file_id),
    )


@require_GET
@api_errors
def file_data(request: HttpRequest, file_id: str) -> HttpResponse:
    """Stream the content of a record."""
    return result_response(get_file_manager().download(
        get_token(request),
        file_id,
        size=request.GET.get('size'),
    ))
