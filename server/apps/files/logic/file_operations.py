"""Business logic for file operations.

``FileManager`` authorizes every request through the session store,
validates input and folder hierarchy, then coordinates the metadata
repository with the blob store.
"""

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Final, ParamSpec, TypeVar, final

from django.conf import settings

from server.apps.files.exceptions import (
    FilesManagerError,
    InternalError,
    NotFoundError,
    RequestValidationError,
    UnauthorizedError,
)
from server.apps.files.infrastructure.metadata import (
    decode_content,
    detect_mime_type,
    parse_identifier,
    parse_page,
    parse_parent_id,
)
from server.apps.files.infrastructure.repository import FileRepository
from server.apps.files.infrastructure.sessions import get_session_store
from server.apps.files.infrastructure.storage import BlobStorage
from server.apps.files.logic.interfaces import (
    ContentStore,
    MetadataRepository,
    SessionResolver,
)
from server.apps.files.logic.thumbnail_operations import thumbnail_name
from server.apps.files.models import (
    CONTENT_TYPES,
    NAME_MAX_LENGTH,
    ROOT_PARENT_ID,
    File,
    FileType,
)

logger = logging.getLogger(__name__)

_JSON_CONTENT_TYPE: Final = 'application/json'
_DEFAULT_PAGE_SIZE: Final = 20
_DEFAULT_THUMBNAIL_WIDTHS: Final = (500, 250, 100)

# Largest OFFSET accepted by 64-bit SQL backends
_MAX_SQL_OFFSET: Final = 2**63 - 1

_Params = ParamSpec('_Params')
_Result = TypeVar('_Result')


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Successful outcome of a file operation.

    ``payload`` is JSON-serializable data, or raw bytes when
    ``content_type`` is not JSON.
    """

    status: int
    payload: Any
    content_type: str = _JSON_CONTENT_TYPE


def operation_boundary(
    func: Callable[_Params, _Result],
) -> Callable[_Params, _Result]:
    """Turn unexpected collaborator failures into InternalError.

    FilesManagerError subclasses pass through unchanged; anything else
    is logged with its traceback and replaced by a generic error.
    """
    @functools.wraps(func)
    def decorator(*args: _Params.args, **kwargs: _Params.kwargs) -> _Result:
        try:
            return func(*args, **kwargs)
        except FilesManagerError:
            raise
        except Exception as error:
            logger.exception('Unexpected failure in %s', func.__name__)
            raise InternalError() from error
    return decorator


@final
class FileManager:
    """Upload, show, list, publish and download file records."""

    def __init__(  # noqa: WPS211
        self,
        sessions: SessionResolver,
        storage: ContentStore,
        repository: MetadataRepository,
        page_size: int = _DEFAULT_PAGE_SIZE,
        thumbnail_widths: tuple[int, ...] = _DEFAULT_THUMBNAIL_WIDTHS,
    ) -> None:
        """Initialize the file manager.

        Args:
            sessions: Resolves tokens to user ids.
            storage: Blob store for file contents.
            repository: Metadata store for File records.
            page_size: Records per page in listings.
            thumbnail_widths: Widths accepted by the ``size`` download
                parameter.
        """
        self.sessions = sessions
        self.storage = storage
        self.repository = repository
        self.page_size = page_size
        self.thumbnail_widths = thumbnail_widths

    def connect(self) -> None:
        """Connect all collaborators."""
        self.sessions.connect()
        self.storage.connect()
        self.repository.connect()

    def close(self) -> None:
        """Close all collaborators."""
        self.sessions.close()
        self.storage.close()
        self.repository.close()

    @operation_boundary
    def upload(  # noqa: WPS211
        self,
        token: str | None,
        name: object,
        file_type: object,
        parent_id: object = ROOT_PARENT_ID,
        is_public: object = False,
        data: object = None,
    ) -> OperationResult:
        """Create a folder, or store a file or image with its content.

        Transaction safety: content is written to the blob store first,
        then the metadata record is inserted. If the insert fails, the
        blob is deleted (best-effort rollback).

        Args:
            token: Session token.
            name: Display name.
            file_type: 'folder', 'file' or 'image'.
            parent_id: Containing folder id, ``0`` for the root.
            is_public: Visibility flag.
            data: Base64 content, required for files and images.

        Returns:
            201 result with the created record.

        Raises:
            UnauthorizedError: If the token does not resolve.
            RequestValidationError: If a field is missing or malformed,
                or the parent is missing or not a folder.
        """
        user_id = self._authenticate(token)

        if not name or not isinstance(name, str):
            raise RequestValidationError('Missing name')
        if len(name) > NAME_MAX_LENGTH:
            raise RequestValidationError('Invalid name')
        if file_type not in FileType.values:
            raise RequestValidationError('Missing type')
        if file_type in CONTENT_TYPES and not data:
            raise RequestValidationError('Missing data')

        parent_uuid = parse_parent_id(parent_id, 'Parent not found')
        if parent_uuid is not None:
            parent = self.repository.get_owned(parent_uuid, user_id)
            if parent is None:
                raise RequestValidationError('Parent not found')
            if not parent.is_folder:
                raise RequestValidationError('Parent is not a folder')

        if not isinstance(is_public, bool):
            raise RequestValidationError('Invalid isPublic')

        if file_type == FileType.FOLDER:
            folder = self.repository.insert(
                user_id=user_id,
                name=name,
                file_type=FileType.FOLDER,
                parent_id=parent_uuid,
                is_public=is_public,
            )
            return OperationResult(HTTPStatus.CREATED, folder.to_dict())

        content = decode_content(data)

        # Step 1: Write content to the blob store first
        blob_name = self.storage.write(content)

        # Step 2: Insert the metadata record
        try:
            file_instance = self.repository.insert(
                user_id=user_id,
                name=name,
                file_type=str(file_type),
                parent_id=parent_uuid,
                is_public=is_public,
                local_path=blob_name,
            )
        except Exception:
            # Rollback: the blob has no record pointing at it
            logger.exception(
                'Metadata insert failed, rolling back blob write: %s',
                blob_name,
            )
            self.storage.rollback_write(blob_name)
            raise

        return OperationResult(HTTPStatus.CREATED, file_instance.to_dict())

    @operation_boundary
    def show(self, token: str | None, file_id: object) -> OperationResult:
        """Return one record owned by the caller.

        Records of other users are reported as missing.

        Raises:
            UnauthorizedError: If the token does not resolve.
            RequestValidationError: If file_id is malformed.
            NotFoundError: If no owned record matches.
        """
        user_id = self._authenticate(token)
        file_uuid = parse_identifier(file_id, 'Invalid id')

        file_instance = self.repository.get_owned(file_uuid, user_id)
        if file_instance is None:
            raise NotFoundError()
        return OperationResult(HTTPStatus.OK, file_instance.to_dict())

    @operation_boundary
    def index(
        self,
        token: str | None,
        parent_id: object = ROOT_PARENT_ID,
        page: object = 0,
    ) -> OperationResult:
        """List the caller's records inside a folder, one page at a time.

        No total count is returned: a page shorter than the page size
        is the last one.

        Raises:
            UnauthorizedError: If the token does not resolve.
            RequestValidationError: If parent_id or page is malformed.
        """
        user_id = self._authenticate(token)
        parent_uuid = parse_parent_id(parent_id, 'Invalid parentId')
        page_number = parse_page(page)

        offset = page_number * self.page_size
        if offset > _MAX_SQL_OFFSET - self.page_size:
            # Far past any real listing
            return OperationResult(HTTPStatus.OK, [])

        files = self.repository.list_children(
            user_id=user_id,
            parent_id=parent_uuid,
            offset=offset,
            limit=self.page_size,
        )
        return OperationResult(
            HTTPStatus.OK,
            [file_instance.to_dict() for file_instance in files],
        )

    def publish(self, token: str | None, file_id: object) -> OperationResult:
        """Make an owned record public."""
        return self.set_visibility(token, file_id, is_public=True)

    def unpublish(
        self,
        token: str | None,
        file_id: object,
    ) -> OperationResult:
        """Make an owned record private."""
        return self.set_visibility(token, file_id, is_public=False)

    @operation_boundary
    def set_visibility(
        self,
        token: str | None,
        file_id: object,
        is_public: bool,
    ) -> OperationResult:
        """Set visibility of an owned record.

        Setting the current value again is a no-op with the same
        response.

        Args:
            token: Session token.
            file_id: Record id.
            is_public: Target visibility.

        Returns:
            200 result with the updated record.

        Raises:
            UnauthorizedError: If the token does not resolve.
            RequestValidationError: If file_id is malformed.
            NotFoundError: If no owned record matches.
        """
        user_id = self._authenticate(token)
        file_uuid = parse_identifier(file_id, 'Invalid id')

        file_instance = self.repository.set_public(
            file_uuid,
            user_id,
            is_public,
        )
        if file_instance is None:
            raise NotFoundError()
        return OperationResult(HTTPStatus.OK, file_instance.to_dict())

    @operation_boundary
    def download(
        self,
        token: str | None,
        file_id: object,
        size: object = None,
    ) -> OperationResult:
        """Return the content of a record.

        Public records are served to anyone, private ones only to
        their owner. The MIME type comes from the record's name.

        Args:
            token: Session token, may be None.
            file_id: Record id.
            size: Optional thumbnail width for images.

        Returns:
            200 result with raw bytes.

        Raises:
            RequestValidationError: If file_id or size is malformed,
                or the record is a folder.
            NotFoundError: If the record is missing, not visible to the
                caller, or has no content reference.
            InternalError: If the content is missing on disk.
        """
        user_id = self.sessions.resolve(token)
        file_uuid = parse_identifier(file_id, 'Invalid id')
        width = self._parse_size(size)

        file_instance = self.repository.get(file_uuid)
        if file_instance is None:
            raise NotFoundError()
        if not self._can_read(file_instance, user_id):
            raise NotFoundError()
        if file_instance.is_folder:
            raise RequestValidationError("A folder doesn't have content")
        if not file_instance.local_path:
            raise NotFoundError()

        blob_name = file_instance.local_path
        if width is not None:
            blob_name = thumbnail_name(blob_name, width)
            if not self.storage.exists(blob_name):
                raise NotFoundError()

        try:
            content = self.storage.read(blob_name)
        except OSError as error:
            # The record promised content: this is not a client error
            logger.exception('Failed to read blob: %s', blob_name)
            raise InternalError() from error

        return OperationResult(
            HTTPStatus.OK,
            content,
            content_type=detect_mime_type(file_instance.name),
        )

    def _authenticate(self, token: str | None) -> str:
        user_id = self.sessions.resolve(token)
        if user_id is None:
            raise UnauthorizedError()
        return user_id

    def _can_read(self, file_instance: File, user_id: str | None) -> bool:
        if file_instance.is_public:
            return True
        return user_id is not None and user_id == str(file_instance.user_id)

    def _parse_size(self, size: object) -> int | None:
        if size is None:
            return None
        try:
            width = int(size)  # type: ignore[call-overload]
        except (TypeError, ValueError) as error:
            raise RequestValidationError('Invalid size') from error
        if width not in self.thumbnail_widths:
            raise RequestValidationError('Invalid size')
        return width


@functools.cache
def get_file_manager() -> FileManager:
    """Build and connect the process-wide file manager.

    Returns:
        FileManager wired to the configured collaborators.
    """
    manager = FileManager(
        sessions=get_session_store(),
        storage=BlobStorage(location=settings.FOLDER_PATH),
        repository=FileRepository(),
        page_size=settings.FILES_PAGE_SIZE,
        thumbnail_widths=tuple(settings.THUMBNAIL_WIDTHS),
    )
    manager.connect()
    return manager
