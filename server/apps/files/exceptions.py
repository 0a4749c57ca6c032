"""Exceptions for files app.

Each error carries the message and HTTP status returned to the client.
"""

from http import HTTPStatus


class FilesManagerError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = 'Internal Server Error'

    def __init__(self, message: str | None = None) -> None:
        """Initialize FilesManagerError.

        Args:
            message: Client-facing message. Falls back to the class default.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(FilesManagerError):
    """Raised when the session token is missing, invalid or expired."""

    status_code = HTTPStatus.UNAUTHORIZED
    default_message = 'Unauthorized'


class RequestValidationError(FilesManagerError):
    """Raised when a required field is missing or malformed."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = 'Bad Request'


class NotFoundError(FilesManagerError):
    """Raised when a record is absent or not visible to the caller."""

    status_code = HTTPStatus.NOT_FOUND
    default_message = 'Not found'


class ConflictError(FilesManagerError):
    """Raised when registering an email that is already taken."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = 'Already exist'


class InternalError(FilesManagerError):
    """Raised when a collaborator fails unexpectedly."""
