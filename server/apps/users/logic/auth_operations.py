"""Business logic for registration and session tokens.

Users are Django auth users whose username is their email. Sessions
are opened with HTTP Basic credentials and live in the session store.
"""

import base64
import binascii
import logging
from http import HTTPStatus
from typing import Final

from django.contrib.auth import authenticate, get_user_model
from django.db import IntegrityError, transaction
from django.http import HttpRequest

from server.apps.files.exceptions import (
    ConflictError,
    RequestValidationError,
    UnauthorizedError,
)
from server.apps.files.infrastructure.sessions import get_session_store
from server.apps.files.logic.file_operations import (
    OperationResult,
    operation_boundary,
)

User = get_user_model()
logger = logging.getLogger(__name__)

_BASIC_PREFIX: Final = 'basic '


@operation_boundary
def register_user(email: object, password: object) -> OperationResult:
    """Create a user.

    Args:
        email: Unique, case-sensitive email.
        password: Plain password, stored hashed only.

    Returns:
        201 result with ``{id, email}``.

    Raises:
        RequestValidationError: If email or password is missing.
        ConflictError: If the email is already registered.
    """
    if not email or not isinstance(email, str):
        raise RequestValidationError('Missing email')
    if not password or not isinstance(password, str):
        raise RequestValidationError('Missing password')

    if User.objects.filter(email=email).exists():
        raise ConflictError()

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
            )
    except IntegrityError as error:
        # Concurrent registration of the same email
        raise ConflictError() from error

    logger.info('User registered: %s (ID: %d)', email, user.id)
    return OperationResult(
        HTTPStatus.CREATED,
        {'id': str(user.id), 'email': user.email},
    )


def parse_basic_credentials(authorization: str | None) -> tuple[str, str]:
    """Extract email and password from a Basic Authorization header.

    Args:
        authorization: Header value (``Basic base64(email:password)``).

    Returns:
        Tuple of email and password.

    Raises:
        UnauthorizedError: If the header is missing or malformed.
    """
    if not authorization or not authorization.lower().startswith(_BASIC_PREFIX):
        raise UnauthorizedError()

    encoded = authorization[len(_BASIC_PREFIX):].strip()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError) as error:
        raise UnauthorizedError() from error

    email, separator, password = decoded.partition(':')
    if not separator or not email:
        raise UnauthorizedError()
    return email, password


@operation_boundary
def connect_user(request: HttpRequest) -> OperationResult:
    """Open a session from Basic credentials.

    Args:
        request: Request carrying the Authorization header.

    Returns:
        200 result with ``{token}``.

    Raises:
        UnauthorizedError: If credentials are missing or wrong, or the
            user is inactive.
    """
    email, password = parse_basic_credentials(
        request.headers.get('Authorization'),
    )
    user = authenticate(request=request, username=email, password=password)

    if user is None:
        logger.warning('Authentication failed for user: %s', email)
        raise UnauthorizedError()

    if not user.is_active:
        logger.warning('Inactive user attempted login: %s', email)
        raise UnauthorizedError()

    token = get_session_store().create(user.pk)
    logger.info('User authenticated successfully: %s', email)
    return OperationResult(HTTPStatus.OK, {'token': token})


@operation_boundary
def disconnect_user(token: str | None) -> OperationResult:
    """End the caller's session.

    Raises:
        UnauthorizedError: If the token does not resolve.
    """
    sessions = get_session_store()
    if token is None or sessions.resolve(token) is None:
        raise UnauthorizedError()

    sessions.end(token)
    return OperationResult(HTTPStatus.NO_CONTENT, None)


@operation_boundary
def get_current_user(token: str | None) -> OperationResult:
    """Describe the user owning the session.

    Raises:
        UnauthorizedError: If the token does not resolve or its user
            no longer exists.
    """
    user_id = get_session_store().resolve(token)
    if user_id is None:
        raise UnauthorizedError()

    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise UnauthorizedError()
    return OperationResult(
        HTTPStatus.OK,
        {'id': str(user.pk), 'email': user.email},
    )
