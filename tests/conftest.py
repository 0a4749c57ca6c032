"""Shared fixtures for the whole test suite."""

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import caches

from server.apps.files.infrastructure.sessions import get_session_store
from server.apps.files.logic.file_operations import get_file_manager

User = get_user_model()


def _reset_singletons() -> None:
    get_file_manager.cache_clear()
    get_session_store.cache_clear()
    caches['sessions'].clear()


@pytest.fixture(autouse=True)
def blob_root(settings, tmp_path):
    """Point the blob store at a temporary directory.

    Also resets the process-wide file manager and session store so
    each test sees its own settings.

    Yields:
        Path of the blob storage root.
    """
    root = tmp_path / 'blobs'
    settings.FOLDER_PATH = str(root)
    _reset_singletons()
    yield root
    _reset_singletons()


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='test@example.com',
        email='test@example.com',
        password='testpass123',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='other@example.com',
        email='other@example.com',
        password='testpass123',
    )


@pytest.fixture
def token(user):
    """Open a session for the test user.

    Returns:
        Session token.
    """
    return get_session_store().create(user.pk)


@pytest.fixture
def other_token(other_user):
    """Open a session for the second user.

    Returns:
        Session token.
    """
    return get_session_store().create(other_user.pk)
