"""Shared fixtures for files app tests."""

import base64
from io import BytesIO

import pytest
from PIL import Image

from server.apps.files.infrastructure.repository import FileRepository
from server.apps.files.infrastructure.sessions import get_session_store
from server.apps.files.infrastructure.storage import BlobStorage
from server.apps.files.logic.file_operations import FileManager
from server.apps.files.models import File, FileType


@pytest.fixture
def storage(blob_root):
    """Blob store rooted in the temporary directory.

    Returns:
        Connected BlobStorage instance.
    """
    blob_storage = BlobStorage(location=str(blob_root))
    blob_storage.connect()
    return blob_storage


@pytest.fixture
def manager(db, storage):
    """File manager wired to test collaborators.

    Returns:
        FileManager instance.
    """
    return FileManager(
        sessions=get_session_store(),
        storage=storage,
        repository=FileRepository(),
    )


@pytest.fixture
def sample_content():
    """Ten bytes of sample content.

    Returns:
        Raw bytes.
    """
    return b'0123456789'


@pytest.fixture
def sample_data(sample_content):
    """Base64 encoding of the sample content.

    Returns:
        Base64 string.
    """
    return base64.b64encode(sample_content).decode('ascii')


@pytest.fixture
def png_content():
    """PNG image 1000x500 pixels.

    Returns:
        Encoded PNG bytes.
    """
    output = BytesIO()
    Image.new('RGB', (1000, 500), color=(200, 30, 30)).save(
        output,
        format='PNG',
    )
    return output.getvalue()


@pytest.fixture
def folder(user):
    """Create a root folder owned by the test user.

    Returns:
        File instance of type folder.
    """
    return File.objects.create(
        user=user,
        name='documents',
        type=FileType.FOLDER,
    )


@pytest.fixture
def stored_file(user, storage, sample_content):
    """Create a private file record with its blob.

    Returns:
        File instance of type file.
    """
    blob_name = storage.write(sample_content)
    return File.objects.create(
        user=user,
        name='notes.txt',
        type=FileType.FILE,
        local_path=blob_name,
    )
