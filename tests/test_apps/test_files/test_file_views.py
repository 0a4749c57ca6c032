"""Tests for the file records HTTP API."""

import base64
import json
import uuid
from unittest import mock

import pytest

from server.apps.files.models import File, FileType


def _upload(client, token, **body):
    return client.post(
        '/files',
        data=json.dumps(body),
        content_type='application/json',
        headers={'X-Token': token},
    )


@pytest.mark.django_db
class TestFilesCollection:
    """Tests for POST and GET /files."""

    def test_upload_file(self, client, token, sample_data, sample_content):
        """Test upload then download over HTTP."""
        response = _upload(
            client,
            token,
            name='notes.txt',
            type='file',
            data=sample_data,
        )

        assert response.status_code == 201
        record = response.json()
        assert record['name'] == 'notes.txt'
        assert record['parentId'] == 0

        download = client.get(
            f'/files/{record["id"]}/data',
            headers={'X-Token': token},
        )
        assert download.status_code == 200
        assert download['Content-Type'] == 'text/plain'
        assert download.content == sample_content

    def test_upload_with_bearer_token(self, client, token):
        """Test Authorization header fallback."""
        response = client.post(
            '/files',
            data=json.dumps({'name': 'docs', 'type': 'folder'}),
            content_type='application/json',
            headers={'Authorization': f'Bearer {token}'},
        )

        assert response.status_code == 201

    def test_index_with_token_header(self, client, token, folder):
        """Test the bare token header older clients send."""
        response = client.get('/files', headers={'token': token})

        assert response.status_code == 200
        assert [record['id'] for record in response.json()] == [
            str(folder.id),
        ]

    def test_upload_without_token(self, client):
        """Test missing token."""
        response = client.post(
            '/files',
            data=json.dumps({'name': 'docs', 'type': 'folder'}),
            content_type='application/json',
        )

        assert response.status_code == 401
        assert response.json() == {'error': 'Unauthorized'}

    def test_upload_malformed_body(self, client, token):
        """Test unparsable JSON reports the first missing field."""
        response = client.post(
            '/files',
            data='{not json',
            content_type='application/json',
            headers={'X-Token': token},
        )

        assert response.status_code == 400
        assert response.json() == {'error': 'Missing name'}

    def test_upload_parent_not_folder(self, client, token, stored_file):
        """Test validation error body."""
        response = _upload(
            client,
            token,
            name='x',
            type='folder',
            parentId=str(stored_file.id),
        )

        assert response.status_code == 400
        assert response.json() == {'error': 'Parent is not a folder'}

    def test_index(self, client, token, folder, stored_file):
        """Test root listing."""
        response = client.get('/files', headers={'X-Token': token})

        assert response.status_code == 200
        assert {record['id'] for record in response.json()} == {
            str(folder.id),
            str(stored_file.id),
        }

    def test_index_of_folder(self, client, token, user, folder):
        """Test listing by parentId."""
        inner = File.objects.create(
            user=user,
            name='inner',
            type=FileType.FOLDER,
            parent=folder,
        )

        response = client.get(
            '/files',
            {'parentId': str(folder.id), 'page': '0'},
            headers={'X-Token': token},
        )

        assert response.json() == [inner.to_dict()]

    def test_index_invalid_page(self, client, token):
        """Test malformed page parameter."""
        response = client.get(
            '/files',
            {'page': 'abc'},
            headers={'X-Token': token},
        )

        assert response.status_code == 400
        assert response.json() == {'error': 'Invalid page'}

    def test_method_not_allowed(self, client, token):
        """Test unsupported methods."""
        response = client.delete('/files', headers={'X-Token': token})

        assert response.status_code == 405


@pytest.mark.django_db
class TestFileDetail:
    """Tests for GET /files/<id>."""

    def test_show(self, client, token, stored_file):
        """Test owner sees the record."""
        response = client.get(
            f'/files/{stored_file.id}',
            headers={'X-Token': token},
        )

        assert response.status_code == 200
        assert response.json() == stored_file.to_dict()

    def test_show_other_user(self, client, other_token, stored_file):
        """Test foreign records look missing."""
        response = client.get(
            f'/files/{stored_file.id}',
            headers={'X-Token': other_token},
        )

        assert response.status_code == 404
        assert response.json() == {'error': 'Not found'}

    def test_show_malformed_id(self, client, token):
        """Test malformed id."""
        response = client.get('/files/abc', headers={'X-Token': token})

        assert response.status_code == 400


@pytest.mark.django_db
class TestVisibility:
    """Tests for PUT publish and unpublish."""

    def test_publish_then_public_download(
        self,
        client,
        token,
        stored_file,
        sample_content,
    ):
        """Test published content is served without a token."""
        hidden = client.get(f'/files/{stored_file.id}/data')
        assert hidden.status_code == 404

        response = client.put(
            f'/files/{stored_file.id}/publish',
            headers={'X-Token': token},
        )
        assert response.status_code == 200
        assert response.json()['isPublic'] is True

        public = client.get(f'/files/{stored_file.id}/data')
        assert public.status_code == 200
        assert public.content == sample_content

    def test_unpublish(self, client, token, stored_file):
        """Test unpublish hides content again."""
        File.objects.filter(id=stored_file.id).update(is_public=True)

        response = client.put(
            f'/files/{stored_file.id}/unpublish',
            headers={'X-Token': token},
        )

        assert response.json()['isPublic'] is False
        assert client.get(f'/files/{stored_file.id}/data').status_code == 404

    def test_publish_unknown(self, client, token):
        """Test unknown id."""
        response = client.put(
            f'/files/{uuid.uuid4()}/publish',
            headers={'X-Token': token},
        )

        assert response.status_code == 404

    def test_publish_requires_put(self, client, token, stored_file):
        """Test GET is not allowed on publish."""
        response = client.get(
            f'/files/{stored_file.id}/publish',
            headers={'X-Token': token},
        )

        assert response.status_code == 405


@pytest.mark.django_db
class TestFileData:
    """Tests for GET /files/<id>/data."""

    def test_folder_has_no_content(self, client, token, folder):
        """Test folder download."""
        response = client.get(
            f'/files/{folder.id}/data',
            headers={'X-Token': token},
        )

        assert response.status_code == 400
        assert response.json() == {'error': "A folder doesn't have content"}

    def test_invalid_size(self, client, token, stored_file):
        """Test unsupported thumbnail size."""
        response = client.get(
            f'/files/{stored_file.id}/data',
            {'size': '42'},
            headers={'X-Token': token},
        )

        assert response.status_code == 400
        assert response.json() == {'error': 'Invalid size'}

    def test_missing_blob(self, client, token, stored_file, storage):
        """Test lost content is reported as a server error."""
        storage.delete(stored_file.local_path)

        response = client.get(
            f'/files/{stored_file.id}/data',
            headers={'X-Token': token},
        )

        assert response.status_code == 500
        assert response.json() == {'error': 'Internal Server Error'}

    def test_image_content_type(self, client, token, png_content):
        """Test MIME type follows the name."""
        created = _upload(
            client,
            token,
            name='photo.png',
            type='image',
            data=base64.b64encode(png_content).decode('ascii'),
        ).json()

        response = client.get(
            f'/files/{created["id"]}/data',
            headers={'X-Token': token},
        )

        assert response['Content-Type'] == 'image/png'
        assert response.content == png_content


@pytest.mark.django_db
def test_unexpected_view_error(client, token):
    """Test unexpected failures render a generic JSON error."""
    with mock.patch(
        'server.apps.files.views.get_file_manager',
        side_effect=RuntimeError('boom'),
    ):
        response = client.get('/files', headers={'X-Token': token})

    assert response.status_code == 500
    assert response.json() == {'error': 'Internal Server Error'}
