"""Tests for generate_thumbnails management command."""

from io import StringIO

import pytest
from django.core.management import call_command

from server.apps.files.models import File, FileType


@pytest.mark.django_db
def test_generate_thumbnails(user, storage, png_content, stored_file):
    """Test thumbnails are rendered for images only."""
    image = File.objects.create(
        user=user,
        name='photo.png',
        type=FileType.IMAGE,
        local_path=storage.write(png_content),
    )
    out = StringIO()

    call_command('generate_thumbnails', stdout=out)

    assert 'Generated 3 thumbnails, 0 failed' in out.getvalue()
    for width in (500, 250, 100):
        assert storage.exists(f'{image.local_path}_{width}')
    assert not storage.exists(f'{stored_file.local_path}_100')


@pytest.mark.django_db
def test_generate_thumbnails_reports_failures(user, storage):
    """Test broken images are counted as failures."""
    File.objects.create(
        user=user,
        name='broken.png',
        type=FileType.IMAGE,
        local_path=storage.write(b'not a png'),
    )
    out = StringIO()
    err = StringIO()

    call_command('generate_thumbnails', stdout=out, stderr=err)

    assert 'Generated 0 thumbnails, 1 failed' in out.getvalue()
    assert 'Failed to process' in err.getvalue()
