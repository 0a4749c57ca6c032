"""Tests for metadata and input parsing utilities."""

import uuid

import pytest

from server.apps.files.exceptions import RequestValidationError
from server.apps.files.infrastructure.metadata import (
    decode_content,
    detect_mime_type,
    parse_identifier,
    parse_page,
    parse_parent_id,
)


@pytest.mark.parametrize(('filename', 'expected'), [
    ('photo.png', 'image/png'),
    ('photo.PNG', 'image/png'),
    ('report.pdf', 'application/pdf'),
    ('notes.txt', 'text/plain'),
    ('archive', 'application/octet-stream'),
    ('data.unknownext', 'application/octet-stream'),
])
def test_detect_mime_type(filename, expected):
    """Test MIME type detection from the name."""
    assert detect_mime_type(filename) == expected


def test_decode_content():
    """Test base64 decoding."""
    assert decode_content('aGVsbG8=') == b'hello'


def test_decode_content_ignores_whitespace():
    """Test line-wrapped payloads."""
    assert decode_content('aGVs\nbG8=\n') == b'hello'


@pytest.mark.parametrize('data', ['not base64!', 'aGVsbG8', 42, None])
def test_decode_content_invalid(data):
    """Test malformed payloads are rejected."""
    with pytest.raises(RequestValidationError) as exc_info:
        decode_content(data)

    assert exc_info.value.message == 'Invalid data'


def test_parse_identifier():
    """Test identifier parsing."""
    identifier = uuid.uuid4()

    assert parse_identifier(str(identifier), 'Invalid id') == identifier
    assert parse_identifier(identifier, 'Invalid id') == identifier


@pytest.mark.parametrize('raw_id', ['abc', '', 42, None, ['x']])
def test_parse_identifier_invalid(raw_id):
    """Test malformed identifiers carry the given message."""
    with pytest.raises(RequestValidationError) as exc_info:
        parse_identifier(raw_id, 'Invalid id')

    assert exc_info.value.message == 'Invalid id'


@pytest.mark.parametrize('raw_parent_id', [0, '0', None])
def test_parse_parent_id_root(raw_parent_id):
    """Test root sentinels."""
    assert parse_parent_id(raw_parent_id, 'Parent not found') is None


def test_parse_parent_id_folder():
    """Test folder ids are parsed."""
    identifier = uuid.uuid4()

    assert parse_parent_id(str(identifier), 'Parent not found') == identifier


@pytest.mark.parametrize('raw_parent_id', [False, 1, 'folder'])
def test_parse_parent_id_invalid(raw_parent_id):
    """Test values that are neither root nor an id."""
    with pytest.raises(RequestValidationError) as exc_info:
        parse_parent_id(raw_parent_id, 'Parent not found')

    assert exc_info.value.message == 'Parent not found'


@pytest.mark.parametrize(('raw_page', 'expected'), [
    (None, 0),
    ('0', 0),
    ('3', 3),
    (2, 2),
])
def test_parse_page(raw_page, expected):
    """Test page parsing."""
    assert parse_page(raw_page) == expected


@pytest.mark.parametrize('raw_page', ['-1', 'x', '1.5', True])
def test_parse_page_invalid(raw_page):
    """Test malformed pages."""
    with pytest.raises(RequestValidationError) as exc_info:
        parse_page(raw_page)

    assert exc_info.value.message == 'Invalid page'
