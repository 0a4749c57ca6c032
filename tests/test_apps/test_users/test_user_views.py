"""Tests for the users and sessions HTTP API."""

import base64
import json

import pytest


def _basic(email, password):
    credentials = base64.b64encode(f'{email}:{password}'.encode())
    return f'Basic {credentials.decode("ascii")}'


@pytest.mark.django_db
def test_register_connect_disconnect(client):
    """Test the full session lifecycle over HTTP."""
    registered = client.post(
        '/users',
        data=json.dumps({'email': 'bob@example.com', 'password': 'pw'}),
        content_type='application/json',
    )
    assert registered.status_code == 201
    assert registered.json()['email'] == 'bob@example.com'

    connected = client.get(
        '/connect',
        headers={'Authorization': _basic('bob@example.com', 'pw')},
    )
    assert connected.status_code == 200
    token = connected.json()['token']

    me = client.get('/users/me', headers={'X-Token': token})
    assert me.status_code == 200
    assert me.json() == registered.json()

    disconnected = client.get('/disconnect', headers={'X-Token': token})
    assert disconnected.status_code == 204

    assert client.get(
        '/users/me',
        headers={'X-Token': token},
    ).status_code == 401


@pytest.mark.django_db
def test_register_duplicate(client, user):
    """Test duplicate registration."""
    response = client.post(
        '/users',
        data=json.dumps({'email': user.email, 'password': 'pw'}),
        content_type='application/json',
    )

    assert response.status_code == 400
    assert response.json() == {'error': 'Already exist'}


@pytest.mark.django_db
def test_register_missing_password(client):
    """Test missing password."""
    response = client.post(
        '/users',
        data=json.dumps({'email': 'bob@example.com'}),
        content_type='application/json',
    )

    assert response.status_code == 400
    assert response.json() == {'error': 'Missing password'}


@pytest.mark.django_db
def test_connect_wrong_password(client, user):
    """Test rejected credentials."""
    response = client.get(
        '/connect',
        headers={'Authorization': _basic(user.email, 'nope')},
    )

    assert response.status_code == 401
    assert response.json() == {'error': 'Unauthorized'}


@pytest.mark.django_db
def test_disconnect_without_token(client):
    """Test disconnect needs a session."""
    response = client.get('/disconnect')

    assert response.status_code == 401


@pytest.mark.django_db
def test_me_without_token(client):
    """Test anonymous callers."""
    assert client.get('/users/me').status_code == 401
