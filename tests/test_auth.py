from datetime import datetime, timedelta, timezone
from http import HTTPStatus

from jwt import decode, encode

from stockly.security import settings


def test_register_user(client):
    response = client.post(
        '/api/auth/register',
        json={'name': 'Carla', 'email': 'carla@example.com', 'password': 'pw'},
    )

    assert response.status_code == HTTPStatus.CREATED
    body = response.json()
    assert body['name'] == 'Carla'
    assert body['email'] == 'carla@example.com'
    assert 'password' not in body


def test_register_duplicate_email(client, user):
    response = client.post(
        '/api/auth/register',
        json={'name': 'Other', 'email': user.email, 'password': 'pw'},
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json() == {'detail': 'Email already registered'}


def test_login_returns_bearer_token(client, user):
    response = client.post(
        '/api/auth/token',
        data={'username': user.email, 'password': user.clean_password},
    )

    assert response.status_code == HTTPStatus.OK
    token = response.json()
    assert token['token_type'] == 'bearer'
    payload = decode(
        token['access_token'],
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
    )
    assert payload['sub'] == str(user.id)
    assert 'exp' in payload


def test_login_wrong_password(client, user):
    response = client.post(
        '/api/auth/token',
        data={'username': user.email, 'password': 'wrong'},
    )

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.json() == {'detail': 'Incorrect email or password'}


def test_login_unknown_email(client):
    response = client.post(
        '/api/auth/token',
        data={'username': 'nobody@example.com', 'password': 'secret'},
    )

    assert response.status_code == HTTPStatus.UNAUTHORIZED


def test_session_returns_current_user(client, user, auth_headers):
    response = client.get('/api/auth/session', headers=auth_headers)

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {
        'id': user.id,
        'name': user.name,
        'email': user.email,
    }


def test_session_without_token(client):
    response = client.get('/api/auth/session')

    assert response.status_code == HTTPStatus.UNAUTHORIZED


def test_session_with_garbage_token(client):
    response = client.get(
        '/api/auth/session', headers={'Authorization': 'Bearer not-a-jwt'}
    )

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.headers['WWW-Authenticate'] == 'Bearer'


def test_session_with_expired_token(client, user):
    expired = encode(
        {
            'sub': str(user.id),
            'exp': datetime.now(timezone.utc) - timedelta(minutes=1),
        },
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )

    response = client.get(
        '/api/auth/session', headers={'Authorization': f'Bearer {expired}'}
    )

    assert response.status_code == HTTPStatus.UNAUTHORIZED


def test_session_for_deleted_user(client, session, user, auth_headers):
    session.delete(user)
    session.commit()

    response = client.get('/api/auth/session', headers=auth_headers)

    assert response.status_code == HTTPStatus.UNAUTHORIZED


def test_refresh_token(client, auth_headers):
    response = client.post('/api/auth/refresh_token', headers=auth_headers)

    assert response.status_code == HTTPStatus.OK
    new_token = response.json()['access_token']
    check = client.get(
        '/api/auth/session', headers={'Authorization': f'Bearer {new_token}'}
    )
    assert check.status_code == HTTPStatus.OK
