import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from stockly.DB import get_session
from stockly.main import app
from stockly.models import User, table_registry
from stockly.security import get_password_hash


@pytest.fixture
def session():
    engine = create_engine(
        'sqlite:///:memory:',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    table_registry.metadata.create_all(engine)

    with Session(engine) as session:
        yield session

    table_registry.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def client(session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(session, name, email, password='secret'):
    user = User(name=name, email=email, password=get_password_hash(password))
    session.add(user)
    session.commit()
    session.refresh(user)
    user.clean_password = password
    return user


@pytest.fixture
def user(session):
    return make_user(session, 'Ana', 'ana@example.com')


@pytest.fixture
def other_user(session):
    return make_user(session, 'Bruno', 'bruno@example.com')


def login(client, user):
    response = client.post(
        '/api/auth/token',
        data={'username': user.email, 'password': user.clean_password},
    )
    return response.json()['access_token']


@pytest.fixture
def token(client, user):
    return login(client, user)


@pytest.fixture
def auth_headers(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def other_headers(client, other_user):
    return {'Authorization': f'Bearer {login(client, other_user)}'}
