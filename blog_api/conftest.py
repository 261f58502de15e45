# blog_api/conftest.py
"""Shared pytest fixtures: in-memory MongoDB, a mocked Storage bucket and token helpers."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import mongomock
import pytest

from blog_api import create_app
from blog_api.api.posts.services import PostService
from blog_api.api.users.services import UserService
from blog_api.core.security import create_access_token
from blog_api.models.user import User

SEED_USERS = [
    User(user_id='u1', name='Alice', email='alice@example.com'),
    User(user_id='u2', name='Bob', email='bob@example.com'),
    User(user_id='admin1', name='Root', email='root@example.com', role='admin'),
]


class TickingClock:
    """Returns a strictly increasing UTC timestamp on every call."""

    def __init__(self, start=datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def db():
    database = mongomock.MongoClient()['blog_test']
    for user in SEED_USERS:
        database['users'].insert_one(user.to_document())
    return database


@pytest.fixture
def post_service(db):
    return PostService(db=db, user_service=UserService(db=db), clock=TickingClock())


@pytest.fixture
def bucket():
    storage_bucket = MagicMock()
    storage_bucket.blob.return_value.public_url = 'https://storage.example.com/blog-images/image.png'
    return storage_bucket


@pytest.fixture
def app(db, bucket):
    flask_app = create_app('testing', db=db, bucket=bucket)
    flask_app.services['posts'].clock = TickingClock()
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    """Factory: Authorization headers for a user id and role."""
    def make_headers(user_id, role='user'):
        with app.app_context():
            token = create_access_token(user_id, role=role)
        return {'Authorization': f'Bearer {token}'}
    return make_headers
