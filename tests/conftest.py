"""
conftest.py
-----------
Shared pytest fixtures for the Time Capsule tests.

Provides fixtures for:
- Storage backends (in-memory and SQL), each test gets a fresh store
- Flask apps and test clients for the HTTP API
- Small record factories
"""
from datetime import datetime

import pytest

from app import create_app
from app.config import TestingConfig
from app.extensions import db
from storage import MemStorage


class SqlTestingConfig(TestingConfig):
    STORAGE_BACKEND = 'sql'
    SEED_DEMO_DATA = False


class AuthRequiredConfig(TestingConfig):
    AUTH_REQUIRED = True


DELIVERY_DATE = datetime(2030, 1, 1, 9, 0)


# ----- Storage Fixtures -----

@pytest.fixture(params=['memory', 'sql'])
def storage_factory(request):
    """Callable building an empty store of the parametrized backend.

    Keyword arguments are passed through as delete/conflict policies.
    """
    if request.param == 'memory':
        yield MemStorage
        return

    from storage.sql import SqlStorage
    app = create_app(SqlTestingConfig)
    with app.app_context():
        yield SqlStorage
        db.session.remove()
        db.drop_all()


@pytest.fixture
def storage(storage_factory):
    """Empty store with default policies."""
    return storage_factory()


@pytest.fixture
def user(storage):
    return storage.create_user(username='demo', password='secret')


@pytest.fixture
def make_entry(storage, user):
    """Factory creating entries owned by the default user."""
    def _make(title='Entry', type='text', **fields):
        return storage.create_entry(user.id, title, type, **fields)
    return _make


@pytest.fixture
def contact(storage, user):
    return storage.create_contact(user.id, 'Mom', phone_number='555-1234')


@pytest.fixture
def make_schedule(storage, contact):
    """Factory scheduling an entry for delivery to the default contact."""
    def _make(entry_id, contact_id=None, **fields):
        return storage.create_schedule(
            entry_id=entry_id,
            contact_id=contact_id if contact_id is not None else contact.id,
            delivery_date=fields.pop('delivery_date', DELIVERY_DATE),
            **fields
        )
    return _make


# ----- API Fixtures -----

@pytest.fixture
def app():
    """App on the seeded in-memory store, running as the demo user."""
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sql_app():
    class SeededSqlConfig(SqlTestingConfig):
        SEED_DEMO_DATA = True

    app = create_app(SeededSqlConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def auth_client():
    """Client for an app that rejects requests without a token."""
    return create_app(AuthRequiredConfig).test_client()
