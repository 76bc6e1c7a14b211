"""Pytest fixtures configuring an isolated database per test.

Each test gets a freshly created schema on an in-memory SQLite database.
Workflows commit for real (approval relies on a foreign key checked at
commit), so isolation comes from dropping the schema rather than from a
rolled-back outer transaction.
"""

from __future__ import annotations

import os

import pytest

from donorlink.core.config import TestingConfig
from donorlink.core.extensions import db as _db  # Flask-SQLAlchemy instance
from donorlink.core.mail import get_notifier
from donorlink.factory import create_app  # application factory under test


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def db(app):
    """Create all tables for one test and drop them afterwards.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application, inside an
        application context.
    """
    with app.app_context():
        _db.create_all()
        try:
            yield _db
        finally:
            _db.session.remove()
            _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the Flask-scoped session shared with the units of work."""
    return db.session


@pytest.fixture()
def client(app, db):
    """Flask test client; requests reuse the test's application context."""
    return app.test_client()


@pytest.fixture()
def outbox(app, db):
    """In-memory notifier of the testing app, emptied for each test."""
    notifier = get_notifier()
    notifier.clear()
    yield notifier
    notifier.clear()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def freeze_time():
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None):
        return _freeze_time(target or "2024-01-01")

    return _factory


# -- Hook up Factory Boy to the Flask-SQLAlchemy session -------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when the test uses the database."""
    from tests.factories import SQLAlchemySession

    if "db" not in request.fixturenames:
        SQLAlchemySession.set(None)
        yield
        return
    SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
