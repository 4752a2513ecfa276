"""
Pytest fixtures for the boutique backend tests.

Provides an in-memory SQLite app with test client, and a PointOfSale engine
over an in-memory key-value store driven by a controllable clock.
"""

from datetime import datetime, timedelta
from itertools import count

import pytest

from boutique import create_app
from boutique.extensions import db
from boutique.models import KeyValueRecord
from boutique.services import reset_pos
from boutique.services.pos_service import PointOfSale
from boutique.services.storage_service import MemoryKeyValueStore


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def sequential_ids(prefix: str = "id"):
    counter = count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SEED_CATALOG_ON_EMPTY': False,
        'DEFAULT_NOTIFICATION_EMAIL': '',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Empty kv_records and a fresh engine for each test."""
    with app.app_context():
        db.session.query(KeyValueRecord).delete()
        db.session.commit()
        reset_pos()

        yield db.session

        db.session.rollback()
        reset_pos()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 10, 14, 15, 30))


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def pos(store, clock):
    """Engine with an empty catalog, no notification email and fixed time."""
    return PointOfSale(
        store,
        seed_on_empty=False,
        default_notification_email="",
        clock=clock,
        id_factory=sequential_ids(),
    )


@pytest.fixture
def category(pos):
    return pos.add_category("Boissons", "cup-soda").unwrap()


@pytest.fixture
def product(pos, category):
    """Product from the sale scenarios: 12 in stock, sells at 100, costs 60."""
    return pos.add_product(
        name="Jus de fruit",
        category_id=category.id,
        stock=12,
        sale_price=100,
        purchase_price=60,
    ).unwrap()


def messages_since(pos, before: int) -> list:
    """Notifications emitted after the log had `before` entries, oldest first."""
    notifications = pos.list_notifications()
    return list(reversed(notifications[: len(notifications) - before]))
