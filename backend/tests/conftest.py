"""Shared fixtures: in-memory store, pinned clock, recording notifier."""
from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from salon_booking.config import Settings
from salon_booking.database import create_session_factory
from salon_booking.dependencies import get_now
from salon_booking.main import create_app
from salon_booking.models import Base
from salon_booking.services.slots import BusinessHours


# Wednesday, 12:10
NOW = datetime(2030, 6, 5, 12, 10)
TODAY = NOW.date()
YESTERDAY = date(2030, 6, 4)
TOMORROW = date(2030, 6, 6)      # Thursday
SUNDAY = date(2030, 6, 9)
MONDAY = date(2030, 6, 10)

ADMIN = ("admin", "secret")


class RecordingNotifier:
    """Collects notifications instead of sending email."""

    def __init__(self):
        self.sent = []

    def notify(self, event, booking):
        self.sent.append((event, booking))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hours():
    return BusinessHours()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        admin_user="admin",
        admin_password="secret",
        mail_api_key=None,
        mail_from=None,
        static_dir=None,
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(settings, engine, notifier):
    app = create_app(settings, engine=engine, notifier=notifier)
    app.dependency_overrides[get_now] = lambda: NOW
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def booking_payload(day: date = MONDAY, time: str = "10:00", **overrides) -> dict:
    payload = {
        "nombre": "Ana",
        "apellido": "García",
        "telefono": "+54 11 5555-0000",
        "email": "ana@example.com",
        "date": day.isoformat(),
        "time": time,
    }
    payload.update(overrides)
    return payload
