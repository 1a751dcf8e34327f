"""
Pytest configuration and shared fixtures.
"""

import os

# Must be set before any app module reads settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./.pytest_salon.db")
os.environ.setdefault("NOTIFICATIONS_ENABLED", "false")

from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.models import Base, Service, Staff, StaffService, User, UserRole, WorkingHours
from app.services.booking.booking_engine import BookingEngine
from app.services.booking.booking_locks import BookingLockRegistry

MONDAY = "2026-10-19"
NEXT_MONDAY = "2026-10-26"
SUNDAY = "2026-10-18"


class RecordingNotifier:
    """Stands in for NotificationDispatcher and remembers every event."""

    def __init__(self):
        self.events = []

    def dispatch(self, appointment_id, event):
        self.events.append((appointment_id, event))
        return True


@pytest.fixture
def db_engine(tmp_path):
    """SQLite database file per test, shared by every thread in the test."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'salon.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def salon(db):
    """
    One client, two stylists and two services.

    Emma works Mondays 09:00-11:00, Alex works Mondays 09:00-13:00.
    Nobody works Sundays.
    """
    client = User(email="client@example.com", name="John Smith", role=UserRole.CLIENT.value)
    emma_user = User(email="emma@bellasalon.com", name="Emma Thompson", role=UserRole.STAFF.value)
    alex_user = User(email="alex@bellasalon.com", name="Alex Rivera", role=UserRole.STAFF.value)
    haircut = Service(name="Haircut & Style", description="Cut and style", duration=45, price=7500, category="hair")
    beard_trim = Service(name="Beard Trim", description="Trim and shape", duration=30, price=3000, category="hair")
    db.add_all([client, emma_user, alex_user, haircut, beard_trim])
    db.flush()

    emma = Staff(user_id=emma_user.id, title="Senior Hair Stylist", rating=480, review_count=124)
    alex = Staff(user_id=alex_user.id, title="Master Barber", rating=500, review_count=87)
    db.add_all([emma, alex])
    db.flush()

    db.add_all([
        StaffService(staff_id=emma.id, service_id=haircut.id),
        StaffService(staff_id=alex.id, service_id=haircut.id),
        StaffService(staff_id=alex.id, service_id=beard_trim.id),
        WorkingHours(staff_id=emma.id, day_of_week=1, start_time="09:00", end_time="11:00", is_available=True),
        WorkingHours(staff_id=alex.id, day_of_week=1, start_time="09:00", end_time="13:00", is_available=True),
    ])
    db.commit()

    return SimpleNamespace(
        client_id=client.id,
        emma_id=emma.id,
        alex_id=alex.id,
        haircut_id=haircut.id,
        beard_trim_id=beard_trim.id,
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def locks():
    return BookingLockRegistry()


@pytest.fixture
def booking_engine(db, notifier, locks):
    return BookingEngine(db, notifier=notifier, locks=locks, step_minutes=15)
