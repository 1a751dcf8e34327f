"""
Tests for availability listing, booking and status transitions.
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import (
    AppointmentNotFoundError,
    BookingLockTimeoutError,
    ClientNotFoundError,
    InvalidInputError,
    InvalidTransitionError,
    ServiceNotFoundError,
    SlotUnavailableError,
    StaffNotFoundError,
)
from app.models import Appointment, AppointmentStatus, UnavailableDate, WorkingHours
from app.services.appointment.booking_repository import BookingRepository
from app.services.booking.booking_engine import BookingEngine
from app.services.notification.notification_dispatcher import NotificationDispatcher, NotificationEvent
from conftest import MONDAY, NEXT_MONDAY, SUNDAY


class TestGetAvailableSlots:
    """Listing free start times."""

    def test_working_window_with_45_minute_service(self, booking_engine, salon):
        slots = booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY)

        assert slots == ["09:00", "09:15", "09:30", "09:45", "10:00", "10:15"]

    def test_day_off_returns_empty_list(self, booking_engine, salon):
        assert booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, SUNDAY) == []

    def test_disabled_hours_count_as_day_off(self, booking_engine, db, salon):
        db.query(WorkingHours).filter_by(staff_id=salon.emma_id).update({"is_available": False})
        db.commit()

        assert booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY) == []

    def test_unavailable_date_returns_empty_list(self, booking_engine, db, salon):
        db.add(UnavailableDate(staff_id=salon.emma_id, date=MONDAY, reason="Vacation"))
        db.commit()

        assert booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY) == []
        assert booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, NEXT_MONDAY) != []

    def test_overlapping_split_shifts_are_deduplicated(self, booking_engine, db, salon):
        db.add(WorkingHours(staff_id=salon.emma_id, day_of_week=1, start_time="10:00", end_time="11:30"))
        db.commit()

        slots = booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY)

        assert slots == sorted(set(slots))
        assert slots[-1] == "10:45"

    def test_booked_interval_is_excluded(self, booking_engine, salon):
        booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "10:00")

        slots = booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY)

        assert slots == ["09:00", "09:15"]

    def test_unknown_staff(self, booking_engine, salon):
        with pytest.raises(StaffNotFoundError):
            booking_engine.get_available_slots(999, salon.haircut_id, MONDAY)

    def test_unknown_service(self, booking_engine, salon):
        with pytest.raises(ServiceNotFoundError):
            booking_engine.get_available_slots(salon.emma_id, 999, MONDAY)

    def test_malformed_date(self, booking_engine, salon):
        with pytest.raises(InvalidInputError):
            booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, "2026-13-01")

    def test_zero_step_is_rejected(self, db, notifier, locks, salon):
        engine = BookingEngine(db, notifier=notifier, locks=locks, step_minutes=0)

        with pytest.raises(InvalidInputError):
            engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY)

    def test_unset_step_uses_configured_default(self, db, notifier, locks, salon):
        engine = BookingEngine(db, notifier=notifier, locks=locks)

        assert engine.step_minutes == 15


class TestBook:
    """Booking a slot."""

    def test_book_listed_slot(self, booking_engine, notifier, salon):
        slots = booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY)

        appointment = booking_engine.book(
            salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, slots[0], notes="First visit"
        )

        assert appointment.id is not None
        assert appointment.start_time == "09:00"
        assert appointment.end_time == "09:45"
        assert appointment.status == AppointmentStatus.CONFIRMED.value
        assert appointment.notes == "First visit"
        assert notifier.events == [(appointment.id, NotificationEvent.BOOKED)]

    def test_every_listed_slot_is_bookable(self, booking_engine, salon):
        for start in booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY):
            appointment = booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, start)
            booking_engine.cancel(appointment.id)

    def test_same_slot_twice_is_unavailable(self, booking_engine, salon):
        booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "10:00")

        with pytest.raises(SlotUnavailableError):
            booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "10:00")

    def test_overlapping_slot_is_unavailable(self, booking_engine, salon):
        booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "10:00")

        with pytest.raises(SlotUnavailableError):
            booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:30")

    def test_back_to_back_bookings(self, booking_engine, salon):
        booking_engine.book(salon.client_id, salon.alex_id, salon.haircut_id, MONDAY, "10:00")

        assert "10:45" in booking_engine.get_available_slots(salon.alex_id, salon.haircut_id, MONDAY)
        assert "09:15" in booking_engine.get_available_slots(salon.alex_id, salon.haircut_id, MONDAY)

        after = booking_engine.book(salon.client_id, salon.alex_id, salon.haircut_id, MONDAY, "10:45")
        before = booking_engine.book(salon.client_id, salon.alex_id, salon.beard_trim_id, MONDAY, "09:30")

        assert (after.start_time, after.end_time) == ("10:45", "11:30")
        assert (before.start_time, before.end_time) == ("09:30", "10:00")

    def test_slot_running_past_working_hours(self, booking_engine, salon):
        with pytest.raises(SlotUnavailableError):
            booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "10:30")

    def test_slot_off_the_grid(self, booking_engine, salon):
        with pytest.raises(SlotUnavailableError):
            booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:05")

    def test_day_off_is_unavailable(self, booking_engine, salon):
        with pytest.raises(SlotUnavailableError):
            booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, SUNDAY, "09:00")

    def test_unavailable_date_is_unavailable(self, booking_engine, db, salon):
        db.add(UnavailableDate(staff_id=salon.emma_id, date=MONDAY))
        db.commit()

        with pytest.raises(SlotUnavailableError):
            booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:00")

    def test_different_staff_same_time(self, booking_engine, salon):
        booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "10:00")
        booking_engine.book(salon.client_id, salon.alex_id, salon.haircut_id, MONDAY, "10:00")

    def test_failed_booking_writes_nothing(self, booking_engine, db, notifier, salon):
        with pytest.raises(SlotUnavailableError):
            booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "10:30")

        assert db.query(Appointment).count() == 0
        assert notifier.events == []

    @pytest.mark.parametrize("field,error", [
        ("client_id", ClientNotFoundError),
        ("staff_id", StaffNotFoundError),
        ("service_id", ServiceNotFoundError),
    ])
    def test_unknown_references(self, booking_engine, salon, field, error):
        kwargs = {"client_id": salon.client_id, "staff_id": salon.emma_id, "service_id": salon.haircut_id}
        kwargs[field] = 999

        with pytest.raises(error):
            booking_engine.book(date=MONDAY, start_time="09:00", **kwargs)

    def test_malformed_start_time(self, booking_engine, salon):
        with pytest.raises(InvalidInputError):
            booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "9am")

    def test_lock_timeout_books_nothing(self, db, notifier, locks, salon):
        engine = BookingEngine(db, notifier=notifier, locks=locks, lock_timeout=0.05)

        with locks.hold(salon.emma_id, MONDAY):
            with pytest.raises(BookingLockTimeoutError):
                engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:00")

        assert db.query(Appointment).count() == 0
        assert locks.active_keys() == 0

    def test_zero_lock_timeout_does_not_wait(self, db, notifier, locks, salon):
        engine = BookingEngine(db, notifier=notifier, locks=locks, lock_timeout=0)

        assert engine.lock_timeout == 0
        with locks.hold(salon.emma_id, MONDAY):
            with pytest.raises(BookingLockTimeoutError):
                engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:00")

    def test_notification_failure_does_not_undo_booking(self, db, locks, salon):
        from app.tasks.notification_tasks import send_appointment_notification

        engine = BookingEngine(db, notifier=NotificationDispatcher(enabled=True), locks=locks)

        with patch.object(send_appointment_notification, "delay", side_effect=ConnectionError("broker down")):
            appointment = engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:00")

        assert db.query(Appointment).filter_by(id=appointment.id).one().status == "confirmed"

    def test_historical_appointment_keeps_its_duration(self, booking_engine, db, salon):
        appointment = booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:00")
        from app.models import Service

        db.query(Service).filter_by(id=salon.haircut_id).update({"duration": 60})
        db.commit()
        db.refresh(appointment)

        assert appointment.end_time == "09:45"
        assert "09:45" in booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY)


class TestStatusTransitions:
    """Appointment state machine."""

    @pytest.fixture
    def appointment(self, booking_engine, salon):
        return booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "10:00")

    def test_complete(self, booking_engine, notifier, appointment):
        updated = booking_engine.update_status(appointment.id, "completed")

        assert updated.status == "completed"
        assert notifier.events[-1] == (appointment.id, NotificationEvent.COMPLETED)

    def test_cancel_frees_the_slot(self, booking_engine, notifier, salon, appointment):
        assert "10:00" not in booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY)

        cancelled = booking_engine.cancel(appointment.id)

        assert cancelled.status == "cancelled"
        assert cancelled.cancelled_at is not None
        assert notifier.events[-1] == (appointment.id, NotificationEvent.CANCELLED)
        assert "10:00" in booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY)

    def test_cancelled_slot_can_be_rebooked(self, booking_engine, salon, appointment):
        booking_engine.cancel(appointment.id)

        rebooked = booking_engine.book(salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "10:00")

        assert rebooked.id != appointment.id

    def test_completed_appointment_keeps_blocking(self, booking_engine, salon, appointment):
        booking_engine.update_status(appointment.id, AppointmentStatus.COMPLETED)

        assert "10:00" not in booking_engine.get_available_slots(salon.emma_id, salon.haircut_id, MONDAY)

    @pytest.mark.parametrize("terminal", ["completed", "cancelled"])
    @pytest.mark.parametrize("target", ["confirmed", "completed", "cancelled"])
    def test_terminal_states_are_final(self, booking_engine, appointment, terminal, target):
        booking_engine.update_status(appointment.id, terminal)

        with pytest.raises(InvalidTransitionError):
            booking_engine.update_status(appointment.id, target)

    def test_confirmed_to_confirmed_is_rejected(self, booking_engine, appointment):
        with pytest.raises(InvalidTransitionError):
            booking_engine.update_status(appointment.id, "confirmed")

    def test_unknown_status(self, booking_engine, appointment):
        with pytest.raises(InvalidInputError) as exc_info:
            booking_engine.update_status(appointment.id, "no_show")

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_missing_appointment(self, booking_engine, salon):
        with pytest.raises(AppointmentNotFoundError):
            booking_engine.cancel(12345)


class TestLiveSlotIndex:
    """Database-level guard against duplicate live appointments."""

    def test_duplicate_live_start_rejected(self, db, salon):
        BookingRepository.create_appointment(db, salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:00", "09:45")

        with pytest.raises(IntegrityError):
            BookingRepository.create_appointment(db, salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:00", "09:45")
        db.rollback()

    def test_delete_appointment(self, db, salon):
        appointment = BookingRepository.create_appointment(db, salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:00", "09:45")
        appointment_id = appointment.id

        BookingRepository.delete_appointment(db, appointment)

        assert BookingRepository.get_appointment(db, appointment_id) is None

    def test_cancelled_rows_do_not_count(self, db, salon):
        first = BookingRepository.create_appointment(db, salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:00", "09:45")
        BookingRepository.update_status(db, first, AppointmentStatus.CANCELLED)

        second = BookingRepository.create_appointment(db, salon.client_id, salon.emma_id, salon.haircut_id, MONDAY, "09:00", "09:45")

        assert second.status == "confirmed"
