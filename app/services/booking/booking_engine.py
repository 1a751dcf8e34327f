# ===== app/services/booking/booking_engine.py =====
"""
Availability and booking engine.

Answers "which start times are free for this staff member, service and
date" and books one of them with at most one winner per slot. Listing and
booking share the same day snapshot loader and the same conflict check, so
they never disagree about what is free.
"""
import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config.settings import get_settings
from app.core.exceptions import (
    AppointmentNotFoundError,
    ClientNotFoundError,
    InvalidInputError,
    InvalidTransitionError,
    ServiceNotFoundError,
    SlotUnavailableError,
    StaffNotFoundError,
)
from app.models.appointment import Appointment, AppointmentStatus
from app.models.availability import UnavailableDate, WorkingHours
from app.models.service import Service
from app.services.appointment.booking_repository import BookingRepository
from app.services.availability.availability_repository import AvailabilityRepository
from app.services.availability.conflict_checker import SlotCandidate, is_blocked
from app.services.availability.slot_generator import generate_slots
from app.services.booking.booking_locks import BookingLockRegistry, booking_locks
from app.services.catalog.catalog_repository import CatalogRepository
from app.services.notification.notification_dispatcher import NotificationDispatcher, NotificationEvent
from app.utils.time_utils import day_of_week, format_time, parse_date, parse_time

logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.CONFIRMED: frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}

STATUS_EVENTS = {
    AppointmentStatus.CANCELLED: NotificationEvent.CANCELLED,
    AppointmentStatus.COMPLETED: NotificationEvent.COMPLETED,
}


@dataclass
class DaySchedule:
    """Read snapshot of one staff member's day"""
    date: str
    working_hours: List[WorkingHours]
    unavailable_dates: List[UnavailableDate]
    appointments: List[Appointment]


class BookingEngine:
    """Composes slot generation, conflict checking and appointment persistence"""

    def __init__(
            self,
            db: Session,
            notifier: Optional[NotificationDispatcher] = None,
            locks: Optional[BookingLockRegistry] = None,
            step_minutes: Optional[int] = None,
            lock_timeout: Optional[float] = None
    ):
        settings = get_settings()
        self.db = db
        self.notifier = notifier or NotificationDispatcher()
        self.locks = locks or booking_locks
        self.step_minutes = step_minutes if step_minutes is not None else settings.SLOT_STEP_MINUTES
        self.lock_timeout = lock_timeout if lock_timeout is not None else settings.BOOKING_LOCK_TIMEOUT_SECONDS

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def get_available_slots(self, staff_id: int, service_id: int, date: str) -> List[str]:
        """Free start times ("HH:MM", ascending, no duplicates) for the service on that date"""
        parse_date(date)
        service = self._require_service(service_id)
        self._require_staff(staff_id)

        day = self._load_day(staff_id, date)
        free = self._free_start_times(day, service.duration)

        logger.debug(f"Staff {staff_id} has {len(free)} free slots for service {service_id} on {date}")
        return [format_time(start) for start in free]

    def _load_day(self, staff_id: int, date: str) -> DaySchedule:
        return DaySchedule(
            date=date,
            working_hours=AvailabilityRepository.get_working_hours(self.db, staff_id, day_of_week(date)),
            unavailable_dates=AvailabilityRepository.get_unavailable_dates(self.db, staff_id),
            appointments=BookingRepository.list_for_staff_on_date(self.db, staff_id, date),
        )

    def _free_start_times(self, day: DaySchedule, duration_minutes: int) -> List[int]:
        candidates = generate_slots(day.working_hours, duration_minutes, self.step_minutes)
        free = {
            start for start in candidates
            if not is_blocked(
                SlotCandidate(date=day.date, start=start, end=start + duration_minutes),
                day.unavailable_dates,
                day.appointments
            )
        }
        # Split shifts may overlap, hence the set
        return sorted(free)

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------

    def book(
            self,
            client_id: int,
            staff_id: int,
            service_id: int,
            date: str,
            start_time: str,
            notes: Optional[str] = None
    ) -> Appointment:
        """
        Book start_time for the client.

        The availability check is re-run against current state inside the
        (staff, date) critical section; a taken or off-schedule slot raises
        SlotUnavailableError and is never moved to another time.
        """
        parse_date(date)
        start = parse_time(start_time)
        service = self._require_service(service_id)
        self._require_staff(staff_id)
        if not CatalogRepository.get_user(self.db, client_id):
            raise ClientNotFoundError(client_id)

        end = start + service.duration

        with self.locks.hold(staff_id, date, timeout=self.lock_timeout):
            try:
                BookingRepository.lock_staff_day(self.db, staff_id, date)
                day = self._load_day(staff_id, date)

                if start not in self._free_start_times(day, service.duration):
                    logger.info(f"Slot {start_time} on {date} is not available for staff {staff_id}")
                    raise SlotUnavailableError(
                        f"The selected time slot {start_time} on {date} is not available"
                    )

                appointment = BookingRepository.create_appointment(
                    self.db,
                    client_id=client_id,
                    staff_id=staff_id,
                    service_id=service_id,
                    date=date,
                    start_time=format_time(start),
                    end_time=format_time(end),
                    notes=notes,
                )
            except IntegrityError as e:
                self.db.rollback()
                logger.info(f"Slot {start_time} on {date} for staff {staff_id} taken concurrently: {e.orig}")
                raise SlotUnavailableError(
                    f"The selected time slot {start_time} on {date} is not available"
                ) from e
            except Exception:
                self.db.rollback()
                raise

        logger.info(
            f"Booked appointment {appointment.id}: client {client_id}, staff {staff_id}, "
            f"{date} {appointment.start_time}-{appointment.end_time}"
        )
        self.notifier.dispatch(appointment.id, NotificationEvent.BOOKED)
        return appointment

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    def update_status(self, appointment_id: int, new_status) -> Appointment:
        """Move an appointment along confirmed -> completed | cancelled"""
        try:
            target = AppointmentStatus(new_status)
        except ValueError as e:
            raise InvalidInputError(f"Invalid appointment status: {new_status!r}") from e

        try:
            appointment = BookingRepository.get_appointment(self.db, appointment_id, for_update=True)
            if not appointment:
                raise AppointmentNotFoundError(appointment_id)

            current = AppointmentStatus(appointment.status)
            if target not in ALLOWED_TRANSITIONS[current]:
                raise InvalidTransitionError(current.value, target.value)

            appointment = BookingRepository.update_status(self.db, appointment, target)
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Appointment {appointment_id} moved from {current.value} to {target.value}")
        self.notifier.dispatch(appointment.id, STATUS_EVENTS[target])
        return appointment

    def cancel(self, appointment_id: int) -> Appointment:
        """Cancel an appointment; its slot is free again for the next query"""
        return self.update_status(appointment_id, AppointmentStatus.CANCELLED)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = BookingRepository.get_appointment(self.db, appointment_id)
        if not appointment:
            raise AppointmentNotFoundError(appointment_id)
        return appointment

    def _require_service(self, service_id: int) -> Service:
        service = CatalogRepository.get_service(self.db, service_id)
        if not service:
            raise ServiceNotFoundError(service_id)
        return service

    def _require_staff(self, staff_id: int):
        staff = CatalogRepository.get_staff(self.db, staff_id)
        if not staff:
            raise StaffNotFoundError(staff_id)
        return staff
