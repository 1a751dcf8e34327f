# ============================================================================
# app/services/appointment/booking_repository.py
# ============================================================================
"""Read/write access to appointment records"""
import logging
import zlib
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from app.models.appointment import Appointment, AppointmentStatus

logger = logging.getLogger(__name__)


class BookingRepository:
    """Appointment persistence. Rows are never deleted by the booking flows."""

    @staticmethod
    def create_appointment(
            db: Session,
            client_id: int,
            staff_id: int,
            service_id: int,
            date: str,
            start_time: str,
            end_time: str,
            notes: Optional[str] = None
    ) -> Appointment:
        """Insert and commit a new confirmed appointment"""
        appointment = Appointment(
            client_id=client_id,
            staff_id=staff_id,
            service_id=service_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            status=AppointmentStatus.CONFIRMED.value,
            notes=notes,
        )

        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def get_appointment(db: Session, appointment_id: int, for_update: bool = False) -> Optional[Appointment]:
        query = db.query(Appointment).filter(Appointment.id == appointment_id)
        if for_update:
            query = query.with_for_update().populate_existing()
        return query.first()

    @staticmethod
    def list_for_staff_on_date(db: Session, staff_id: int, date: str) -> List[Appointment]:
        """
        Every appointment for staff+date, any status.
        Always re-reads from the database so the booking check never sees
        stale identity-map state.
        """
        return db.query(Appointment).filter(
            Appointment.staff_id == staff_id,
            Appointment.date == date
        ).order_by(
            Appointment.start_time.asc()
        ).execution_options(populate_existing=True).all()

    @staticmethod
    def list_by_staff(db: Session, staff_id: int) -> List[Appointment]:
        return db.query(Appointment).filter(
            Appointment.staff_id == staff_id
        ).order_by(Appointment.date.asc(), Appointment.start_time.asc()).all()

    @staticmethod
    def list_by_client(db: Session, client_id: int) -> List[Appointment]:
        return db.query(Appointment).filter(
            Appointment.client_id == client_id
        ).order_by(Appointment.date.asc(), Appointment.start_time.asc()).all()

    @staticmethod
    def list_by_date(db: Session, date: str, status: Optional[str] = None) -> List[Appointment]:
        query = db.query(Appointment).filter(Appointment.date == date)
        if status:
            query = query.filter(Appointment.status == status)
        return query.order_by(Appointment.start_time.asc(), Appointment.staff_id.asc()).all()

    @staticmethod
    def update_status(db: Session, appointment: Appointment, status: AppointmentStatus) -> Appointment:
        appointment.status = status.value
        if status == AppointmentStatus.CANCELLED:
            appointment.cancelled_at = datetime.now(timezone.utc)

        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def mark_reminder_sent(db: Session, appointment: Appointment) -> None:
        appointment.reminder_sent_at = datetime.now(timezone.utc)
        db.commit()

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        """Administrative purge. Booking flows cancel instead of deleting."""
        logger.warning(f"Purging appointment {appointment.id}")
        db.delete(appointment)
        db.commit()

    @staticmethod
    def lock_staff_day(db: Session, staff_id: int, date: str) -> None:
        """
        Serialize bookings for staff+date across processes.

        On PostgreSQL this takes a transaction-scoped advisory lock, released
        by the commit or rollback that ends the booking attempt. Other
        backends rely on the in-process lock and the unique slot index.
        """
        if db.get_bind().dialect.name != "postgresql":
            return
        key = zlib.crc32(f"appointment-day:{staff_id}:{date}".encode("utf-8"))
        db.execute(text("SELECT pg_advisory_xact_lock(:key)"), {"key": key})
