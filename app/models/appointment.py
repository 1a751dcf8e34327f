# app/models/appointment.py
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Index, CheckConstraint, text
from sqlalchemy.sql import func
import enum
from .base import Base


class AppointmentStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses whose appointments hold their time slot
OCCUPYING_STATUSES = frozenset({AppointmentStatus.CONFIRMED.value, AppointmentStatus.COMPLETED.value})


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appointments_staff_date", "staff_id", "date"),
        CheckConstraint("start_time < end_time", name="ck_appointments_interval"),
        CheckConstraint("status IN ('confirmed', 'completed', 'cancelled')", name="ck_appointments_status"),
        # At most one live appointment per staff/date/start
        Index(
            "uq_appointments_live_slot",
            "staff_id", "date", "start_time",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    # References
    client_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)

    # Slot; end_time is a snapshot of the service duration at booking time
    date = Column(String(10), nullable=False)  # "2026-10-19"
    start_time = Column(String(5), nullable=False)  # "09:00"
    end_time = Column(String(5), nullable=False)  # "09:45"

    status = Column(String(20), nullable=False, default=AppointmentStatus.CONFIRMED.value)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    reminder_sent_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return (
            f"<Appointment(id={self.id}, staff_id={self.staff_id}, date={self.date}, "
            f"{self.start_time}-{self.end_time}, status={self.status})>"
        )

    @property
    def occupies_slot(self) -> bool:
        return self.status in OCCUPYING_STATUSES
