# app/models/availability.py
from sqlalchemy import Column, String, Integer, Boolean, Text, ForeignKey, Index, CheckConstraint
from app.models.base import Base


class WorkingHours(Base):
    """
    Recurring weekly working window for a staff member.
    Several rows per weekday are allowed (split shifts).
    """
    __tablename__ = "working_hours"
    __table_args__ = (
        Index("ix_working_hours_staff_day", "staff_id", "day_of_week"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_working_hours_day"),
        CheckConstraint("NOT is_available OR start_time < end_time", name="ck_working_hours_window"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False)

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(String(5), nullable=False)  # "09:00"
    end_time = Column(String(5), nullable=False)  # "17:00"
    is_available = Column(Boolean, nullable=False, default=True)


class UnavailableDate(Base):
    """Full-day override: no slots for the staff member on this date"""
    __tablename__ = "unavailable_dates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(String(10), nullable=False)  # "2026-10-19"
    reason = Column(Text, nullable=True)  # "Holiday", "Vacation", etc.
