# ===== app/services/availability/availability_repository.py =====
"""Read access to staff working hours and unavailable dates"""
from typing import List
from sqlalchemy.orm import Session

from app.models.availability import WorkingHours, UnavailableDate


class AvailabilityRepository:
    """
    Query contract for the staff-management tables.
    The booking engine only ever reads through here.
    """

    @staticmethod
    def get_working_hours(db: Session, staff_id: int, day_of_week: int) -> List[WorkingHours]:
        """Enabled working windows for one weekday, in chronological order"""
        return db.query(WorkingHours).filter(
            WorkingHours.staff_id == staff_id,
            WorkingHours.day_of_week == day_of_week,
            WorkingHours.is_available.is_(True)
        ).order_by(WorkingHours.start_time.asc()).all()

    @staticmethod
    def get_weekly_schedule(db: Session, staff_id: int) -> List[WorkingHours]:
        """All working-hours rows for a staff member, enabled or not"""
        return db.query(WorkingHours).filter(
            WorkingHours.staff_id == staff_id
        ).order_by(WorkingHours.day_of_week.asc(), WorkingHours.start_time.asc()).all()

    @staticmethod
    def get_unavailable_dates(db: Session, staff_id: int) -> List[UnavailableDate]:
        return db.query(UnavailableDate).filter(
            UnavailableDate.staff_id == staff_id
        ).order_by(UnavailableDate.date.asc()).all()
