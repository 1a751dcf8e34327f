# app/models/__init__.py
from .base import Base
from .user import User, UserRole
from .service import Service
from .staff import Staff, StaffService
from .availability import WorkingHours, UnavailableDate
from .appointment import Appointment, AppointmentStatus, OCCUPYING_STATUSES

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Service",
    "Staff",
    "StaffService",
    "WorkingHours",
    "UnavailableDate",
    "Appointment",
    "AppointmentStatus",
    "OCCUPYING_STATUSES",
]
