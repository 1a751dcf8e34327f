# app/schemas/booking.py
"""
Pydantic schemas for booking requests and appointment responses.
Inputs are validated here, before anything reaches the booking engine.
"""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from app.core.exceptions import InvalidInputError
from app.models.appointment import AppointmentStatus
from app.utils.time_utils import parse_date, parse_time


def _check_date(value: str) -> str:
    try:
        parse_date(value)
    except InvalidInputError as e:
        raise ValueError(e.message)
    return value


def _check_time(value: str) -> str:
    try:
        parse_time(value)
    except InvalidInputError as e:
        raise ValueError(e.message)
    return value


class BookAppointmentRequest(BaseModel):
    """Appointment booking request"""
    client_id: int = Field(..., gt=0, description="Booking client (user) ID")
    staff_id: int = Field(..., gt=0, description="Staff member ID")
    service_id: int = Field(..., gt=0, description="Service ID")
    date: str = Field(..., description="Appointment date (YYYY-MM-DD)")
    start_time: str = Field(..., description="Start time (HH:MM, 24-hour)")
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return _check_date(v)

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, v: str) -> str:
        return _check_time(v)


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus = Field(..., description="confirmed, completed or cancelled")


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    staff_id: int
    service_id: int
    date: str
    start_time: str
    end_time: str
    status: AppointmentStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
