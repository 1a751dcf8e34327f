# ============================================================================
# FILE: app/api/v1/appointments.py
# Thin HTTP layer over the booking engine
# ============================================================================
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.api.dependencies import get_booking_engine
from app.config.database import get_db
from app.schemas.booking import AppointmentResponse, AppointmentStatusUpdate, BookAppointmentRequest
from app.services.appointment.booking_repository import BookingRepository
from app.services.booking.booking_engine import BookingEngine
from app.utils.time_utils import parse_date

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.post("", response_model=AppointmentResponse, status_code=201)
def book_appointment(
        request: BookAppointmentRequest,
        engine: BookingEngine = Depends(get_booking_engine)
):
    """
    Book a slot. Responds 409 when the slot is no longer free; the caller
    should fetch fresh availability and pick another time.
    """
    return engine.book(
        client_id=request.client_id,
        staff_id=request.staff_id,
        service_id=request.service_id,
        date=request.date,
        start_time=request.start_time,
        notes=request.notes,
    )


@router.get("/client/{client_id}", response_model=List[AppointmentResponse])
def list_client_appointments(
        client_id: int = Path(..., description="The client (user) ID"),
        db: Session = Depends(get_db)
):
    return BookingRepository.list_by_client(db, client_id)


@router.get("/staff/{staff_id}", response_model=List[AppointmentResponse])
def list_staff_appointments(
        staff_id: int = Path(..., description="The staff ID"),
        date: Optional[str] = Query(None, description="Only this date (YYYY-MM-DD)"),
        db: Session = Depends(get_db)
):
    if date:
        parse_date(date)
        return BookingRepository.list_for_staff_on_date(db, staff_id, date)
    return BookingRepository.list_by_staff(db, staff_id)


@router.get("/date/{date}", response_model=List[AppointmentResponse])
def list_appointments_on_date(
        date: str = Path(..., description="Date (YYYY-MM-DD)"),
        db: Session = Depends(get_db)
):
    parse_date(date)
    return BookingRepository.list_by_date(db, date)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
        appointment_id: int = Path(..., description="The appointment ID"),
        engine: BookingEngine = Depends(get_booking_engine)
):
    return engine.get_appointment(appointment_id)


@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
def update_appointment_status(
        update: AppointmentStatusUpdate,
        appointment_id: int = Path(..., description="The appointment ID"),
        engine: BookingEngine = Depends(get_booking_engine)
):
    """confirmed -> completed | cancelled; completed and cancelled are final"""
    return engine.update_status(appointment_id, update.status)


@router.delete("/{appointment_id}", response_model=AppointmentResponse)
def cancel_appointment(
        appointment_id: int = Path(..., description="The appointment ID"),
        engine: BookingEngine = Depends(get_booking_engine)
):
    """Cancel the appointment. The record is kept with status cancelled."""
    return engine.cancel(appointment_id)
