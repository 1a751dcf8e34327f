# ============================================================================
# app/api/v1/public/availability.py
# ============================================================================
from fastapi import APIRouter, Depends, Query
from typing import List

from app.api.dependencies import get_booking_engine
from app.services.booking.booking_engine import BookingEngine

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("/timeslots", response_model=List[str])
def get_available_timeslots(
        staff_id: int = Query(..., gt=0, description="Staff member ID"),
        service_id: int = Query(..., gt=0, description="Service ID"),
        date: str = Query(..., description="Date (YYYY-MM-DD)"),
        engine: BookingEngine = Depends(get_booking_engine)
):
    """
    Free start times for the service with this staff member on the date.
    Returns "HH:MM" strings in ascending order; an empty list means no
    availability (day off, unavailable date or fully booked).
    """
    return engine.get_available_slots(staff_id, service_id, date)
