# ============================================================================
# FILE: app/api/v1/admin/appointments.py
# Administrative purge of appointment records
# ============================================================================
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.exceptions import AppointmentNotFoundError
from app.services.appointment.booking_repository import BookingRepository

router = APIRouter(prefix="/admin/appointments", tags=["Admin - Appointments"])


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
def purge_appointment(
        appointment_id: int = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    """
    Permanently remove an appointment record.
    Clients cancel through DELETE /appointments/{id}; purging is for data
    cleanup only and is never needed to free a slot.
    """
    appointment = BookingRepository.get_appointment(db, appointment_id)
    if not appointment:
        raise AppointmentNotFoundError(appointment_id)

    BookingRepository.delete_appointment(db, appointment)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
