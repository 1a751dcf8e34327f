"""
Booking domain exceptions.
Each carries the HTTP status it is surfaced as; the handlers at the bottom
translate them into JSON responses.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Base exception for the availability and booking engine."""

    status_code = 400
    kind = "booking_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BookingError):
    """Raised when a referenced entity does not exist."""

    status_code = 404
    kind = "not_found"


class StaffNotFoundError(NotFoundError):
    def __init__(self, staff_id):
        super().__init__(f"Staff {staff_id} not found")


class ServiceNotFoundError(NotFoundError):
    def __init__(self, service_id):
        super().__init__(f"Service {service_id} not found")


class ClientNotFoundError(NotFoundError):
    def __init__(self, client_id):
        super().__init__(f"Client {client_id} not found")


class AppointmentNotFoundError(NotFoundError):
    def __init__(self, appointment_id):
        super().__init__(f"Appointment {appointment_id} not found")


class InvalidInputError(BookingError):
    """Raised for malformed dates/times or impossible parameters."""

    kind = "invalid_input"


class InvalidServiceDurationError(InvalidInputError):
    def __init__(self, duration_minutes):
        super().__init__(f"Service duration must be a positive number of minutes, got {duration_minutes}")


class SlotUnavailableError(BookingError):
    """The requested slot is taken or outside working hours; re-fetch and pick another."""

    status_code = 409
    kind = "slot_unavailable"


class InvalidTransitionError(BookingError):
    """Raised when an appointment status change is not allowed."""

    status_code = 409
    kind = "invalid_transition"

    def __init__(self, current_status: str, target_status: str):
        super().__init__(f"Cannot change appointment status from {current_status} to {target_status}")
        self.current_status = current_status
        self.target_status = target_status


class BookingLockTimeoutError(BookingError):
    """The (staff, date) lock was not acquired in time; nothing was booked."""

    status_code = 503
    kind = "booking_timeout"


# ============================================================================
# FastAPI handlers
# ============================================================================

async def booking_error_handler(request: Request, exc: BookingError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


async def database_unavailable_handler(request: Request, exc: OperationalError):
    logger.error(f"Database unavailable while handling {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Storage temporarily unavailable, please retry", "error": "storage_unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingError, booking_error_handler)
    app.add_exception_handler(OperationalError, database_unavailable_handler)
