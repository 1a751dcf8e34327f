# app/schemas/__init__.py
from .booking import (
    BookAppointmentRequest,
    AppointmentStatusUpdate,
    AppointmentResponse
)

from .catalog import (
    ServiceResponse,
    StaffResponse,
    WorkingHoursResponse,
    UnavailableDateResponse,
    StaffAvailabilityResponse
)
