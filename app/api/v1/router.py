"""
API v1 router setup
Public catalog/availability routes and the appointment routes
"""
from fastapi import APIRouter

from app.api.v1 import appointments
from app.api.v1.admin import appointments as admin_appointments
from app.api.v1.public import availability, services, staff

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (catalog and availability)
# ============================================================================
api_v1_router.include_router(services.router, tags=["Public"])
api_v1_router.include_router(staff.router, tags=["Public"])
api_v1_router.include_router(availability.router, tags=["Public"])

# ============================================================================
# BOOKING ROUTES
# ============================================================================
api_v1_router.include_router(appointments.router, tags=["Booking"])

# ============================================================================
# ADMIN ROUTES
# ============================================================================
api_v1_router.include_router(admin_appointments.router)


@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """API information and available endpoints."""
    return {
        "version": "1.0",
        "endpoints": {
            "services": "/api/v1/services",
            "staff": "/api/v1/staff",
            "timeslots": "/api/v1/availability/timeslots?staff_id=&service_id=&date=",
            "appointments": "/api/v1/appointments",
        }
    }
