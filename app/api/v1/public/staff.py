# ============================================================================
# app/api/v1/public/staff.py
# ============================================================================
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.exceptions import StaffNotFoundError
from app.models.staff import Staff
from app.schemas.catalog import ServiceResponse, StaffAvailabilityResponse, StaffResponse
from app.services.availability.availability_repository import AvailabilityRepository
from app.services.catalog.catalog_repository import CatalogRepository

router = APIRouter(prefix="/staff", tags=["staff"])


def _staff_to_response(staff: Staff) -> StaffResponse:
    return StaffResponse(
        id=staff.id,
        user_id=staff.user_id,
        name=staff.user.name if staff.user else "",
        profile_image=staff.user.profile_image if staff.user else None,
        title=staff.title,
        bio=staff.bio,
        rating=staff.rating,
        review_count=staff.review_count or 0,
    )


def _require_staff(db: Session, staff_id: int) -> Staff:
    staff = CatalogRepository.get_staff(db, staff_id)
    if not staff:
        raise StaffNotFoundError(staff_id)
    return staff


@router.get("", response_model=List[StaffResponse])
def list_staff(db: Session = Depends(get_db)):
    return [_staff_to_response(staff) for staff in CatalogRepository.list_staff(db)]


@router.get("/{staff_id}", response_model=StaffResponse)
def get_staff(
        staff_id: int = Path(..., description="The staff ID"),
        db: Session = Depends(get_db)
):
    return _staff_to_response(_require_staff(db, staff_id))


@router.get("/{staff_id}/services", response_model=List[ServiceResponse])
def get_staff_services(
        staff_id: int = Path(..., description="The staff ID"),
        db: Session = Depends(get_db)
):
    """Services this staff member performs"""
    _require_staff(db, staff_id)
    return CatalogRepository.get_staff_services(db, staff_id)


@router.get("/{staff_id}/availability", response_model=StaffAvailabilityResponse)
def get_staff_availability(
        staff_id: int = Path(..., description="The staff ID"),
        db: Session = Depends(get_db)
):
    """Weekly working hours and one-off unavailable dates"""
    _require_staff(db, staff_id)
    return StaffAvailabilityResponse(
        staff_id=staff_id,
        working_hours=AvailabilityRepository.get_weekly_schedule(db, staff_id),
        unavailable_dates=AvailabilityRepository.get_unavailable_dates(db, staff_id),
    )
