# app/schemas/catalog.py
"""Response schemas for services, staff and staff schedules"""
from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    duration: int
    formatted_duration: str
    price: int
    formatted_price: str
    category: str
    image: Optional[str] = None


class StaffResponse(BaseModel):
    id: int
    user_id: int
    name: str
    profile_image: Optional[str] = None
    title: str
    bio: Optional[str] = None
    rating: Optional[int] = None
    review_count: int = 0


class WorkingHoursResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day_of_week: int
    start_time: str
    end_time: str
    is_available: bool


class UnavailableDateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: str
    reason: Optional[str] = None


class StaffAvailabilityResponse(BaseModel):
    staff_id: int
    working_hours: List[WorkingHoursResponse]
    unavailable_dates: List[UnavailableDateResponse]
