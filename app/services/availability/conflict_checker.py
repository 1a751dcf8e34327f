# ===== app/services/availability/conflict_checker.py =====
"""
Conflict detection for a candidate slot.

This is the only overlap test in the code base: slot listing and booking
validation both go through is_blocked().
"""
from dataclasses import dataclass
from typing import Iterable

from app.models.appointment import Appointment
from app.models.availability import UnavailableDate
from app.utils.time_utils import parse_time


@dataclass(frozen=True)
class SlotCandidate:
    date: str  # YYYY-MM-DD
    start: int  # minutes since midnight
    end: int


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open overlap: [a_start, a_end) and [b_start, b_end). Touching ends do not overlap."""
    return a_start < b_end and b_start < a_end


def is_blocked(
        candidate: SlotCandidate,
        unavailable_dates: Iterable[UnavailableDate],
        existing_appointments: Iterable[Appointment]
) -> bool:
    """
    True when the candidate cannot be booked:
    - its date is one of the staff member's unavailable dates, or
    - it overlaps a confirmed/completed appointment on the same date.

    Both iterables are expected to be scoped to a single staff member.
    Cancelled appointments never block.
    """
    if any(unavailable.date == candidate.date for unavailable in unavailable_dates):
        return True

    for appointment in existing_appointments:
        if appointment.date != candidate.date or not appointment.occupies_slot:
            continue
        if intervals_overlap(
                candidate.start, candidate.end,
                parse_time(appointment.start_time), parse_time(appointment.end_time)
        ):
            return True

    return False
