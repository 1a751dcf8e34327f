# ===== app/services/availability/slot_generator.py =====
"""
Slot Generation

Turns a day's working windows into candidate start times for a service of a
given duration. A day with no enabled windows yields no candidates; nothing
is ever invented to fill an empty schedule.
"""
import logging
from typing import Iterable, List

from app.core.exceptions import InvalidInputError, InvalidServiceDurationError
from app.models.availability import WorkingHours
from app.utils.time_utils import parse_time

logger = logging.getLogger(__name__)

DEFAULT_STEP_MINUTES = 15


def generate_slots(
        working_windows: Iterable[WorkingHours],
        duration_minutes: int,
        step_minutes: int = DEFAULT_STEP_MINUTES
) -> List[int]:
    """
    Candidate start times (minutes since midnight) for one day.

    For each enabled window [start, end) emit start, start+step, ... while
    candidate + duration <= end. Windows are walked in the order given and
    the output keeps that order.
    """
    if not isinstance(duration_minutes, int) or duration_minutes <= 0:
        raise InvalidServiceDurationError(duration_minutes)
    if step_minutes <= 0:
        raise InvalidInputError(f"Slot step must be positive, got {step_minutes}")

    candidates: List[int] = []

    for window in working_windows:
        if not window.is_available:
            continue

        window_start = parse_time(window.start_time)
        window_end = parse_time(window.end_time)
        if window_start >= window_end:
            logger.warning(
                f"Ignoring empty working window {window.start_time}-{window.end_time} "
                f"for staff {window.staff_id}"
            )
            continue

        # Integer arithmetic on the day's minutes, never wraps past midnight
        candidate = window_start
        while candidate + duration_minutes <= window_end:
            candidates.append(candidate)
            candidate += step_minutes

    return candidates
