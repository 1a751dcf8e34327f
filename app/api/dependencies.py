# ============================================================================
# FILE: app/api/dependencies.py
# Dependency wiring for the booking engine
# ============================================================================
from fastapi import Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.services.booking.booking_engine import BookingEngine
from app.services.notification.notification_dispatcher import (
    NotificationDispatcher,
    get_notification_dispatcher,
)


def get_booking_engine(
        db: Session = Depends(get_db),
        notifier: NotificationDispatcher = Depends(get_notification_dispatcher)
) -> BookingEngine:
    """One engine per request, sharing the process-wide booking locks"""
    return BookingEngine(db, notifier=notifier)
