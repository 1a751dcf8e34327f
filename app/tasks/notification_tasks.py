# ===== app/tasks/notification_tasks.py =====
from datetime import date, timedelta
import logging

from app.config.celery_config import celery_app
from app.config.database import SessionLocal
from app.models.appointment import AppointmentStatus
from app.services.appointment.booking_repository import BookingRepository
from app.services.notification.notification_dispatcher import NotificationDispatcher, NotificationEvent
from app.services.notification.notification_service import NotificationService

logger = logging.getLogger(__name__)


def deliver_appointment_notification(db, appointment_id: int, event: str) -> dict:
    """Render and deliver the emails for one appointment event"""
    notification_event = NotificationEvent(event)

    if notification_event == NotificationEvent.REMINDER:
        # Queued a while ago; the appointment may have been cancelled or completed since
        appointment = BookingRepository.get_appointment(db, appointment_id)
        if appointment and appointment.status != AppointmentStatus.CONFIRMED.value:
            logger.info(f"Skipping reminder for appointment {appointment_id} with status {appointment.status}")
            return {"status": "skipped", "reason": "not_confirmed"}

    messages = NotificationService.build_appointment_messages(db, appointment_id, notification_event)
    if messages is None:
        return {"status": "failed", "reason": "appointment_not_found"}

    for message in messages:
        # Delivery stand-in: the mail body is written to the worker log
        logger.info(f"[EMAIL] To: {message.to}")
        logger.info(f"[EMAIL] Subject: {message.subject}")
        logger.info(f"[EMAIL] Body:\n{message.body}")

    if notification_event == NotificationEvent.REMINDER:
        appointment = BookingRepository.get_appointment(db, appointment_id)
        BookingRepository.mark_reminder_sent(db, appointment)

    return {"status": "success", "appointment_id": appointment_id, "event": event, "sent": len(messages)}


def find_reminder_candidates(db, target_date: str) -> list:
    """Confirmed appointments on target_date that have not been reminded yet"""
    return [
        appointment
        for appointment in BookingRepository.list_by_date(db, target_date, status=AppointmentStatus.CONFIRMED.value)
        if appointment.reminder_sent_at is None
    ]


@celery_app.task(bind=True, max_retries=3)
def send_appointment_notification(self, appointment_id: int, event: str):
    """Send the notification for a booked/cancelled/completed/reminder event"""
    db = SessionLocal()
    try:
        return deliver_appointment_notification(db, appointment_id, event)

    except Exception as exc:
        logger.error(f"Failed to send {event} notification for appointment {appointment_id}: {exc}")

        # Retry with exponential backoff: 1min, 2min, 4min
        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
    finally:
        db.close()


@celery_app.task
def send_upcoming_reminders():
    """Queue reminders for tomorrow's confirmed appointments"""
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    dispatcher = NotificationDispatcher()

    db = SessionLocal()
    try:
        candidates = find_reminder_candidates(db, tomorrow)
        queued = sum(1 for appointment in candidates if dispatcher.dispatch(appointment.id, NotificationEvent.REMINDER))
    finally:
        db.close()

    logger.info(f"Queued {queued} reminders for {tomorrow}")
    return {"status": "success", "date": tomorrow, "queued": queued}
