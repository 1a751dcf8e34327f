# ===== app/services/notification/notification_dispatcher.py =====
"""Fire-and-forget hand-off of appointment events to the notification worker"""
import enum
import logging

from app.config.settings import get_settings

logger = logging.getLogger(__name__)


class NotificationEvent(str, enum.Enum):
    BOOKED = "booked"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    REMINDER = "reminder"


class NotificationDispatcher:
    """
    Enqueues a notification task per appointment event.
    Failures are logged and swallowed: a booking never depends on delivery.
    """

    def __init__(self, enabled: bool = None):
        self.enabled = get_settings().NOTIFICATIONS_ENABLED if enabled is None else enabled

    def dispatch(self, appointment_id: int, event: NotificationEvent) -> bool:
        if not self.enabled:
            logger.debug(f"Notifications disabled, skipping {event.value} for appointment {appointment_id}")
            return False

        try:
            from app.tasks.notification_tasks import send_appointment_notification

            send_appointment_notification.delay(appointment_id, event.value)
            logger.info(f"Queued {event.value} notification for appointment {appointment_id}")
            return True
        except Exception as e:
            logger.error(f"Failed to queue {event.value} notification for appointment {appointment_id}: {e}")
            return False


def get_notification_dispatcher() -> NotificationDispatcher:
    """FastAPI dependency"""
    return NotificationDispatcher()
