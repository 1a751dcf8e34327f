"""Celery application factory"""
from celery import Celery
from celery.schedules import crontab

from app.config.settings import get_settings

settings = get_settings()


def create_celery_app() -> Celery:
    """Create and configure the Celery application"""
    app = Celery(
        "salon_booking",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
        include=["app.tasks.notification_tasks"],
    )

    app.conf.update(
        task_serializer=settings.CELERY_TASK_SERIALIZER,
        accept_content=["json"],
        result_serializer="json",
        task_acks_late=True,
        task_reject_on_worker_lost=True,
        worker_prefetch_multiplier=1,
        result_expires=3600,
        beat_schedule={
            "send-upcoming-reminders": {
                "task": "app.tasks.notification_tasks.send_upcoming_reminders",
                "schedule": crontab(hour=settings.REMINDER_HOUR, minute=0),
            },
        },
    )

    return app


celery_app = create_celery_app()
