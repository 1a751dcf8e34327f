# ===== app/services/notification/notification_service.py =====
"""Renders appointment notification emails"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config.settings import get_settings
from app.models.appointment import Appointment
from app.services.appointment.booking_repository import BookingRepository
from app.services.catalog.catalog_repository import CatalogRepository
from app.services.notification.notification_dispatcher import NotificationEvent

logger = logging.getLogger(__name__)


@dataclass
class EmailMessage:
    to: str
    subject: str
    body: str


class NotificationService:

    @staticmethod
    def build_appointment_messages(
            db: Session,
            appointment_id: int,
            event: NotificationEvent
    ) -> Optional[List[EmailMessage]]:
        """
        Emails for one appointment event: always the client, plus the staff
        member when an appointment is cancelled.
        Returns None when the appointment or a related record is missing.
        """
        salon = get_settings().SALON_NAME

        appointment = BookingRepository.get_appointment(db, appointment_id)
        if not appointment:
            logger.error(f"Appointment {appointment_id} not found")
            return None

        client = CatalogRepository.get_user(db, appointment.client_id)
        staff = CatalogRepository.get_staff(db, appointment.staff_id)
        service = CatalogRepository.get_service(db, appointment.service_id)
        if not client or not staff or not staff.user or not service:
            logger.error(f"Missing client/staff/service for appointment {appointment_id}")
            return None

        details = NotificationService._details(appointment, service.name, staff.user.name)

        if event == NotificationEvent.BOOKED:
            subject = f"Your {salon} Appointment Confirmation"
            body = (
                f"Hello {client.name},\n\n"
                f"Your appointment has been confirmed!\n\n{details}\n\n"
                f"Please arrive 10 minutes before your scheduled appointment time.\n\n"
                f"Thank you for choosing {salon}!"
            )
        elif event == NotificationEvent.REMINDER:
            subject = f"Reminder: Your {salon} Appointment Tomorrow"
            body = (
                f"Hello {client.name},\n\n"
                f"This is a reminder of your appointment tomorrow.\n\n{details}\n\n"
                f"We look forward to seeing you!"
            )
        elif event == NotificationEvent.CANCELLED:
            subject = f"Your {salon} Appointment Has Been Cancelled"
            body = (
                f"Hello {client.name},\n\n"
                f"Your appointment has been cancelled.\n\n{details}\n\n"
                f"You can book a new time at any point."
            )
        else:
            subject = f"Thank You for Visiting {salon}"
            body = (
                f"Hello {client.name},\n\n"
                f"Thank you for your visit.\n\n{details}\n\n"
                f"We hope to see you again soon!"
            )

        messages = [EmailMessage(to=client.email, subject=subject, body=body)]

        if event == NotificationEvent.CANCELLED:
            messages.append(EmailMessage(
                to=staff.user.email,
                subject="Appointment Cancelled",
                body=f"Hello {staff.user.name},\n\nAn appointment with {client.name} has been cancelled.\n\n{details}",
            ))

        return messages

    @staticmethod
    def _details(appointment: Appointment, service_name: str, staff_name: str) -> str:
        return (
            f"Details:\n"
            f"- Service: {service_name}\n"
            f"- Date: {appointment.date}\n"
            f"- Time: {appointment.start_time} - {appointment.end_time}\n"
            f"- Stylist: {staff_name}"
        )
