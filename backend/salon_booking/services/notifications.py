# backend/salon_booking/services/notifications.py
"""
Email notifications for bookings.

Two events:
- booking_confirmed: sent to the customer after a booking is created
- booking_cancelled: sent to the stored address after a cancellation

Delivery goes through a SendGrid-style HTTP API (POST JSON, Bearer key).
Everything here is best effort: notify() never raises.
"""

import logging
from dataclasses import dataclass
from email.utils import parseaddr
from html import escape
from typing import Protocol

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)

BOOKING_CONFIRMED = "booking_confirmed"
BOOKING_CANCELLED = "booking_cancelled"


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    text: str
    html: str


_TEMPLATES = {
    BOOKING_CONFIRMED: (
        "Turno confirmado - {business}",
        "Hola {nombre},\n\n"
        "Tu turno quedó reservado para el {date} a las {time}.\n"
        "Si no podés asistir, avisanos para liberar el horario.\n\n"
        "{business}",
    ),
    BOOKING_CANCELLED: (
        "Turno cancelado - {business}",
        "Hola {nombre},\n\n"
        "Tu turno del {date} a las {time} fue cancelado.\n\n"
        "{business}",
    ),
}


def render_message(event: str, booking: dict, business_name: str) -> EmailMessage:
    """Render the email for event. booking needs nombre, email, date, time."""
    subject_tpl, body_tpl = _TEMPLATES[event]
    fields = {
        "business": business_name,
        "nombre": booking["nombre"],
        "date": booking["date"],
        "time": booking["time"],
    }
    text = body_tpl.format(**fields)
    html_fields = {k: escape(str(v)) for k, v in fields.items()}
    html = "<p>" + body_tpl.format(**html_fields).replace("\n\n", "</p><p>").replace("\n", "<br>") + "</p>"

    return EmailMessage(
        to=booking["email"],
        subject=subject_tpl.format(**fields),
        text=text,
        html=html,
    )


class Notifier(Protocol):
    def notify(self, event: str, booking: dict) -> None: ...


class EmailNotifier:
    """Sends booking emails over HTTP."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None):
        self.settings = settings
        self._client = client

    def notify(self, event: str, booking: dict) -> None:
        """Render and send. Failures are logged and swallowed."""
        try:
            message = render_message(event, booking, self.settings.business_name)
            self.send(message)
        except Exception:
            logger.exception(f"Notification {event} failed for booking {booking.get('id')}")

    def send(self, message: EmailMessage) -> None:
        if not self.settings.mail_enabled:
            logger.info(f"Mail not configured, skipping '{message.subject}' to {message.to}")
            return

        from_name, from_email = parseaddr(self.settings.mail_from)
        payload = {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {
                "email": from_email,
                "name": from_name or self.settings.business_name,
            },
            "subject": message.subject,
            "content": [
                {"type": "text/plain", "value": message.text},
                {"type": "text/html", "value": message.html},
            ],
        }
        headers = {"Authorization": f"Bearer {self.settings.mail_api_key}"}

        if self._client is not None:
            resp = self._client.post(self.settings.mail_api_url, json=payload, headers=headers)
        else:
            with httpx.Client(timeout=self.settings.mail_timeout) as client:
                resp = client.post(self.settings.mail_api_url, json=payload, headers=headers)

        resp.raise_for_status()
        logger.info(f"Mail sent: '{message.subject}' → {message.to}")
