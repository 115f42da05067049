"""Booking notification emails.

Messages go out over SMTP when ``MAIL_ENABLED`` is set; otherwise they are
only logged. Either way each message is kept in ``sent_emails`` so callers
can inspect what was dispatched.
"""

from datetime import datetime
from email.message import EmailMessage
from typing import Dict, List, Optional
import smtplib

from airways.config import settings
from airways.exceptions import DownstreamError
from airways.logger_config import logger
from airways.models import Booking


class EmailService:
    def __init__(self, enabled: Optional[bool] = None):
        self.enabled = settings.MAIL_ENABLED if enabled is None else enabled
        self.sent_emails: List[Dict] = []

    def send_booking_confirmation(self, booking: Booking) -> bool:
        subject = f'Booking Confirmation - {booking.id}'
        body = self._render(
            booking,
            'Thank you for flying with Scenic Airways! Your booking is confirmed.',
        )
        return self.send_email(self._recipient(booking), subject, body)

    def send_booking_status_update(self, booking: Booking) -> bool:
        subject = f'Booking {booking.id} is now {booking.status.value}'
        body = self._render(
            booking,
            f'The status of your booking has changed to {booking.status.value}.',
        )
        return self.send_email(self._recipient(booking), subject, body)

    def send_booking_cancellation(self, booking: Booking) -> bool:
        subject = f'Booking Cancelled - {booking.id}'
        body = self._render(
            booking,
            'Your booking has been cancelled and your seats have been released.',
        )
        return self.send_email(self._recipient(booking), subject, body)

    def send_email(self, to: Optional[str], subject: str, body: str) -> bool:
        if not to:
            logger.warning(f'No recipient for "{subject}", skipping')
            return False

        message = EmailMessage()
        message['From'] = settings.MAIL_FROM
        message['To'] = to
        message['Subject'] = subject
        message.set_content(body)

        if self.enabled:
            self._deliver(message)
            logger.info(f'Sent "{subject}" to {to}')
        else:
            logger.info(f'Mail disabled, not sending "{subject}" to {to}')

        self.sent_emails.append(
            {'to': to, 'subject': subject, 'body': body, 'sent_at': datetime.now()}
        )
        return True

    def _deliver(self, message: EmailMessage) -> None:
        try:
            with smtplib.SMTP(settings.MAIL_SERVER, settings.MAIL_PORT, timeout=30) as smtp:
                if settings.MAIL_USE_TLS:
                    smtp.starttls()
                if settings.MAIL_USERNAME:
                    smtp.login(settings.MAIL_USERNAME, settings.MAIL_PASSWORD or '')
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise DownstreamError(f'Mail delivery to {message["To"]} failed: {e}') from e

    @staticmethod
    def _recipient(booking: Booking) -> Optional[str]:
        if booking.user is not None and booking.user.email:
            return booking.user.email
        passengers = booking.passenger_details or []
        if passengers:
            return passengers[0].get('email')
        return None

    @staticmethod
    def _render(booking: Booking, headline: str) -> str:
        flight = booking.flight
        lines = [
            'Dear Customer,',
            '',
            headline,
            '',
            'Booking Details:',
            '----------------',
            f'Booking ID: {booking.id}',
            f'Status: {booking.status.value}',
        ]
        if flight is not None:
            lines += [
                f'Flight: {flight.flight_number}',
                f'Route: {flight.departure} -> {flight.arrival}',
                f'Departure: {flight.departure_time:%Y-%m-%d %H:%M}',
            ]
        lines += [
            f'Seats: {", ".join(booking.seats)}',
            'Passengers: ' + ', '.join(p.get('name', '') for p in booking.passenger_details),
        ]
        if booking.qr_code:
            lines.append(f'Boarding code: {booking.qr_code}')
        lines += ['', 'Scenic Airways']
        return '\n'.join(lines)
