from typing import List, Optional
from datetime import datetime, timezone
import time
import uuid

from sqlalchemy.orm import Session

from airways.bookings.schemas import BookingDraft
from airways.bookings.qr_service import QRCodeService
from airways.flights.service import FlightService
from airways.logger_config import logger
from airways.models import Booking, BookingStatus
from airways.notifications import EmailService

BOOKING_ID_PREFIX = "SA"

class BookingService:
    """Service for the booking lifecycle: create, status change, cancel.

    Each step talks to its collaborator directly and in a fixed order. Nothing
    here catches collaborator errors or compensates for steps that already
    ran: a failure while saving or mailing leaves the seat hold and the QR
    image in place.
    """

    def __init__(
        self,
        db: Session,
        flight_service: Optional[FlightService] = None,
        qr_code_service: Optional[QRCodeService] = None,
        email_service: Optional[EmailService] = None
    ):
        self.db = db
        self.flight_service = flight_service or FlightService(db)
        self.qr_code_service = qr_code_service or QRCodeService()
        self.email_service = email_service or EmailService()

    def get_all_bookings(self) -> List[Booking]:
        return self.db.query(Booking).all()

    def get_bookings_by_user_id(self, user_id: str) -> List[Booking]:
        """Get all bookings for a user"""
        return self.db.query(Booking).filter(Booking.user_id == user_id).all()

    def get_booking_by_id(self, booking_id: str) -> Optional[Booking]:
        """Get booking by ID"""
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def create_booking(self, draft: BookingDraft) -> Booking:
        """Hold the seats, render the boarding QR code, save, then confirm by email"""

        now = datetime.now(timezone.utc)
        booking = Booking(
            id=self.generate_booking_id(),
            user_id=draft.user_id,
            flight_id=draft.flight_id,
            seats=list(draft.seats),
            passenger_details=[p.model_dump(exclude_none=True) for p in draft.passenger_details],
            status=BookingStatus.CONFIRMED,
            booking_date=now,
            updated_at=now,
            seats_released=False
        )

        booking.total_price = self.flight_service.update_seat_availability(
            booking.flight_id, booking.seats, release=False
        )

        qr_code_data = self.generate_qr_code_data(booking)
        booking.qr_code = self.qr_code_service.generate_qr_code(qr_code_data, booking.id)

        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"Created booking {booking.id} on flight {booking.flight_id} for seats {', '.join(booking.seats)}")

        self.email_service.send_booking_confirmation(booking)

        return booking

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> Optional[Booking]:
        """Set a new status; returns None if the booking does not exist"""

        booking = self.get_booking_by_id(booking_id)
        if not booking:
            logger.warning(f"Status update for unknown booking {booking_id}")
            return None

        previous = booking.status
        booking.status = status
        booking.updated_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"Booking {booking_id} status {previous.value} -> {status.value}")

        self.email_service.send_booking_status_update(booking)

        return booking

    def cancel_booking(self, booking_id: str) -> bool:
        """Cancel a booking and give its seats back to the flight.

        Returns False if the booking does not exist. The seats are released
        once per booking: a repeat cancellation succeeds without releasing
        them again, while a booking moved to CANCELLED through a status
        update still gets its seats back here.
        """

        booking = self.get_booking_by_id(booking_id)
        if not booking:
            logger.warning(f"Cancellation for unknown booking {booking_id}")
            return False

        if booking.seats_released:
            logger.info(f"Booking {booking_id} is already cancelled")
            return True

        booking.status = BookingStatus.CANCELLED
        booking.updated_at = datetime.now(timezone.utc)

        self.flight_service.update_seat_availability(booking.flight_id, booking.seats, release=True)
        booking.seats_released = True

        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"Cancelled booking {booking_id}, released seats {', '.join(booking.seats)}")

        self.email_service.send_booking_cancellation(booking)

        return True

    @staticmethod
    def generate_booking_id() -> str:
        """SA + epoch milliseconds + 4 uppercase hex characters"""
        millis = time.time_ns() // 1_000_000
        return f"{BOOKING_ID_PREFIX}{millis}{uuid.uuid4().hex[:4].upper()}"

    @staticmethod
    def generate_qr_code_data(booking: Booking) -> str:
        return "BOOKING:{}|FLIGHT:{}|SEATS:{}|PASSENGER:{}".format(
            booking.id,
            booking.flight_id,
            ",".join(booking.seats),
            booking.passenger_details[0]["name"]
        )
