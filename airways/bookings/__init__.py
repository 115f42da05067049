"""
Booking Module

Booking lifecycle for Scenic Airways flights:

- booking_service.py: create, status change and cancellation, coordinating
  seat inventory, QR codes and notification emails
- qr_service.py: boarding QR code rendering
- router.py: FastAPI endpoints under /bookings
- schemas.py: Pydantic request and response models
"""

from .router import router
from .booking_service import BookingService
from .qr_service import QRCodeService
from .schemas import (
    PassengerDetail, BookingCreate, BookingDraft, BookingStatusUpdate,
    BookingResponse, BookingCancellationResponse
)

__all__ = [
    "router",
    "BookingService",
    "QRCodeService",
    "PassengerDetail",
    "BookingCreate",
    "BookingDraft",
    "BookingStatusUpdate",
    "BookingResponse",
    "BookingCancellationResponse"
]
