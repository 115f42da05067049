from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from airways.database import get_db
from airways.auth.dependencies import get_current_user, require_admin
from airways.bookings.schemas import (
    BookingCreate, BookingDraft, BookingResponse, BookingStatusUpdate,
    BookingCancellationResponse
)
from airways.bookings.booking_service import BookingService
from airways.exceptions import ForbiddenError, NotFoundError
from airways.models import Booking, User, UserRole

router = APIRouter()

def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)

def _check_access(user: User, owner_id: str) -> None:
    if user.role != UserRole.ADMIN and user.id != owner_id:
        raise ForbiddenError("You can only access your own bookings")

def _load_booking(booking_service: BookingService, booking_id: str, user: User) -> Booking:
    booking = booking_service.get_booking_by_id(booking_id)
    if not booking:
        raise NotFoundError(f"Booking {booking_id} not found")
    _check_access(user, booking.user_id)
    return booking

@router.get("", response_model=List[BookingResponse])
def get_all_bookings(
    booking_service: BookingService = Depends(get_booking_service),
    admin: User = Depends(require_admin)
):
    """List every booking (admin only)"""
    return booking_service.get_all_bookings()

@router.get("/user/{user_id}", response_model=List[BookingResponse])
def get_user_bookings(
    user_id: str,
    booking_service: BookingService = Depends(get_booking_service),
    current_user: User = Depends(get_current_user)
):
    """Get all bookings for a user"""
    _check_access(current_user, user_id)
    return booking_service.get_bookings_by_user_id(user_id)

@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service),
    current_user: User = Depends(get_current_user)
):
    """Get booking details by ID"""
    return _load_booking(booking_service, booking_id, current_user)

@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    request: BookingCreate,
    booking_service: BookingService = Depends(get_booking_service),
    current_user: User = Depends(get_current_user)
):
    """Book seats on a flight for the current user"""
    draft = BookingDraft(
        user_id=current_user.id,
        flight_id=request.flight_id,
        seats=request.seats,
        passenger_details=request.passenger_details
    )
    return booking_service.create_booking(draft)

@router.put("/{booking_id}/status", response_model=BookingResponse)
def update_booking_status(
    booking_id: str,
    update: BookingStatusUpdate,
    booking_service: BookingService = Depends(get_booking_service),
    admin: User = Depends(require_admin)
):
    """Change a booking's status (admin only)"""
    booking = booking_service.update_booking_status(booking_id, update.status)
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found")
    return booking

@router.put("/{booking_id}/cancel", response_model=BookingCancellationResponse)
def cancel_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service),
    current_user: User = Depends(get_current_user)
):
    """Cancel a booking and release its seats"""
    _load_booking(booking_service, booking_id, current_user)

    if not booking_service.cancel_booking(booking_id):
        raise NotFoundError(f"Booking {booking_id} not found")

    return BookingCancellationResponse(
        message="Booking cancelled successfully",
        booking_id=booking_id
    )
