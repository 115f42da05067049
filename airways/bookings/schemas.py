from pydantic import BaseModel, EmailStr, Field, validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from airways.models import BookingStatus

class PassengerDetail(BaseModel):
    """Individual passenger information"""
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    age: Optional[int] = Field(None, ge=0, le=130)
    passport_number: Optional[str] = None

# Booking Request Models
class BookingCreate(BaseModel):
    """Request body for a new booking; the owner is the caller"""
    flight_id: str
    seats: List[str]
    passenger_details: List[PassengerDetail]

    @validator('seats')
    def validate_seats(cls, v):
        v = [seat.strip().upper() for seat in v]
        if not v:
            raise ValueError('At least one seat is required')
        if any(not seat for seat in v):
            raise ValueError('Seat identifiers cannot be blank')
        if len(set(v)) != len(v):
            raise ValueError('Seats must not repeat')
        return v

    @validator('passenger_details')
    def validate_passengers(cls, v, values):
        if not v:
            raise ValueError('At least one passenger is required')
        seats = values.get('seats')
        if seats is not None and len(v) != len(seats):
            raise ValueError('Each seat needs exactly one passenger')
        return v

class BookingDraft(BookingCreate):
    """Everything the booking service needs to create a booking"""
    user_id: str

class BookingStatusUpdate(BaseModel):
    status: BookingStatus

# Response Models
class BookingResponse(BaseModel):
    id: str
    user_id: str
    flight_id: str
    seats: List[str]
    passenger_details: List[PassengerDetail]
    status: BookingStatus
    total_price: Decimal
    booking_date: datetime
    updated_at: datetime
    qr_code: Optional[str] = None

    class Config:
        from_attributes = True

class BookingCancellationResponse(BaseModel):
    message: str
    booking_id: str
