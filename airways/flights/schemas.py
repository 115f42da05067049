from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from airways.models import SeatClass

class FlightCreate(BaseModel):
    """Request to schedule a flight and build its seat map"""
    flight_number: str = Field(..., min_length=2, max_length=20)
    departure: str = Field(..., min_length=1)
    arrival: str = Field(..., min_length=1)
    departure_time: datetime
    arrival_time: datetime
    aircraft: Optional[str] = None
    base_price: Decimal = Field(..., ge=0)
    rows: int = Field(30, ge=1, le=80)
    seat_letters: str = Field("ABCDEF", min_length=1, max_length=10)
    business_rows: int = Field(0, ge=0)

    @validator('arrival_time')
    def validate_arrival_after_departure(cls, v, values):
        departure_time = values.get('departure_time')
        if departure_time and v <= departure_time:
            raise ValueError('Arrival time must be after departure time')
        return v

    @validator('seat_letters')
    def validate_seat_letters(cls, v):
        v = v.upper()
        if not v.isalpha() or len(set(v)) != len(v):
            raise ValueError('Seat letters must be distinct letters')
        return v

    @validator('business_rows')
    def validate_business_rows(cls, v, values):
        rows = values.get('rows')
        if rows is not None and v > rows:
            raise ValueError('Business rows cannot exceed total rows')
        return v

class FlightResponse(BaseModel):
    id: str
    flight_number: str
    departure: str
    arrival: str
    departure_time: datetime
    arrival_time: datetime
    aircraft: Optional[str] = None
    base_price: Decimal
    total_seats: int
    available_seat_count: int

    class Config:
        from_attributes = True

class SeatResponse(BaseModel):
    seat_id: str
    seat_class: SeatClass
    price: Decimal
    is_available: bool

    class Config:
        from_attributes = True

class SeatMapResponse(BaseModel):
    flight_id: str
    seats: List[SeatResponse]
    available_seats: List[str]
