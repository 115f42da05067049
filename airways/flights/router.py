from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from airways.database import get_db
from airways.auth.dependencies import require_admin
from airways.flights.schemas import FlightCreate, FlightResponse, SeatMapResponse, SeatResponse
from airways.exceptions import NotFoundError
from airways.flights.service import FlightService
from airways.models import User

router = APIRouter()

@router.get("", response_model=List[FlightResponse])
def search_flights(
    departure: Optional[str] = Query(None, description="Origin contains"),
    arrival: Optional[str] = Query(None, description="Destination contains"),
    db: Session = Depends(get_db)
):
    """List flights, optionally filtered by origin and destination"""
    return FlightService(db).search_flights(departure=departure, arrival=arrival)

@router.post("", response_model=FlightResponse, status_code=status.HTTP_201_CREATED)
def create_flight(
    flight: FlightCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Schedule a new flight (admin only)"""
    return FlightService(db).create_flight(flight)

@router.get("/{flight_id}", response_model=FlightResponse)
def get_flight(flight_id: str, db: Session = Depends(get_db)):
    """Get flight details by ID"""
    flight = FlightService(db).get_flight(flight_id)
    if not flight:
        raise NotFoundError(f"Flight {flight_id} not found")
    return flight

@router.get("/{flight_id}/seats", response_model=SeatMapResponse)
def get_seat_map(flight_id: str, db: Session = Depends(get_db)):
    """Full seat map plus the identifiers still open for booking"""
    flight_service = FlightService(db)
    seats = flight_service.get_seat_map(flight_id)
    return SeatMapResponse(
        flight_id=flight_id,
        seats=[SeatResponse.model_validate(seat) for seat in seats],
        available_seats=[seat.seat_id for seat in seats if seat.is_available]
    )
