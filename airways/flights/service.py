from typing import Iterable, List, Optional
from decimal import Decimal
import threading
import zlib

from sqlalchemy import func
from sqlalchemy.orm import Session

from airways.exceptions import NotFoundError, SeatUnavailableError
from airways.flights.schemas import FlightCreate
from airways.logger_config import logger
from airways.models import Flight, FlightSeat, SeatClass

BUSINESS_PRICE_MULTIPLIER = Decimal('2.5')

FLIGHT_LOCK_STRIPES = 64

# Fixed pool of locks shared by every service instance in the process;
# a flight always maps to the same stripe
_flight_locks: List[threading.Lock] = [threading.Lock() for _ in range(FLIGHT_LOCK_STRIPES)]

def _lock_for(flight_id: str) -> threading.Lock:
    return _flight_locks[zlib.crc32(flight_id.encode("utf-8")) % FLIGHT_LOCK_STRIPES]

class FlightService:
    """Service for flight schedules and per-flight seat inventory"""

    def __init__(self, db: Session):
        self.db = db

    def create_flight(self, data: FlightCreate) -> Flight:
        """Schedule a flight and build its seat map"""

        flight = Flight(
            flight_number=data.flight_number.upper(),
            departure=data.departure,
            arrival=data.arrival,
            departure_time=data.departure_time,
            arrival_time=data.arrival_time,
            aircraft=data.aircraft,
            base_price=data.base_price
        )

        position = 0
        for row in range(1, data.rows + 1):
            is_business = row <= data.business_rows
            price = data.base_price * BUSINESS_PRICE_MULTIPLIER if is_business else data.base_price
            for letter in data.seat_letters:
                flight.seats.append(FlightSeat(
                    seat_id=f"{row}{letter}",
                    position=position,
                    seat_class=SeatClass.BUSINESS if is_business else SeatClass.ECONOMY,
                    price=price,
                    is_available=True
                ))
                position += 1

        self.db.add(flight)
        self.db.commit()
        self.db.refresh(flight)

        logger.info(f"Created flight {flight.flight_number} ({flight.id}) with {len(flight.seats)} seats")
        return flight

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        """Get flight by ID"""
        return self.db.query(Flight).filter(Flight.id == flight_id).first()

    def list_flights(self) -> List[Flight]:
        return self.db.query(Flight).order_by(Flight.departure_time).all()

    def search_flights(
        self,
        departure: Optional[str] = None,
        arrival: Optional[str] = None
    ) -> List[Flight]:
        """Case-insensitive substring search on origin and destination"""

        query = self.db.query(Flight)
        if departure:
            query = query.filter(Flight.departure.ilike(f"%{departure}%"))
        if arrival:
            query = query.filter(Flight.arrival.ilike(f"%{arrival}%"))
        return query.order_by(Flight.departure_time).all()

    def get_seat_map(self, flight_id: str) -> List[FlightSeat]:
        flight = self._require_flight(flight_id)
        return list(flight.seats)

    def get_available_seats(self, flight_id: str) -> List[str]:
        """Seat identifiers currently open for booking"""
        self._require_flight(flight_id)
        rows = (
            self.db.query(FlightSeat.seat_id)
            .filter(FlightSeat.flight_id == flight_id, FlightSeat.is_available.is_(True))
            .order_by(FlightSeat.position)
            .all()
        )
        return [seat_id for (seat_id,) in rows]

    def update_seat_availability(
        self,
        flight_id: str,
        seats: Iterable[str],
        release: bool = False
    ) -> Decimal:
        """Hold (release=False) or restore (release=True) seats on a flight.

        Holding is all-or-nothing: under the flight's lock only seats that are
        still available are flipped, and if any requested seat could not be
        flipped the whole change is rolled back. The change is committed
        immediately and independently of any booking write.

        Returns the summed price of the affected seats.
        """

        self._require_flight(flight_id)
        seat_ids = list(dict.fromkeys(seats))
        if not seat_ids:
            return Decimal('0')

        with _lock_for(flight_id):
            total = (
                self.db.query(func.coalesce(func.sum(FlightSeat.price), 0))
                .filter(FlightSeat.flight_id == flight_id, FlightSeat.seat_id.in_(seat_ids))
                .scalar()
            )

            # Conditional update: only rows in the opposite state change
            changed = (
                self.db.query(FlightSeat)
                .filter(
                    FlightSeat.flight_id == flight_id,
                    FlightSeat.seat_id.in_(seat_ids),
                    FlightSeat.is_available.is_(not release)
                )
                .update({FlightSeat.is_available: release}, synchronize_session=False)
            )

            if not release and changed != len(seat_ids):
                self.db.rollback()
                unavailable = self._unavailable_seats(flight_id, seat_ids)
                logger.warning(f"Rejected hold on flight {flight_id}: {', '.join(unavailable)} not available")
                raise SeatUnavailableError(flight_id, unavailable)

            self.db.commit()

        action = "Released" if release else "Held"
        logger.info(f"{action} seats {', '.join(seat_ids)} on flight {flight_id}")
        return Decimal(str(total))

    def _unavailable_seats(self, flight_id: str, seat_ids: List[str]) -> List[str]:
        open_seats = {
            seat_id for (seat_id,) in
            self.db.query(FlightSeat.seat_id)
            .filter(
                FlightSeat.flight_id == flight_id,
                FlightSeat.seat_id.in_(seat_ids),
                FlightSeat.is_available.is_(True)
            )
            .all()
        }
        return [seat_id for seat_id in seat_ids if seat_id not in open_seats]

    def _require_flight(self, flight_id: str) -> Flight:
        flight = self.get_flight(flight_id)
        if not flight:
            raise NotFoundError(f"Flight {flight_id} not found")
        return flight
