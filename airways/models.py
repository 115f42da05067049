import enum
import uuid

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Numeric, JSON, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from airways.database import Base

def _uuid() -> str:
    return str(uuid.uuid4())

class UserRole(str, enum.Enum):
    """User role enumeration"""
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"

class SeatClass(str, enum.Enum):
    """Cabin class enumeration"""
    ECONOMY = "ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST = "FIRST"

class BookingStatus(str, enum.Enum):
    """Booking status enumeration"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

# ================================
# Users
# ================================
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, native_enum=False), nullable=False, default=UserRole.CUSTOMER)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="user")

# ================================
# Flights & Seat Inventory
# ================================
class Flight(Base):
    __tablename__ = "flights"

    id = Column(String(36), primary_key=True, default=_uuid)
    flight_number = Column(String(20), nullable=False, index=True)
    departure = Column(String(255), nullable=False, index=True)
    arrival = Column(String(255), nullable=False, index=True)
    departure_time = Column(DateTime(timezone=True), nullable=False)
    arrival_time = Column(DateTime(timezone=True), nullable=False)
    aircraft = Column(String(100))
    base_price = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    seats = relationship(
        "FlightSeat",
        back_populates="flight",
        order_by="FlightSeat.position",
        cascade="all, delete-orphan",
    )
    bookings = relationship("Booking", back_populates="flight")

    @property
    def total_seats(self) -> int:
        return len(self.seats)

    @property
    def available_seat_count(self) -> int:
        return sum(1 for seat in self.seats if seat.is_available)

class FlightSeat(Base):
    __tablename__ = "flight_seats"
    __table_args__ = (UniqueConstraint("flight_id", "seat_id", name="uq_flight_seat"),)

    id = Column(String(36), primary_key=True, default=_uuid)
    flight_id = Column(String(36), ForeignKey("flights.id"), nullable=False, index=True)
    seat_id = Column(String(10), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    seat_class = Column(Enum(SeatClass, native_enum=False), nullable=False, default=SeatClass.ECONOMY)
    price = Column(Numeric(10, 2), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True, index=True)

    # Relationships
    flight = relationship("Flight", back_populates="seats")

# ================================
# Bookings
# ================================
class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(32), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    flight_id = Column(String(36), ForeignKey("flights.id"), nullable=False, index=True)
    seats = Column(JSON, nullable=False)
    passenger_details = Column(JSON, nullable=False)
    status = Column(Enum(BookingStatus, native_enum=False), nullable=False, default=BookingStatus.CONFIRMED)
    total_price = Column(Numeric(10, 2), nullable=False, default=0)
    booking_date = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    qr_code = Column(String(500))
    seats_released = Column(Boolean, nullable=False, default=False)

    # Relationships
    user = relationship("User", back_populates="bookings")
    flight = relationship("Flight", back_populates="bookings")
