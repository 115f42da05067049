"""
Test Configuration and Fixtures

- Environment is set before any application import: in-memory SQLite,
  a throwaway static directory for QR codes, mail delivery disabled
- Tables are created and dropped around every test
- Fixtures for users, tokens, flights and the API client
"""

import os
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before application modules read settings."""
    static_dir = tempfile.mkdtemp(prefix='airways_static_')
    os.environ['SECRET_KEY'] = 'test-secret-key-not-for-production'
    os.environ['DATABASE_URL'] = 'sqlite://'
    os.environ['STATIC_DIR'] = static_dir
    os.environ['QR_CODE_DIR'] = os.path.join(static_dir, 'qr_codes')
    os.environ['MAIL_ENABLED'] = 'false'
    os.environ['LOG_LEVEL'] = 'WARNING'


_early_setup_test_environment()

from datetime import datetime, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from airways.auth.service import UserService  # noqa: E402
from airways.auth.utils import create_access_token  # noqa: E402
from airways.database import Base, SessionLocal, engine  # noqa: E402
from airways.flights.schemas import FlightCreate  # noqa: E402
from airways.flights.service import FlightService  # noqa: E402
from airways.main import app  # noqa: E402
from airways.models import UserRole  # noqa: E402

DEFAULT_PASSWORD = 'P@ssw0rd!'


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def make_user(db, username: str, role: UserRole = UserRole.CUSTOMER):
    return UserService.create_user(
        db,
        username=username,
        email=f'{username}@example.com',
        password=DEFAULT_PASSWORD,
        role=role,
    )


def auth_headers(user) -> dict:
    return {'Authorization': f'Bearer {create_access_token(user)}'}


@pytest.fixture
def customer(db):
    return make_user(db, 'alice')


@pytest.fixture
def other_customer(db):
    return make_user(db, 'bob')


@pytest.fixture
def admin(db):
    return make_user(db, 'trilogy', role=UserRole.ADMIN)


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


def make_flight(db, flight_number: str = 'SA101', departure: str = 'Queenstown',
                arrival: str = 'Milford Sound', rows: int = 2, seat_letters: str = 'AB',
                business_rows: int = 0, hours_from_now: int = 24):
    departure_time = datetime(2030, 1, 1, 8, 0) + timedelta(hours=hours_from_now)
    return FlightService(db).create_flight(FlightCreate(
        flight_number=flight_number,
        departure=departure,
        arrival=arrival,
        departure_time=departure_time,
        arrival_time=departure_time + timedelta(hours=1),
        aircraft='Cessna 208 Caravan',
        base_price=Decimal('100.00'),
        rows=rows,
        seat_letters=seat_letters,
        business_rows=business_rows,
    ))


@pytest.fixture
def flight(db):
    """Two rows of two seats: 1A 1B 2A 2B"""
    return make_flight(db)
