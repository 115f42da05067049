#!/usr/bin/env python3

import os
from datetime import datetime, timedelta
from decimal import Decimal

from airways.database import SessionLocal, init_db
from airways.models import Booking, FlightSeat, Flight, User, UserRole
from airways.auth.service import UserService
from airways.flights.schemas import FlightCreate
from airways.flights.service import FlightService

def create_seed_data():
    init_db()
    db = SessionLocal()

    try:
        print("🚀 Creating seed data for Scenic Airways...")

        # Clear existing data (in reverse dependency order)
        print("Clearing existing data...")
        db.query(Booking).delete()
        db.query(FlightSeat).delete()
        db.query(Flight).delete()
        db.query(User).delete()
        db.commit()

        # 1. Create Users
        print("Creating users...")
        admin = UserService.create_user(
            db,
            username=os.getenv("SEED_ADMIN_USERNAME", "trilogy"),
            email="admin@flights.com",
            password=os.getenv("SEED_ADMIN_PASSWORD", "admin@flights"),
            role=UserRole.ADMIN
        )
        customer = UserService.create_user(
            db,
            username="user",
            email="user@flights.com",
            password=os.getenv("SEED_USER_PASSWORD", "user@flights")
        )

        # 2. Create Flights
        print("Creating flights...")
        flight_service = FlightService(db)
        tomorrow = datetime.now().replace(minute=0, second=0, microsecond=0) + timedelta(days=1)
        schedules = [
            ("SA101", "Queenstown", "Milford Sound", 8, 55, "Cessna 208 Caravan", "349.00", 4, "ABC", 0),
            ("SA202", "Anchorage", "Denali", 10, 90, "de Havilland Beaver", "429.00", 3, "AB", 0),
            ("SA303", "Las Vegas", "Grand Canyon", 7, 70, "Airbus A320", "259.00", 25, "ABCDEF", 3),
            ("SA404", "Reykjavik", "Akureyri", 12, 45, "Dash 8 Q400", "189.00", 19, "ABCD", 2),
        ]
        flights = []
        for number, departure, arrival, hour, minutes, aircraft, price, rows, letters, business in schedules:
            departure_time = tomorrow.replace(hour=hour)
            flights.append(flight_service.create_flight(FlightCreate(
                flight_number=number,
                departure=departure,
                arrival=arrival,
                departure_time=departure_time,
                arrival_time=departure_time + timedelta(minutes=minutes),
                aircraft=aircraft,
                base_price=Decimal(price),
                rows=rows,
                seat_letters=letters,
                business_rows=business
            )))

        print("✅ Successfully created seed data for Scenic Airways!")
        print(f"Created:")
        print(f"  - 2 users (admin: {admin.username}, customer: {customer.username})")
        print(f"  - {len(flights)} flights")
        print(f"  - {sum(f.total_seats for f in flights)} seats")

    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_seed_data()
