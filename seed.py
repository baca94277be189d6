"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates, through the same services the API uses (so every invariant holds):
  - 5 sample customers
  - 4 sample drivers
  - 8 sample reservations (mix of WAITING, ACCEPTED, ON_THE_WAY, ARRIVED,
    CANCELLED)
"""

import asyncio

from sqlalchemy import text

from ride_reservation.infrastructure.database import async_session_factory, engine
from ride_reservation.services.lifecycle import ReservationLifecycle
from ride_reservation.services.registration import RegistrationService


CUSTOMERS = [
    {"name": "Aarav Sharma", "phone_number": "+919876543210"},
    {"name": "Priya Patel", "phone_number": "(987) 654-32109"},
    {"name": "Rohan Mehta", "phone_number": "987.654.3211"},
    {"name": "Sneha Gupta", "phone_number": "9876543212"},
    {"name": "Vikram Singh", "phone_number": "+919876543213"},
]

DRIVERS = [
    {"name": "Karan Joshi", "phone_number": "+919812345670"},
    {"name": "Meera Nair", "phone_number": "981-234-5671"},
    {"name": "Arjun Kumar", "phone_number": "9812345672"},
    {"name": "Diya Iyer", "phone_number": "+919812345673"},
]

# (customer index, pickup, destination, driver index or None, final status)
RESERVATIONS = [
    (0, "Terminal 2", "Andheri East", 0, "ARRIVED"),
    (1, "Terminal 1", "Bandra West", None, "WAITING"),
    (2, "Terminal 2", "Powai", 1, "ON_THE_WAY"),
    (3, "Terminal 2", "Colaba", 2, "ACCEPTED"),
    (4, "Terminal 1", "Dadar", 3, "CANCELLED"),
    (0, "Andheri East", "Terminal 2", None, "WAITING"),
    (1, "Juhu", "Terminal 1", 0, "ARRIVED"),
    (2, "Powai", "Terminal 2", None, "WAITING"),
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM customers"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return
        await session.rollback()

        registration = RegistrationService(session)
        lifecycle = ReservationLifecycle(session)

        # ── Parties ───────────────────────────────────────────────────
        customer_ids = [
            await registration.register_customer(c["name"], c["phone_number"])
            for c in CUSTOMERS
        ]
        print(f"  Created {len(customer_ids)} customers")
        driver_ids = [
            await registration.register_driver(d["name"], d["phone_number"])
            for d in DRIVERS
        ]
        print(f"  Created {len(driver_ids)} drivers")

        # ── Reservations ──────────────────────────────────────────────
        for customer, pickup, destination, driver, status in RESERVATIONS:
            confirmation = await lifecycle.create_reservation(
                customer_ids[customer], pickup, destination
            )
            reservation_id = confirmation.reservation.id
            if status == "CANCELLED":
                await lifecycle.driver_cancel(driver_ids[driver], reservation_id)
                continue
            if driver is None:
                continue
            driver_id = driver_ids[driver]
            await lifecycle.driver_take_reservation(driver_id, reservation_id)
            if status in ("ON_THE_WAY", "ARRIVED"):
                await lifecycle.driver_on_the_way(driver_id, reservation_id)
            if status == "ARRIVED":
                await lifecycle.driver_arrived(driver_id, reservation_id, 250.0)
        print(f"  Created {len(RESERVATIONS)} reservations")

        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
