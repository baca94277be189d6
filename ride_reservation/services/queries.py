"""Read-only projections over the entity store."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ride_reservation.domain.entities import Customer, Driver, Reservation
from ride_reservation.domain.enums import ReservationStatus
from ride_reservation.domain.errors import (
    CustomerNotFound,
    DriverNotFound,
    ReservationNotFound,
)
from ride_reservation.infrastructure.repositories import (
    CustomerRepository,
    DriverRepository,
    ReservationRepository,
)


class ReservationQueries:
    def __init__(self, session: AsyncSession):
        self.customers = CustomerRepository(session)
        self.drivers = DriverRepository(session)
        self.reservations = ReservationRepository(session)

    async def get_customer(self, customer_id: str) -> Customer:
        customer = await self.customers.get_by_id(customer_id)
        if customer is None:
            raise CustomerNotFound(customer_id)
        return customer

    async def get_driver(self, driver_id: str) -> Driver:
        driver = await self.drivers.get_by_id(driver_id)
        if driver is None:
            raise DriverNotFound(driver_id)
        return driver

    async def get_reservation_for_customer(
        self, customer_id: str, reservation_id: str
    ) -> Reservation:
        """A customer only ever sees their own reservations."""
        reservation = await self.reservations.get_by_id(reservation_id)
        if reservation is None or reservation.customer_id != customer_id:
            raise ReservationNotFound(reservation_id)
        return reservation

    async def list_reservations_for_customer(self, customer_id: str) -> list[Reservation]:
        if not await self.customers.exists(customer_id):
            raise CustomerNotFound(customer_id)
        return await self.reservations.scan(customer_id=customer_id)

    async def list_reservations_for_driver(self, driver_id: str) -> list[Reservation]:
        if not await self.drivers.exists(driver_id):
            raise DriverNotFound(driver_id)
        return await self.reservations.scan(driver_id=driver_id)

    async def list_waiting_reservations(self, requesting_driver_id: str) -> list[Reservation]:
        """
        The global waiting queue.  Any registered driver sees every waiting
        reservation; the requester only has to exist.
        """
        if not await self.drivers.exists(requesting_driver_id):
            raise DriverNotFound(requesting_driver_id)
        return await self.reservations.scan(statuses=[ReservationStatus.WAITING])
