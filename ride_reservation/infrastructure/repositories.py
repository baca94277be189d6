"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes the
entity-store contract only: get by id, insert, full-record replace, and
ordered scans.  Repositories translate between ORM rows and the immutable
domain entities; they know nothing about lifecycle rules.
"""

from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import CustomerModel, DriverModel, ReservationModel
from ride_reservation.domain.entities import Customer, Driver, Reservation
from ride_reservation.domain.enums import ReservationStatus


class CustomerRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, customer: Customer) -> Customer:
        self.session.add(
            CustomerModel(
                id=customer.id,
                name=customer.name,
                phone_number=customer.phone_number,
                created_at=customer.created_at,
            )
        )
        await self.session.flush()
        return customer

    async def get_by_id(self, customer_id: str) -> Optional[Customer]:
        row = await self.session.get(CustomerModel, customer_id)
        if row is None:
            return None
        return Customer(
            id=row.id,
            name=row.name,
            phone_number=row.phone_number,
            created_at=row.created_at,
        )

    async def exists(self, customer_id: str) -> bool:
        return await self.session.get(CustomerModel, customer_id) is not None

    async def scan(self) -> list[Customer]:
        result = await self.session.execute(
            select(CustomerModel).order_by(CustomerModel.id)
        )
        return [
            Customer(
                id=row.id,
                name=row.name,
                phone_number=row.phone_number,
                created_at=row.created_at,
            )
            for row in result.scalars().all()
        ]


class DriverRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, driver: Driver) -> Driver:
        self.session.add(
            DriverModel(
                id=driver.id,
                name=driver.name,
                phone_number=driver.phone_number,
                created_at=driver.created_at,
            )
        )
        await self.session.flush()
        return driver

    async def get_by_id(self, driver_id: str) -> Optional[Driver]:
        row = await self.session.get(DriverModel, driver_id)
        if row is None:
            return None
        return Driver(
            id=row.id,
            name=row.name,
            phone_number=row.phone_number,
            created_at=row.created_at,
        )

    async def exists(self, driver_id: str) -> bool:
        return await self.session.get(DriverModel, driver_id) is not None

    async def scan(self) -> list[Driver]:
        result = await self.session.execute(
            select(DriverModel).order_by(DriverModel.id)
        )
        return [
            Driver(
                id=row.id,
                name=row.name,
                phone_number=row.phone_number,
                created_at=row.created_at,
            )
            for row in result.scalars().all()
        ]


def _to_reservation(row: ReservationModel) -> Reservation:
    return Reservation(
        id=row.id,
        customer_id=row.customer_id,
        pickup_location=row.pickup_location,
        destination=row.destination,
        status=ReservationStatus(row.status),
        price=row.price,
        driver_id=row.driver_id or "",
        created_at=row.created_at,
    )


def _columns(reservation: Reservation) -> dict:
    return {
        "customer_id": reservation.customer_id,
        "pickup_location": reservation.pickup_location,
        "destination": reservation.destination,
        "status": int(reservation.status),
        "price": reservation.price,
        "driver_id": reservation.driver_id or None,
        "created_at": reservation.created_at,
    }


class ReservationRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, reservation: Reservation) -> Reservation:
        self.session.add(ReservationModel(id=reservation.id, **_columns(reservation)))
        await self.session.flush()
        return reservation

    async def replace(self, reservation: Reservation) -> Reservation:
        """Overwrite every column of the stored record in one statement."""
        await self.session.execute(
            update(ReservationModel)
            .where(ReservationModel.id == reservation.id)
            .values(**_columns(reservation))
        )
        return reservation

    async def get_by_id(self, reservation_id: str) -> Optional[Reservation]:
        row = await self.session.get(ReservationModel, reservation_id)
        return _to_reservation(row) if row is not None else None

    async def scan(
        self,
        *,
        customer_id: str | None = None,
        driver_id: str | None = None,
        statuses: Iterable[ReservationStatus] | None = None,
    ) -> list[Reservation]:
        query = select(ReservationModel).order_by(ReservationModel.id)
        if customer_id is not None:
            query = query.where(ReservationModel.customer_id == customer_id)
        if driver_id is not None:
            query = query.where(ReservationModel.driver_id == driver_id)
        if statuses is not None:
            query = query.where(
                ReservationModel.status.in_([int(s) for s in statuses])
            )
        result = await self.session.execute(query)
        return [_to_reservation(row) for row in result.scalars().all()]

    async def driver_has_any(
        self, driver_id: str, statuses: Iterable[ReservationStatus]
    ) -> bool:
        result = await self.session.execute(
            select(
                exists().where(
                    ReservationModel.driver_id == driver_id,
                    ReservationModel.status.in_([int(s) for s in statuses]),
                )
            )
        )
        return bool(result.scalar())
