"""
Reservation Lifecycle Engine
============================

Creates reservations and moves them through the status state machine::

    WAITING -> ACCEPTED -> ON_THE_WAY -> ARRIVED
    WAITING -> CANCELLED

Guards per driver operation, in order
-------------------------------------
1. The driver must be registered            (``DriverNotFound``)
2. The reservation must exist                (``ReservationNotFound``)
3. On-the-way / arrived only: a claimed
   reservation keeps its driver             (``DriverMismatch``)
4. The current status must allow the edge    (``InvalidStatusForTransition``)
5. Take only: the driver holds no reservation
   in ACCEPTED / ON_THE_WAY                  (``DriverAlreadyBusy``)

The status guard precedes the exclusivity guard so that repeating a
successful take reports the reservation status rather than the (now busy)
driver.

Each operation runs inside ``atomic()``: the read-check-write sequence holds
the write lock and is committed as a whole or not at all.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .base import WriteService
from ride_reservation.domain.entities import Reservation
from ride_reservation.domain.enums import ACTIVE_STATUSES, ReservationStatus
from ride_reservation.domain.errors import (
    CustomerNotFound,
    DriverAlreadyBusy,
    DriverMismatch,
    DriverNotFound,
    InvalidPrice,
    ReservationNotFound,
)
from ride_reservation.infrastructure.repositories import (
    CustomerRepository,
    DriverRepository,
    ReservationRepository,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Confirmation:
    message: str
    reservation: Reservation


class ReservationLifecycle(WriteService):
    def __init__(self, session, **kwargs):
        super().__init__(session, **kwargs)
        self.customers = CustomerRepository(session)
        self.drivers = DriverRepository(session)
        self.reservations = ReservationRepository(session)

    # ── Creation ──────────────────────────────────────────────────

    async def create_reservation(
        self, customer_id: str, pickup_location: str, destination: str
    ) -> Confirmation:
        async with self.atomic():
            if not await self.customers.exists(customer_id):
                raise CustomerNotFound(customer_id)
            reservation = await self.reservations.insert(
                Reservation(
                    id=self.id_generator.next_id(),
                    customer_id=customer_id,
                    pickup_location=pickup_location,
                    destination=destination,
                    created_at=self.clock(),
                )
            )
        logger.info(
            "Reservation %s created for customer %s", reservation.id, customer_id
        )
        return Confirmation(
            f"Reservation with ID {reservation.id} was created successfully",
            reservation,
        )

    # ── Driver transitions ────────────────────────────────────────

    async def driver_take_reservation(
        self, driver_id: str, reservation_id: str
    ) -> Confirmation:
        async with self.atomic():
            reservation = await self._load_for_driver(driver_id, reservation_id)
            updated = reservation.transition_to(
                ReservationStatus.ACCEPTED, driver_id=driver_id
            )
            if await self.reservations.driver_has_any(driver_id, ACTIVE_STATUSES):
                raise DriverAlreadyBusy(driver_id)
            await self.reservations.replace(updated)
        return self._confirm(updated, f"Reservation {reservation_id} accepted")

    async def driver_on_the_way(
        self, driver_id: str, reservation_id: str
    ) -> Confirmation:
        async with self.atomic():
            reservation = await self._load_for_driver(driver_id, reservation_id, require_owner=True)
            updated = reservation.transition_to(ReservationStatus.ON_THE_WAY)
            await self.reservations.replace(updated)
        return self._confirm(updated, f"Driver is on the way for reservation {reservation_id}")

    async def driver_arrived(
        self, driver_id: str, reservation_id: str, price: float
    ) -> Confirmation:
        if not math.isfinite(price) or price < 0:
            raise InvalidPrice(price)
        async with self.atomic():
            reservation = await self._load_for_driver(driver_id, reservation_id, require_owner=True)
            updated = reservation.transition_to(ReservationStatus.ARRIVED, price=price)
            await self.reservations.replace(updated)
        return self._confirm(updated, f"Reservation {reservation_id} arrived, price {price}")

    async def driver_cancel(self, driver_id: str, reservation_id: str) -> Confirmation:
        """Any registered driver may withdraw a reservation that is still waiting."""
        async with self.atomic():
            reservation = await self._load_for_driver(driver_id, reservation_id)
            updated = reservation.transition_to(ReservationStatus.CANCELLED)
            await self.reservations.replace(updated)
        return self._confirm(updated, f"Reservation {reservation_id} cancelled")

    # ── Customer transitions ──────────────────────────────────────

    async def customer_cancel(
        self, customer_id: str, reservation_id: str
    ) -> Confirmation:
        async with self.atomic():
            if not await self.customers.exists(customer_id):
                raise CustomerNotFound(customer_id)
            reservation = await self.reservations.get_by_id(reservation_id)
            if reservation is None or reservation.customer_id != customer_id:
                raise ReservationNotFound(reservation_id)
            updated = reservation.transition_to(ReservationStatus.CANCELLED)
            await self.reservations.replace(updated)
        return self._confirm(updated, f"Reservation {reservation_id} cancelled")

    # ── Helpers ───────────────────────────────────────────────────

    async def _load_for_driver(
        self, driver_id: str, reservation_id: str, *, require_owner: bool = False
    ) -> Reservation:
        if not await self.drivers.exists(driver_id):
            raise DriverNotFound(driver_id)
        reservation = await self.reservations.get_by_id(reservation_id)
        if reservation is None:
            raise ReservationNotFound(reservation_id)
        if require_owner and reservation.has_driver() and reservation.driver_id != driver_id:
            raise DriverMismatch(driver_id, reservation_id)
        return reservation

    def _confirm(self, reservation: Reservation, message: str) -> Confirmation:
        logger.info(
            "Reservation %s -> %s (driver=%s)",
            reservation.id,
            reservation.status_label,
            reservation.driver_id or "-",
        )
        return Confirmation(message, reservation)
