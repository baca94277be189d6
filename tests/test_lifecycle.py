"""
Reservation lifecycle engine: creation, driver transitions, exclusivity and
the failure modes of each guard.
"""

from __future__ import annotations

import pytest

from ride_reservation.domain.enums import ReservationStatus
from ride_reservation.domain.errors import (
    CustomerNotFound,
    DriverAlreadyBusy,
    DriverMismatch,
    DriverNotFound,
    InvalidPrice,
    InvalidStatusForTransition,
    ReservationNotFound,
)
from ride_reservation.infrastructure.repositories import ReservationRepository
from tests.conftest import VALID_PHONE


async def _stored(db_session, reservation_id):
    return await ReservationRepository(db_session).get_by_id(reservation_id)


async def _create(lifecycle, customer_id, pickup="A", destination="B") -> str:
    confirmation = await lifecycle.create_reservation(customer_id, pickup, destination)
    return confirmation.reservation.id


# ── Creation ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_reservation_starts_waiting(lifecycle, db_session, customer_id):
    confirmation = await lifecycle.create_reservation(customer_id, "A", "B")

    reservation = await _stored(db_session, confirmation.reservation.id)
    assert reservation.status == ReservationStatus.WAITING
    assert reservation.driver_id == ""
    assert reservation.price == 0
    assert reservation.customer_id == customer_id
    assert confirmation.reservation.id in confirmation.message


@pytest.mark.asyncio
async def test_create_reservation_unknown_customer(lifecycle, db_session):
    with pytest.raises(CustomerNotFound):
        await lifecycle.create_reservation("nobody", "A", "B")
    assert await ReservationRepository(db_session).scan() == []


# ── Scenario 1: take, then take again ─────────────────────────────────


@pytest.mark.asyncio
async def test_take_then_take_again(lifecycle, db_session, customer_id, driver_id):
    reservation_id = await _create(lifecycle, customer_id)

    confirmation = await lifecycle.driver_take_reservation(driver_id, reservation_id)
    assert confirmation.reservation.status == ReservationStatus.ACCEPTED

    stored = await _stored(db_session, reservation_id)
    assert stored.status == ReservationStatus.ACCEPTED
    assert stored.driver_id == driver_id

    with pytest.raises(InvalidStatusForTransition, match="Accepted"):
        await lifecycle.driver_take_reservation(driver_id, reservation_id)


@pytest.mark.asyncio
async def test_second_driver_take_reports_status(
    lifecycle, registration, db_session, customer_id, driver_id
):
    reservation_id = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(driver_id, reservation_id)
    late = await registration.register_driver("Carol", VALID_PHONE)

    with pytest.raises(InvalidStatusForTransition, match="Accepted"):
        await lifecycle.driver_take_reservation(late, reservation_id)
    with pytest.raises(InvalidStatusForTransition, match="Accepted"):
        await lifecycle.driver_cancel(late, reservation_id)

    stored = await _stored(db_session, reservation_id)
    assert stored.status == ReservationStatus.ACCEPTED
    assert stored.driver_id == driver_id


# ── Scenario 2 / 3: exclusivity ───────────────────────────────────────


@pytest.mark.asyncio
async def test_other_driver_can_take_while_first_is_busy(
    lifecycle, registration, db_session, customer_id, driver_id
):
    first = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(driver_id, first)

    second_driver = await registration.register_driver("Carol", VALID_PHONE)
    second = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(second_driver, second)

    assert (await _stored(db_session, second)).driver_id == second_driver


@pytest.mark.asyncio
async def test_busy_driver_cannot_take_another(lifecycle, db_session, customer_id, driver_id):
    first = await _create(lifecycle, customer_id)
    second = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(driver_id, first)

    with pytest.raises(DriverAlreadyBusy):
        await lifecycle.driver_take_reservation(driver_id, second)

    untouched = await _stored(db_session, second)
    assert untouched.status == ReservationStatus.WAITING
    assert untouched.driver_id == ""


@pytest.mark.asyncio
async def test_driver_on_the_way_is_still_busy(lifecycle, customer_id, driver_id):
    first = await _create(lifecycle, customer_id)
    second = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(driver_id, first)
    await lifecycle.driver_on_the_way(driver_id, first)

    with pytest.raises(DriverAlreadyBusy):
        await lifecycle.driver_take_reservation(driver_id, second)


@pytest.mark.asyncio
async def test_driver_free_again_after_arrival(lifecycle, customer_id, driver_id):
    first = await _create(lifecycle, customer_id)
    second = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(driver_id, first)
    await lifecycle.driver_on_the_way(driver_id, first)
    await lifecycle.driver_arrived(driver_id, first, 10.0)

    confirmation = await lifecycle.driver_take_reservation(driver_id, second)
    assert confirmation.reservation.status == ReservationStatus.ACCEPTED


# ── Scenario 4: arrival requires on-the-way ───────────────────────────


@pytest.mark.asyncio
async def test_arrived_requires_on_the_way(lifecycle, db_session, customer_id, driver_id):
    reservation_id = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(driver_id, reservation_id)

    with pytest.raises(InvalidStatusForTransition, match="Accepted"):
        await lifecycle.driver_arrived(driver_id, reservation_id, 42.5)

    await lifecycle.driver_on_the_way(driver_id, reservation_id)
    await lifecycle.driver_arrived(driver_id, reservation_id, 42.5)

    stored = await _stored(db_session, reservation_id)
    assert stored.status == ReservationStatus.ARRIVED
    assert stored.price == 42.5
    assert stored.driver_id == driver_id


@pytest.mark.asyncio
async def test_repeated_transitions_fail_second_time(lifecycle, customer_id, driver_id):
    reservation_id = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(driver_id, reservation_id)

    await lifecycle.driver_on_the_way(driver_id, reservation_id)
    with pytest.raises(InvalidStatusForTransition, match="On the Way"):
        await lifecycle.driver_on_the_way(driver_id, reservation_id)

    await lifecycle.driver_arrived(driver_id, reservation_id, 5.0)
    with pytest.raises(InvalidStatusForTransition, match="Arrived"):
        await lifecycle.driver_arrived(driver_id, reservation_id, 5.0)


@pytest.mark.asyncio
@pytest.mark.parametrize("price", [-1.0, float("nan"), float("inf")])
async def test_invalid_price_rejected(lifecycle, db_session, customer_id, driver_id, price):
    reservation_id = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(driver_id, reservation_id)
    await lifecycle.driver_on_the_way(driver_id, reservation_id)

    with pytest.raises(InvalidPrice):
        await lifecycle.driver_arrived(driver_id, reservation_id, price)
    assert (await _stored(db_session, reservation_id)).status == ReservationStatus.ON_THE_WAY


# ── Guards ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_unknown_driver(lifecycle, customer_id):
    reservation_id = await _create(lifecycle, customer_id)
    with pytest.raises(DriverNotFound):
        await lifecycle.driver_take_reservation("ghost", reservation_id)


@pytest.mark.asyncio
async def test_unknown_reservation(lifecycle, driver_id):
    with pytest.raises(ReservationNotFound):
        await lifecycle.driver_take_reservation(driver_id, "missing")


@pytest.mark.asyncio
async def test_other_driver_cannot_progress_claimed_reservation(
    lifecycle, registration, db_session, customer_id, driver_id
):
    reservation_id = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(driver_id, reservation_id)
    intruder = await registration.register_driver("Eve", VALID_PHONE)

    with pytest.raises(DriverMismatch):
        await lifecycle.driver_on_the_way(intruder, reservation_id)
    with pytest.raises(DriverMismatch):
        await lifecycle.driver_arrived(intruder, reservation_id, 1.0)
    assert (await _stored(db_session, reservation_id)).status == ReservationStatus.ACCEPTED


@pytest.mark.asyncio
async def test_on_the_way_before_take(lifecycle, customer_id, driver_id):
    reservation_id = await _create(lifecycle, customer_id)
    with pytest.raises(InvalidStatusForTransition, match="Waiting"):
        await lifecycle.driver_on_the_way(driver_id, reservation_id)


# ── Cancellation ──────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_any_driver_can_cancel_waiting(lifecycle, db_session, customer_id, driver_id):
    reservation_id = await _create(lifecycle, customer_id)

    await lifecycle.driver_cancel(driver_id, reservation_id)

    stored = await _stored(db_session, reservation_id)
    assert stored.status == ReservationStatus.CANCELLED
    assert stored.driver_id == ""


@pytest.mark.asyncio
async def test_cancel_after_take_fails(lifecycle, customer_id, driver_id):
    reservation_id = await _create(lifecycle, customer_id)
    await lifecycle.driver_take_reservation(driver_id, reservation_id)

    with pytest.raises(InvalidStatusForTransition, match="Accepted"):
        await lifecycle.driver_cancel(driver_id, reservation_id)


@pytest.mark.asyncio
async def test_cancelled_reservation_cannot_be_taken(lifecycle, customer_id, driver_id):
    reservation_id = await _create(lifecycle, customer_id)
    await lifecycle.driver_cancel(driver_id, reservation_id)

    with pytest.raises(InvalidStatusForTransition, match="Cancelled"):
        await lifecycle.driver_take_reservation(driver_id, reservation_id)


@pytest.mark.asyncio
async def test_customer_cancels_own_waiting_reservation(
    lifecycle, registration, db_session, customer_id
):
    reservation_id = await _create(lifecycle, customer_id)
    stranger = await registration.register_customer("Mallory", VALID_PHONE)

    with pytest.raises(ReservationNotFound):
        await lifecycle.customer_cancel(stranger, reservation_id)
    with pytest.raises(CustomerNotFound):
        await lifecycle.customer_cancel("nobody", reservation_id)

    await lifecycle.customer_cancel(customer_id, reservation_id)
    assert (await _stored(db_session, reservation_id)).status == ReservationStatus.CANCELLED
