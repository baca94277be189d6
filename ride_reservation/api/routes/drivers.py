"""
Driver endpoints
================

POST  /api/v1/drivers                                           -- register
GET   /api/v1/drivers/{driver_id}                               -- profile
GET   /api/v1/drivers/{driver_id}/reservations                  -- reservations assigned to the driver
GET   /api/v1/drivers/{driver_id}/waiting-reservations          -- global waiting queue
PATCH /api/v1/drivers/{driver_id}/reservations/{id}/take        -- WAITING -> ACCEPTED
PATCH /api/v1/drivers/{driver_id}/reservations/{id}/on-the-way  -- ACCEPTED -> ON_THE_WAY
PATCH /api/v1/drivers/{driver_id}/reservations/{id}/arrived     -- ON_THE_WAY -> ARRIVED
PATCH /api/v1/drivers/{driver_id}/reservations/{id}/cancel      -- WAITING -> CANCELLED
"""

from fastapi import APIRouter, Depends, Request

from ride_reservation.api.dependencies import (
    get_lifecycle,
    get_queries,
    get_registration_service,
)
from ride_reservation.api.middleware import limiter
from ride_reservation.api.schemas import (
    ArrivedRequest,
    ConfirmationResponse,
    PartyResponse,
    RegisteredResponse,
    RegisterRequest,
    ReservationResponse,
)
from ride_reservation.config import settings
from ride_reservation.services.lifecycle import ReservationLifecycle
from ride_reservation.services.queries import ReservationQueries
from ride_reservation.services.registration import RegistrationService

router = APIRouter(prefix="/drivers", tags=["drivers"])


@router.post(
    "",
    status_code=201,
    response_model=RegisteredResponse,
    summary="Register a driver",
)
@limiter.limit(settings.rate_limit)
async def register_driver(
    request: Request,
    body: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    driver_id = await service.register_driver(body.name, body.phone_number)
    return RegisteredResponse(id=driver_id)


@router.get(
    "/{driver_id}",
    response_model=PartyResponse,
    summary="Get a driver profile",
)
@limiter.limit(settings.rate_limit)
async def get_driver(
    request: Request,
    driver_id: str,
    queries: ReservationQueries = Depends(get_queries),
):
    return await queries.get_driver(driver_id)


@router.get(
    "/{driver_id}/reservations",
    response_model=list[ReservationResponse],
    summary="List reservations assigned to the driver",
)
@limiter.limit(settings.rate_limit)
async def list_reservations(
    request: Request,
    driver_id: str,
    queries: ReservationQueries = Depends(get_queries),
):
    reservations = await queries.list_reservations_for_driver(driver_id)
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.get(
    "/{driver_id}/waiting-reservations",
    response_model=list[ReservationResponse],
    summary="List every reservation waiting for a driver",
)
@limiter.limit(settings.rate_limit)
async def list_waiting_reservations(
    request: Request,
    driver_id: str,
    queries: ReservationQueries = Depends(get_queries),
):
    reservations = await queries.list_waiting_reservations(driver_id)
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.patch(
    "/{driver_id}/reservations/{reservation_id}/take",
    response_model=ConfirmationResponse,
    summary="Take a waiting reservation",
    description="Fails with 409 if the driver already has an accepted or on-the-way reservation.",
)
@limiter.limit(settings.rate_limit)
async def take_reservation(
    request: Request,
    driver_id: str,
    reservation_id: str,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    confirmation = await lifecycle.driver_take_reservation(driver_id, reservation_id)
    return ConfirmationResponse.from_confirmation(confirmation)


@router.patch(
    "/{driver_id}/reservations/{reservation_id}/on-the-way",
    response_model=ConfirmationResponse,
    summary="Mark the driver as on the way",
)
@limiter.limit(settings.rate_limit)
async def on_the_way(
    request: Request,
    driver_id: str,
    reservation_id: str,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    confirmation = await lifecycle.driver_on_the_way(driver_id, reservation_id)
    return ConfirmationResponse.from_confirmation(confirmation)


@router.patch(
    "/{driver_id}/reservations/{reservation_id}/arrived",
    response_model=ConfirmationResponse,
    summary="Complete the ride and record its price",
)
@limiter.limit(settings.rate_limit)
async def arrived(
    request: Request,
    driver_id: str,
    reservation_id: str,
    body: ArrivedRequest,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    confirmation = await lifecycle.driver_arrived(driver_id, reservation_id, body.price)
    return ConfirmationResponse.from_confirmation(confirmation)


@router.patch(
    "/{driver_id}/reservations/{reservation_id}/cancel",
    response_model=ConfirmationResponse,
    summary="Cancel a waiting reservation",
)
@limiter.limit(settings.rate_limit)
async def cancel_reservation(
    request: Request,
    driver_id: str,
    reservation_id: str,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    confirmation = await lifecycle.driver_cancel(driver_id, reservation_id)
    return ConfirmationResponse.from_confirmation(confirmation)
