"""
Customer endpoints
==================

POST  /api/v1/customers                                         -- register
GET   /api/v1/customers/{customer_id}                           -- profile
POST  /api/v1/customers/{customer_id}/reservations              -- create reservation
GET   /api/v1/customers/{customer_id}/reservations              -- list own reservations
GET   /api/v1/customers/{customer_id}/reservations/{id}         -- one reservation
PATCH /api/v1/customers/{customer_id}/reservations/{id}/cancel  -- cancel while waiting
"""

from fastapi import APIRouter, Depends, Request

from ride_reservation.api.dependencies import (
    get_lifecycle,
    get_queries,
    get_registration_service,
)
from ride_reservation.api.middleware import limiter
from ride_reservation.api.schemas import (
    ConfirmationResponse,
    PartyResponse,
    RegisteredResponse,
    RegisterRequest,
    ReservationCreateRequest,
    ReservationResponse,
)
from ride_reservation.config import settings
from ride_reservation.services.lifecycle import ReservationLifecycle
from ride_reservation.services.queries import ReservationQueries
from ride_reservation.services.registration import RegistrationService

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post(
    "",
    status_code=201,
    response_model=RegisteredResponse,
    summary="Register a customer",
)
@limiter.limit(settings.rate_limit)
async def register_customer(
    request: Request,
    body: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    customer_id = await service.register_customer(body.name, body.phone_number)
    return RegisteredResponse(id=customer_id)


@router.get(
    "/{customer_id}",
    response_model=PartyResponse,
    summary="Get a customer profile",
)
@limiter.limit(settings.rate_limit)
async def get_customer(
    request: Request,
    customer_id: str,
    queries: ReservationQueries = Depends(get_queries),
):
    return await queries.get_customer(customer_id)


@router.post(
    "/{customer_id}/reservations",
    status_code=201,
    response_model=ConfirmationResponse,
    summary="Create a ride reservation",
)
@limiter.limit(settings.rate_limit)
async def create_reservation(
    request: Request,
    customer_id: str,
    body: ReservationCreateRequest,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    confirmation = await lifecycle.create_reservation(
        customer_id, body.pickup_location, body.destination
    )
    return ConfirmationResponse.from_confirmation(confirmation)


@router.get(
    "/{customer_id}/reservations",
    response_model=list[ReservationResponse],
    summary="List the customer's reservations",
)
@limiter.limit(settings.rate_limit)
async def list_reservations(
    request: Request,
    customer_id: str,
    queries: ReservationQueries = Depends(get_queries),
):
    reservations = await queries.list_reservations_for_customer(customer_id)
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.get(
    "/{customer_id}/reservations/{reservation_id}",
    response_model=ReservationResponse,
    summary="Get one of the customer's reservations",
)
@limiter.limit(settings.rate_limit)
async def get_reservation(
    request: Request,
    customer_id: str,
    reservation_id: str,
    queries: ReservationQueries = Depends(get_queries),
):
    reservation = await queries.get_reservation_for_customer(customer_id, reservation_id)
    return ReservationResponse.from_entity(reservation)


@router.patch(
    "/{customer_id}/reservations/{reservation_id}/cancel",
    response_model=ConfirmationResponse,
    summary="Cancel a waiting reservation",
    description="Only reservations still WAITING for a driver can be cancelled.",
)
@limiter.limit(settings.rate_limit)
async def cancel_reservation(
    request: Request,
    customer_id: str,
    reservation_id: str,
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    confirmation = await lifecycle.customer_cancel(customer_id, reservation_id)
    return ConfirmationResponse.from_confirmation(confirmation)
