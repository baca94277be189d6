"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ride_reservation.domain.entities import Reservation


# ── Requests ──────────────────────────────────────────────────────────


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    phone_number: str = Field(..., max_length=32)


class ReservationCreateRequest(BaseModel):
    pickup_location: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)


class ArrivedRequest(BaseModel):
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Final fare for the ride.")


# ── Responses ─────────────────────────────────────────────────────────


class RegisteredResponse(BaseModel):
    id: str


class PartyResponse(BaseModel):
    id: str
    name: str
    phone_number: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ReservationResponse(BaseModel):
    id: str
    customer_id: str
    pickup_location: str
    destination: str
    status: int
    status_label: str
    price: float
    driver_id: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, reservation: Reservation) -> ReservationResponse:
        return cls(
            id=reservation.id,
            customer_id=reservation.customer_id,
            pickup_location=reservation.pickup_location,
            destination=reservation.destination,
            status=int(reservation.status),
            status_label=reservation.status_label,
            price=reservation.price,
            driver_id=reservation.driver_id,
            created_at=reservation.created_at,
        )


class ConfirmationResponse(BaseModel):
    message: str
    reservation: ReservationResponse

    @classmethod
    def from_confirmation(cls, confirmation) -> ConfirmationResponse:
        return cls(
            message=confirmation.message,
            reservation=ReservationResponse.from_entity(confirmation.reservation),
        )


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    error: str
    detail: str
