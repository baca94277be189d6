"""
Domain entities with business logic.

Patterns used
-------------
- **State Pattern** on ``Reservation``: enforces valid lifecycle transitions
  (WAITING -> ACCEPTED -> ON_THE_WAY -> ARRIVED | WAITING -> CANCELLED).
- Entities are immutable.  A transition returns an updated copy that the
  repository writes back as a full-record replace.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from .enums import ACTIVE_STATUSES, RESERVATION_TRANSITIONS, ReservationStatus, status_label
from .errors import InvalidStatusForTransition


# ── Parties ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    phone_number: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Driver:
    id: str
    name: str
    phone_number: str
    created_at: Optional[datetime] = None


# ── Reservation ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class Reservation:
    id: str
    customer_id: str
    pickup_location: str
    destination: str
    status: ReservationStatus = ReservationStatus.WAITING
    price: float = 0.0
    driver_id: str = ""
    created_at: Optional[datetime] = None

    @property
    def status_label(self) -> str:
        return status_label(self.status)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def has_driver(self) -> bool:
        return self.driver_id != ""

    def transition_to(self, new_status: ReservationStatus, **changes) -> Reservation:
        """Return a copy in *new_status* if the transition is legal, else raise."""
        allowed = RESERVATION_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise InvalidStatusForTransition(
                status_label(self.status), status_label(new_status)
            )
        return replace(self, status=new_status, **changes)
