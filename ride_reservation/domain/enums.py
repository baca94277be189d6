"""Domain enumerations and state-transition rules."""

import enum


class ReservationStatus(enum.IntEnum):
    WAITING = 0
    ACCEPTED = 1
    ON_THE_WAY = 2
    ARRIVED = 3
    CANCELLED = 4


# State machine: maps current status -> set of valid next statuses
RESERVATION_TRANSITIONS: dict[ReservationStatus, set[ReservationStatus]] = {
    ReservationStatus.WAITING: {ReservationStatus.ACCEPTED, ReservationStatus.CANCELLED},
    ReservationStatus.ACCEPTED: {ReservationStatus.ON_THE_WAY},
    ReservationStatus.ON_THE_WAY: {ReservationStatus.ARRIVED},
    ReservationStatus.ARRIVED: set(),
    ReservationStatus.CANCELLED: set(),
}

# A driver holding a reservation in one of these cannot take another.
ACTIVE_STATUSES = frozenset({ReservationStatus.ACCEPTED, ReservationStatus.ON_THE_WAY})

_LABELS = {
    ReservationStatus.WAITING: "Waiting",
    ReservationStatus.ACCEPTED: "Accepted",
    ReservationStatus.ON_THE_WAY: "On the Way",
    ReservationStatus.ARRIVED: "Arrived",
    ReservationStatus.CANCELLED: "Cancelled",
}


def status_label(status: ReservationStatus) -> str:
    """Human-readable label used in messages and API responses."""
    return _LABELS[ReservationStatus(status)]
