"""
Typed failures of the reservation core.

Every expected failure of a registration, lifecycle or query operation is
one of these.  The HTTP layer turns them into ``ErrorResponse`` bodies, so
none of them escapes a request as an unhandled error.
"""

from __future__ import annotations


class ReservationError(Exception):
    """Base class; ``code`` is the stable machine-readable identifier."""

    code = "reservation_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidPhoneNumber(ReservationError):
    code = "invalid_phone_number"

    def __init__(self, phone_number: str):
        super().__init__(f"Phone number {phone_number!r} is not valid")


class InvalidPrice(ReservationError):
    code = "invalid_price"

    def __init__(self, price: float):
        super().__init__(f"Price must be a finite non-negative number, got {price}")


class CustomerNotFound(ReservationError):
    code = "customer_not_found"

    def __init__(self, customer_id: str):
        super().__init__(f"Customer {customer_id} is not registered")


class DriverNotFound(ReservationError):
    code = "driver_not_found"

    def __init__(self, driver_id: str):
        super().__init__(f"Driver {driver_id} is not registered")


class ReservationNotFound(ReservationError):
    code = "reservation_not_found"

    def __init__(self, reservation_id: str):
        super().__init__(f"Reservation {reservation_id} not found")


class DriverMismatch(ReservationError):
    code = "driver_mismatch"

    def __init__(self, driver_id: str, reservation_id: str):
        super().__init__(
            f"Driver {driver_id} is not assigned to reservation {reservation_id}"
        )


class DriverAlreadyBusy(ReservationError):
    code = "driver_already_busy"

    def __init__(self, driver_id: str):
        super().__init__(f"Driver {driver_id} already has an active reservation")


class InvalidStatusForTransition(ReservationError):
    """Raised when a reservation status change violates the state machine."""

    code = "invalid_status_for_transition"

    def __init__(self, current_label: str, target_label: str):
        super().__init__(
            f"Reservation is {current_label}, cannot move to {target_label}"
        )
        self.current_label = current_label
        self.target_label = target_label
