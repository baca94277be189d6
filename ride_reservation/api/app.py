"""
FastAPI application factory.

* Registers routes for customers, drivers and admin.
* Maps every ``ReservationError`` to a JSON ``ErrorResponse``.
* Reports a write-lock timeout as 503.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ride_reservation.api.middleware import limiter
from ride_reservation.api.routes import admin, customers, drivers
from ride_reservation.api.schemas import ErrorResponse
from ride_reservation.config import settings
from ride_reservation.domain import errors
from ride_reservation.infrastructure.database import create_tables
from ride_reservation.infrastructure.locks import LockTimeout

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[errors.ReservationError], int] = {
    errors.InvalidPhoneNumber: 422,
    errors.InvalidPrice: 422,
    errors.CustomerNotFound: 404,
    errors.DriverNotFound: 404,
    errors.ReservationNotFound: 404,
    errors.DriverMismatch: 403,
    errors.DriverAlreadyBusy: 409,
    errors.InvalidStatusForTransition: 409,
}


async def reservation_error_handler(
    request: Request, exc: errors.ReservationError
) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), 400)
    body = ErrorResponse(error=exc.code, detail=exc.message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def lock_timeout_handler(request: Request, exc: LockTimeout) -> JSONResponse:
    body = ErrorResponse(error="lock_timeout", detail=str(exc))
    return JSONResponse(status_code=503, content=body.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Optionally create tables on startup (local development)."""
    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables ensured")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Ride Reservation API",
        description=(
            "Customers book rides; drivers take a waiting reservation and "
            "move it through accepted, on the way and arrived.  A driver "
            "holds at most one active reservation at a time."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain failures
    app.add_exception_handler(errors.ReservationError, reservation_error_handler)
    app.add_exception_handler(LockTimeout, lock_timeout_handler)

    # Routers
    app.include_router(customers.router, prefix="/api/v1")
    app.include_router(drivers.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
