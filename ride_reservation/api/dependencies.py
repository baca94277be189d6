"""FastAPI dependency injection helpers."""

from typing import AsyncContextManager

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ride_reservation.config import settings
from ride_reservation.infrastructure.database import async_session_factory
from ride_reservation.infrastructure.locks import (
    WRITE_LOCK_KEY,
    DistributedLock,
    local_write_lock,
)
from ride_reservation.infrastructure.redis_client import get_redis
from ride_reservation.services.lifecycle import ReservationLifecycle
from ride_reservation.services.queries import ReservationQueries
from ride_reservation.services.registration import RegistrationService


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_write_lock() -> AsyncContextManager:
    """The lock that serialises write operations, per ``settings.lock_backend``."""
    if settings.lock_backend == "redis":
        return DistributedLock(
            await get_redis(),
            WRITE_LOCK_KEY,
            ttl_seconds=settings.lock_ttl_seconds,
            timeout_seconds=settings.lock_timeout_seconds,
        )
    return local_write_lock()


def get_registration_service(
    db: AsyncSession = Depends(get_db),
    lock: AsyncContextManager = Depends(get_write_lock),
) -> RegistrationService:
    return RegistrationService(db, lock=lock)


def get_lifecycle(
    db: AsyncSession = Depends(get_db),
    lock: AsyncContextManager = Depends(get_write_lock),
) -> ReservationLifecycle:
    return ReservationLifecycle(db, lock=lock)


def get_queries(db: AsyncSession = Depends(get_db)) -> ReservationQueries:
    return ReservationQueries(db)
