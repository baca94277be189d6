"""Unit-of-work plumbing shared by the write services."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ride_reservation.domain.errors import ReservationError
from ride_reservation.domain.identifiers import Clock, IdGenerator, UUIDGenerator, utc_now
from ride_reservation.infrastructure.locks import local_write_lock

logger = logging.getLogger(__name__)


class WriteService:
    """
    Base for services that mutate the entity store.

    ``lock`` serialises whole operations; ``id_generator`` and ``clock`` are
    the injected collaborators for new records.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        lock: Optional[AsyncContextManager] = None,
        id_generator: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ):
        self.session = session
        self.lock = lock if lock is not None else local_write_lock()
        self.id_generator = id_generator or UUIDGenerator()
        self.clock = clock or utc_now

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Run the body under the write lock; commit on success, rollback on error."""
        async with self.lock:
            try:
                yield
                await self.session.commit()
            except ReservationError as exc:
                logger.info("Operation rejected: %s (%s)", exc.code, exc.message)
                await self.session.rollback()
                raise
            except Exception:
                await self.session.rollback()
                raise
