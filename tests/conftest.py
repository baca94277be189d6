"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL / Redis.  The production models are plain columns, so
the same metadata is created here.
"""

import asyncio
import os
from typing import AsyncGenerator

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ride_reservation.infrastructure import models  # noqa: F401
from ride_reservation.infrastructure.database import Base
from ride_reservation.services.lifecycle import ReservationLifecycle
from ride_reservation.services.queries import ReservationQueries
from ride_reservation.services.registration import RegistrationService

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

VALID_PHONE = "+1234567890"


class SequentialIds:
    """Deterministic id generator: ``<prefix>-0001``, ``<prefix>-0002`` ..."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        self.issued = 0

    def next_id(self) -> str:
        self.issued += 1
        return f"{self.prefix}-{self.issued:04d}"


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh in-memory database per test; all sessions share one connection."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def write_lock() -> asyncio.Lock:
    return asyncio.Lock()


@pytest.fixture
def registration(db_session, write_lock) -> RegistrationService:
    return RegistrationService(
        db_session, lock=write_lock, id_generator=SequentialIds("party")
    )


@pytest.fixture
def lifecycle(db_session, write_lock) -> ReservationLifecycle:
    return ReservationLifecycle(
        db_session, lock=write_lock, id_generator=SequentialIds("res")
    )


@pytest.fixture
def queries(db_session) -> ReservationQueries:
    return ReservationQueries(db_session)


@pytest_asyncio.fixture
async def customer_id(registration) -> str:
    return await registration.register_customer("Alice", VALID_PHONE)


@pytest_asyncio.fixture
async def driver_id(registration) -> str:
    return await registration.register_driver("Bob", VALID_PHONE)
