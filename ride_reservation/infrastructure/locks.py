"""
Write-serialisation locks.

Every write operation (registration, reservation creation, lifecycle
transition) runs its read-check-write sequence while holding one of these,
so the driver-exclusivity and status guards cannot race.

* ``local``  -- a single process-wide ``asyncio.Lock``.  Enough when one
  API process owns the database.
* ``redis``  -- ``DistributedLock`` for several API processes sharing one
  database.  Acquire uses SET NX EX (polled until a timeout); release uses a
  Lua script for atomic check-and-delete.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

WRITE_LOCK_KEY = "reservations:write"


class LockTimeout(RuntimeError):
    """Raised when a lock could not be acquired in time."""


class DistributedLock:
    def __init__(
        self,
        client: aioredis.Redis,
        key: str,
        ttl_seconds: int = 10,
        timeout_seconds: float = 0.0,
        poll_interval: float = 0.05,
    ):
        self.redis = client
        self.key = f"lock:{key}"
        self.ttl = ttl_seconds
        self.timeout = timeout_seconds
        self.poll_interval = poll_interval
        self.token = str(uuid.uuid4())

    async def acquire(self) -> bool:
        """Try once to acquire. Returns True on success."""
        return bool(
            await self.redis.set(self.key, self.token, nx=True, ex=self.ttl)
        )

    async def acquire_blocking(self) -> bool:
        """Poll until acquired or ``timeout`` elapses."""
        deadline = time.monotonic() + self.timeout
        while True:
            if await self.acquire():
                return True
            if time.monotonic() >= deadline:
                return False
            await asyncio.sleep(self.poll_interval)

    async def release(self) -> None:
        """Release only if we still own the lock (atomic via Lua)."""
        lua = """
        if redis.call("get", KEYS[1]) == ARGV[1] then
            return redis.call("del", KEYS[1])
        else
            return 0
        end
        """
        await self.redis.eval(lua, 1, self.key, self.token)

    # context-manager support
    async def __aenter__(self):
        acquired = await self.acquire_blocking()
        if not acquired:
            logger.warning("Timed out waiting for lock %s", self.key)
            raise LockTimeout(f"Could not acquire lock: {self.key}")
        return self

    async def __aexit__(self, *args):
        await self.release()


_local_write_lock = asyncio.Lock()


def local_write_lock() -> asyncio.Lock:
    """The process-wide lock shared by every request in this process."""
    return _local_write_lock
