"""
Identifier and clock collaborators.

Services receive both at construction so tests can swap in deterministic
versions.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable, Protocol

Clock = Callable[[], datetime]


class IdGenerator(Protocol):
    def next_id(self) -> str: ...


class UUIDGenerator:
    """Globally unique opaque ids (random UUID4)."""

    def next_id(self) -> str:
        return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
