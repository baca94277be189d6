"""Customer and driver registration."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .base import WriteService
from ride_reservation.domain.entities import Customer, Driver
from ride_reservation.domain.errors import InvalidPhoneNumber
from ride_reservation.domain.validation import is_valid_phone_number
from ride_reservation.infrastructure.repositories import (
    CustomerRepository,
    DriverRepository,
)

logger = logging.getLogger(__name__)


class RegistrationService(WriteService):
    def __init__(
        self,
        session,
        *,
        phone_validator: Optional[Callable[[str], bool]] = None,
        **kwargs,
    ):
        super().__init__(session, **kwargs)
        self.phone_validator = phone_validator or is_valid_phone_number
        self.customers = CustomerRepository(session)
        self.drivers = DriverRepository(session)

    def _check_phone(self, phone_number: str) -> None:
        if not self.phone_validator(phone_number):
            logger.info("Registration rejected: invalid phone %r", phone_number)
            raise InvalidPhoneNumber(phone_number)

    async def register_customer(self, name: str, phone_number: str) -> str:
        self._check_phone(phone_number)
        async with self.atomic():
            customer = await self.customers.insert(
                Customer(
                    id=self.id_generator.next_id(),
                    name=name,
                    phone_number=phone_number,
                    created_at=self.clock(),
                )
            )
        logger.info("Registered customer %s", customer.id)
        return customer.id

    async def register_driver(self, name: str, phone_number: str) -> str:
        self._check_phone(phone_number)
        async with self.atomic():
            driver = await self.drivers.insert(
                Driver(
                    id=self.id_generator.next_id(),
                    name=name,
                    phone_number=phone_number,
                    created_at=self.clock(),
                )
            )
        logger.info("Registered driver %s", driver.id)
        return driver.id
