"""
SQLAlchemy ORM models.

Tables
------
* ``customers``     -- registered customers
* ``drivers``       -- registered drivers
* ``reservations``  -- ride reservations and their lifecycle status

Each table is an ordered map keyed by an opaque string id.  ``status`` is
stored as its integer code; ``driver_id`` is NULL until a driver takes the
reservation.

Indexes
-------
* **B-Tree** on ``customer_id``, ``driver_id`` and ``status`` for the
  customer / driver / waiting-queue look-ups.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)

from .database import Base
from ride_reservation.domain.enums import ReservationStatus


class CustomerModel(Base):
    __tablename__ = "customers"

    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False)
    phone_number = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)


class DriverModel(Base):
    __tablename__ = "drivers"

    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False)
    phone_number = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)


class ReservationModel(Base):
    __tablename__ = "reservations"

    id = Column(String(64), primary_key=True)
    customer_id = Column(String(64), ForeignKey("customers.id"), nullable=False)
    pickup_location = Column(Text, nullable=False)
    destination = Column(Text, nullable=False)
    status = Column(
        Integer, default=int(ReservationStatus.WAITING), nullable=False
    )
    price = Column(Float, default=0.0, nullable=False)
    driver_id = Column(String(64), ForeignKey("drivers.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_reservations_customer", "customer_id"),
        Index("idx_reservations_driver", "driver_id"),
        Index("idx_reservations_status", "status"),
    )
