"""Initial schema: customers, drivers and reservations.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── customers ─────────────────────────────────────────────────────
    op.create_table(
        "customers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("phone_number", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # ── drivers ───────────────────────────────────────────────────────
    op.create_table(
        "drivers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("phone_number", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # ── reservations ──────────────────────────────────────────────────
    op.create_table(
        "reservations",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "customer_id",
            sa.String(64),
            sa.ForeignKey("customers.id"),
            nullable=False,
        ),
        sa.Column("pickup_location", sa.Text, nullable=False),
        sa.Column("destination", sa.Text, nullable=False),
        # 0 Waiting, 1 Accepted, 2 On the Way, 3 Arrived, 4 Cancelled
        sa.Column("status", sa.Integer, default=0, nullable=False),
        sa.Column("price", sa.Float, default=0.0, nullable=False),
        sa.Column(
            "driver_id",
            sa.String(64),
            sa.ForeignKey("drivers.id"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_reservations_customer", "reservations", ["customer_id"])
    op.create_index("idx_reservations_driver", "reservations", ["driver_id"])
    op.create_index("idx_reservations_status", "reservations", ["status"])


def downgrade() -> None:
    op.drop_table("reservations")
    op.drop_table("drivers")
    op.drop_table("customers")
