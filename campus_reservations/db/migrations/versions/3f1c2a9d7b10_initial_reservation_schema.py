"""Initial reservation schema

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


revision = "3f1c2a9d7b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "venues",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint("capacity > 0", name="check_venue_capacity_positive"),
    )
    op.create_index("ix_venues_id", "venues", ["id"])
    op.create_index("ix_venues_type", "venues", ["type"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("venue_id", sa.Integer(), sa.ForeignKey("venues.id"), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("owner_name", sa.String(), nullable=True),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("purpose", sa.String(), nullable=False),
        sa.Column("event_name", sa.String(), nullable=True),
        sa.Column("booking_type", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="CONFIRMED"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("cancelled_at", sa.DateTime(), nullable=True),
        sa.Column("cancelled_by", sa.String(), nullable=True),
        sa.CheckConstraint("end_time > start_time", name="check_booking_interval"),
        sa.CheckConstraint("status IN ('CONFIRMED', 'CANCELLED')", name="check_booking_status"),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_owner_id", "bookings", ["owner_id"])
    op.create_index(
        "ix_bookings_venue_date_status", "bookings", ["venue_id", "booking_date", "status"]
    )

    op.create_table(
        "venue_day_locks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("venue_id", sa.Integer(), sa.ForeignKey("venues.id"), nullable=False),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("venue_id", "booking_date", name="uq_venue_day_lock"),
    )
    op.create_index("ix_venue_day_locks_id", "venue_day_locks", ["id"])

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("club_id", sa.String(), nullable=False),
        sa.Column("event_name", sa.String(), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=True),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column("registration_form_link", sa.String(), nullable=True),
        sa.Column("intake_flow", sa.String(), nullable=False),
        sa.Column("hidden", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_events_id", "events", ["id"])
    op.create_index("ix_events_club_id", "events", ["club_id"])

    op.create_table(
        "registrations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="APPLIED"),
        sa.Column("form_data", sa.JSON(), nullable=True),
        sa.Column("submission_date", sa.DateTime(), nullable=False),
        sa.Column("decided_by", sa.String(), nullable=True),
        sa.Column("decided_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("user_id", "event_id", name="uq_user_event_registration"),
        sa.CheckConstraint(
            "status IN ('APPLIED', 'APPROVED', 'REJECTED')", name="check_registration_status"
        ),
    )
    op.create_index("ix_registrations_id", "registrations", ["id"])
    op.create_index("ix_registrations_user_id", "registrations", ["user_id"])
    op.create_index("ix_registrations_event_id", "registrations", ["event_id"])

    # PostgreSQL backstop: no two CONFIRMED bookings of one venue may overlap
    if op.get_bind().dialect.name == "postgresql":
        op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
        op.execute(
            """
            ALTER TABLE bookings
            ADD CONSTRAINT bookings_no_overlap_per_venue
            EXCLUDE USING gist (
                venue_id WITH =,
                tsrange(booking_date + start_time, booking_date + end_time, '[)') WITH &&
            )
            WHERE (status = 'CONFIRMED')
            """
        )


def downgrade():
    if op.get_bind().dialect.name == "postgresql":
        op.execute("ALTER TABLE bookings DROP CONSTRAINT IF EXISTS bookings_no_overlap_per_venue")

    op.drop_table("registrations")
    op.drop_table("events")
    op.drop_table("venue_day_locks")
    op.drop_table("bookings")
    op.drop_table("venues")
