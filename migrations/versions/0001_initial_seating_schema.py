"""initial seating schema

Revision ID: 0001
Revises:
Create Date: 2024-05-01 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

room_type = sa.Enum(
    "GENERAL", "BALLROOM", "CONFERENCE", "THEATER", "BANQUET", "OUTDOOR",
    name="roomtype"
)
seat_category = sa.Enum(
    "STANDARD", "VIP", "ACCESSIBLE", "PREMIUM", "ECONOMY", "STANDING",
    name="seatcategory"
)
seat_status = sa.Enum(
    "AVAILABLE", "OCCUPIED", "RESERVED", "BLOCKED", "MAINTENANCE",
    name="seatstatus"
)


def _base_columns():
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "events",
        *_base_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    )
    op.create_index("ix_events_id", "events", ["id"])
    op.create_index("ix_events_name", "events", ["name"])
    op.create_index("ix_events_owner_id", "events", ["owner_id"])

    op.create_table(
        "guests",
        *_base_columns(),
        sa.Column("event_id", sa.Uuid(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
    )
    op.create_index("ix_guests_id", "guests", ["id"])
    op.create_index("ix_guests_event_id", "guests", ["event_id"])
    op.create_index("ix_guests_email", "guests", ["email"])

    op.create_table(
        "venues",
        *_base_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("state", sa.String(100), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("postal_code", sa.String(20), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("website", sa.String(255), nullable=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.UniqueConstraint("owner_id", "name", name="uq_venues_owner_name"),
    )
    op.create_index("ix_venues_id", "venues", ["id"])
    op.create_index("ix_venues_name", "venues", ["name"])
    op.create_index("ix_venues_owner_id", "venues", ["owner_id"])
    op.create_index("ix_venues_is_public", "venues", ["is_public"])

    op.create_table(
        "rooms",
        *_base_columns(),
        sa.Column("venue_id", sa.Uuid(), sa.ForeignKey("venues.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("floor", sa.Integer(), nullable=False),
        sa.Column("room_type", room_type, nullable=False),
        sa.UniqueConstraint("venue_id", "name", name="uq_rooms_venue_name"),
        sa.CheckConstraint("capacity > 0", name="ck_rooms_capacity_positive"),
        sa.CheckConstraint("floor >= 0", name="ck_rooms_floor_non_negative"),
    )
    op.create_index("ix_rooms_id", "rooms", ["id"])
    op.create_index("ix_rooms_venue_id", "rooms", ["venue_id"])

    op.create_table(
        "seats",
        *_base_columns(),
        sa.Column("room_id", sa.Uuid(), sa.ForeignKey("rooms.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("event_id", sa.Uuid(), sa.ForeignKey("events.id", ondelete="SET NULL"), nullable=True),
        sa.Column("row", sa.String(10), nullable=False),
        sa.Column("number", sa.String(10), nullable=False),
        sa.Column("category", seat_category, nullable=False),
        sa.Column("status", seat_status, nullable=False),
        sa.Column("x", sa.Float(), nullable=False),
        sa.Column("y", sa.Float(), nullable=False),
        sa.Column("width", sa.Float(), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        sa.Column("rotation", sa.Float(), nullable=False),
        sa.Column(
            "occupant_guest_id", sa.Uuid(),
            sa.ForeignKey("guests.id", ondelete="RESTRICT"),
            nullable=True
        ),
        sa.UniqueConstraint("room_id", "row", "number", name="uq_seats_room_row_number"),
        sa.UniqueConstraint("occupant_guest_id", name="uq_seats_occupant_guest_id"),
        sa.CheckConstraint("width > 0", name="ck_seats_width_positive"),
        sa.CheckConstraint("height > 0", name="ck_seats_height_positive"),
    )
    op.create_index("ix_seats_id", "seats", ["id"])
    op.create_index("ix_seats_room_id", "seats", ["room_id"])
    op.create_index("ix_seats_event_id", "seats", ["event_id"])
    op.create_index("ix_seats_status", "seats", ["status"])

    op.create_table(
        "seating_assignments",
        *_base_columns(),
        sa.Column("event_id", sa.Uuid(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("guest_id", sa.Uuid(), sa.ForeignKey("guests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("seat_id", sa.Uuid(), sa.ForeignKey("seats.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("assigned_by", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.UniqueConstraint("event_id", "seat_id", name="uq_seating_assignments_event_seat"),
        sa.UniqueConstraint("event_id", "guest_id", name="uq_seating_assignments_event_guest"),
    )
    op.create_index("ix_seating_assignments_id", "seating_assignments", ["id"])
    op.create_index("ix_seating_assignments_event_id", "seating_assignments", ["event_id"])
    op.create_index("ix_seating_assignments_guest_id", "seating_assignments", ["guest_id"])
    op.create_index("ix_seating_assignments_seat_id", "seating_assignments", ["seat_id"])


def downgrade() -> None:
    op.drop_table("seating_assignments")
    op.drop_table("seats")
    op.drop_table("rooms")
    op.drop_table("venues")
    op.drop_table("guests")
    op.drop_table("events")
    op.drop_table("users")

    bind = op.get_bind()
    seat_status.drop(bind, checkfirst=True)
    seat_category.drop(bind, checkfirst=True)
    room_type.drop(bind, checkfirst=True)
