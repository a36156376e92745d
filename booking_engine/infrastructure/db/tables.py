from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

room_types = Table(
    "room_types",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("business_unit_id", String(64), nullable=False, index=True),
    Column("display_name", String(150), nullable=False),
    Column("description", Text),
    Column("max_occupancy", Integer, nullable=False),
    Column("max_adults", Integer, nullable=False),
    Column("max_children", Integer, nullable=False),
    Column("base_rate", Numeric(12, 2), nullable=False),
    Column("currency_code", String(3), nullable=False),
    Column("base_occupancy", Integer),
    Column("extra_adult_rate", Numeric(12, 2), nullable=False, default=0),
    Column("extra_child_rate", Numeric(12, 2), nullable=False, default=0),
    Column("is_active", Boolean, nullable=False, default=True),
)

rooms = Table(
    "rooms",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("business_unit_id", String(64), nullable=False),
    Column("room_type_id", String(64), ForeignKey("room_types.id"), nullable=False),
    Column("room_number", String(20)),
    Column("status", String(20), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Index("ix_rooms_type_status", "room_type_id", "status"),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("business_unit_id", String(64), nullable=False),
    Column("room_type_id", String(64), ForeignKey("room_types.id"), nullable=False),
    Column("confirmation_number", String(50), unique=True),
    Column("first_name", String(150), nullable=False),
    Column("last_name", String(150), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(50), nullable=False),
    Column("special_requests", Text),
    Column("guest_notes", Text),
    Column("check_in_date", Date, nullable=False),
    Column("check_out_date", Date, nullable=False),
    Column("adults", Integer, nullable=False),
    Column("children", Integer, nullable=False),
    Column("nights", Integer, nullable=False),
    Column("subtotal", Numeric(12, 2), nullable=False),
    Column("taxes", Numeric(12, 2), nullable=False),
    Column("service_fee", Numeric(12, 2), nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("currency_code", String(3), nullable=False),
    Column("status", String(32), nullable=False),
    Column("payment_session_id", String(255)),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
    Index("ix_bookings_type_dates", "room_type_id", "check_in_date", "check_out_date"),
)

payment_sessions = Table(
    "payment_sessions",
    metadata,
    Column("session_id", String(255), primary_key=True),
    Column("booking_id", String(64), ForeignKey("bookings.id"), nullable=False, unique=True),
    Column("checkout_url", Text, nullable=False),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("currency_code", String(3), nullable=False),
    Column("provider", String(32), nullable=False),
    Column("status", String(32), nullable=False),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
    Column("processed_at", DateTime(timezone=True)),
)
