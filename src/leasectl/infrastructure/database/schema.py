"""SQLAlchemy Core table definitions for the leasectl database.

``agreements`` is keyed by the caller-supplied ``agreement_id``.
``counters`` holds named running totals (``agreement_count``).
``event_wal`` is the durable outbox for lifecycle notifications.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text

metadata = MetaData()

agreements = Table(
    "agreements",
    metadata,
    Column("agreement_id", Text, primary_key=True),
    Column("landlord", Text, nullable=False),
    Column("tenant", Text, nullable=False),
    Column("agent", Text),  # NULL when no broker is involved
    Column("monthly_rent", Integer, nullable=False),
    Column("security_deposit", Integer, nullable=False),
    Column("start_date", Integer, nullable=False),
    Column("end_date", Integer, nullable=False),
    Column("agent_commission_rate", Integer, nullable=False),
    Column("status", Text, nullable=False),
    # Bookkeeping (DB-only, not part of the record)
    Column("sequence", Integer, nullable=False, unique=True),
    Column("created_at", Text, nullable=False),
)

Index("ix_agreements_landlord", agreements.c.landlord)
Index("ix_agreements_tenant", agreements.c.tenant)
Index("ix_agreements_agent", agreements.c.agent)
Index("ix_agreements_status", agreements.c.status)

counters = Table(
    "counters",
    metadata,
    Column("name", Text, primary_key=True),
    Column("value", Integer, nullable=False, default=0, server_default="0"),
)

event_wal = Table(
    "event_wal",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("hook_name", Text, nullable=False),
    Column("payload", Text, nullable=False),  # JSON
    Column("status", Text, nullable=False),
    Column("error", Text),
    Column("retries", Integer, default=0, server_default="0"),
    Column("created", Text, nullable=False),
    Column("completed", Text),
)

Index("ix_event_wal_status", event_wal.c.status)
