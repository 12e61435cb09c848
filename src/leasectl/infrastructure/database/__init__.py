"""SQLite database engine, schema, and counters via SQLAlchemy Core."""

from leasectl.infrastructure.database.counters import (
    AGREEMENT_COUNT,
    increment_counter,
    read_counter,
)
from leasectl.infrastructure.database.engine import create_db_engine, init_database
from leasectl.infrastructure.database.schema import agreements, counters, event_wal, metadata

__all__ = [
    "AGREEMENT_COUNT",
    "agreements",
    "counters",
    "create_db_engine",
    "event_wal",
    "increment_counter",
    "init_database",
    "metadata",
    "read_counter",
]
