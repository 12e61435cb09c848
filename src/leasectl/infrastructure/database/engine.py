"""Database engine setup for SQLite with WAL mode.

The ledger lives at ``{data_root}/.leasectl/{db_name}``. SQLAlchemy Core
(not ORM) is used: every operation is a short, explicit transaction.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Engine

from leasectl.infrastructure.database.counters import KNOWN_COUNTERS
from leasectl.infrastructure.database.schema import counters, metadata

DEFAULT_DB_NAME = "ledger.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(data_root: Path, *, db_name: str = DEFAULT_DB_NAME) -> Engine:
    """Initialize the ledger database under ``{data_root}/.leasectl/``.

    Creates all tables and seeds every known counter at zero.
    Idempotent — safe to call on an existing ledger.
    """
    state_dir = data_root / ".leasectl"
    state_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(state_dir / db_name)
    metadata.create_all(engine)
    _seed_counters(engine)
    return engine


def _seed_counters(engine: Engine) -> None:
    """Insert zero-valued counter rows that don't exist yet."""
    with engine.begin() as conn:
        for name in sorted(KNOWN_COUNTERS):
            row = conn.execute(select(counters.c.name).where(counters.c.name == name)).first()
            if row is None:
                conn.execute(insert(counters).values(name=name, value=0))
