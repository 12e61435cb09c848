"""Tests for database initialization."""

from pathlib import Path

from sqlalchemy import func, inspect, select, text

from leasectl.infrastructure.database.counters import AGREEMENT_COUNT, increment_counter
from leasectl.infrastructure.database.engine import init_database
from leasectl.infrastructure.database.schema import counters


class TestInitDatabase:
    def test_creates_db_file(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            assert (tmp_path / ".leasectl" / "ledger.db").is_file()
        finally:
            engine.dispose()

    def test_custom_db_name(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path, db_name="other.db")
        try:
            assert (tmp_path / ".leasectl" / "other.db").is_file()
        finally:
            engine.dispose()

    def test_creates_tables(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            names = set(inspect(engine).get_table_names())
            assert {"agreements", "counters", "event_wal"} <= names
        finally:
            engine.dispose()

    def test_wal_mode(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            with engine.connect() as conn:
                mode = conn.execute(text("PRAGMA journal_mode")).scalar()
            assert mode == "wal"
        finally:
            engine.dispose()

    def test_idempotent_keeps_counter(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        with engine.begin() as conn:
            increment_counter(conn, AGREEMENT_COUNT)
        engine.dispose()

        engine = init_database(tmp_path)
        try:
            with engine.connect() as conn:
                rows = conn.execute(select(func.count()).select_from(counters)).scalar_one()
                value = conn.execute(
                    select(counters.c.value).where(counters.c.name == AGREEMENT_COUNT)
                ).scalar_one()
            assert rows == 1
            assert value == 1
        finally:
            engine.dispose()
