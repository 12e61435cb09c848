"""Shared pytest fixtures and test helpers for leasectl tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy import Connection
from sqlalchemy.engine import Engine

from leasectl.config.settings import LeaseSettings
from leasectl.infrastructure.database.engine import init_database
from leasectl.infrastructure.ledger import Ledger
from leasectl.infrastructure.store import AgreementStore
from leasectl.services.agreements import AgreementService
from leasectl.services.result import ServiceResult

# Scenario 1 terms: a valid, agent-brokered lease.
VALID_FIELDS: dict[str, Any] = {
    "landlord": "GLANDLORD",
    "tenant": "GTENANT",
    "agent": "GAGENT",
    "monthly_rent": 1000,
    "security_deposit": 2000,
    "start_date": 100,
    "end_date": 200,
    "agent_commission_rate": 10,
}


class RecordingNotifier:
    """Notifier stub that records events and checks delivery happens after commit."""

    def __init__(self) -> None:
        self.recorded: list[tuple[str, dict[str, Any]]] = []
        self.delivered: list[tuple[int, str, dict[str, Any]]] = []
        self.store: AgreementStore | None = None
        self.visible_at_delivery: list[bool] = []

    def record(self, conn: Connection, hook_name: str, payload: dict[str, Any]) -> int:
        self.recorded.append((hook_name, payload))
        return len(self.recorded)

    def deliver(self, event_id: int, hook_name: str, payload: dict[str, Any]) -> None:
        if self.store is not None:
            self.visible_at_delivery.append(self.store.has(payload["agreement_id"]))
        self.delivered.append((event_id, hook_name, payload))


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's LEASECTL_* environment out of the tests."""
    monkeypatch.delenv("LEASECTL_CONFIG", raising=False)
    monkeypatch.delenv("LEASECTL_AUTH__CALLER", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created and counters seeded."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def store(db_engine: Engine, notifier: RecordingNotifier) -> AgreementStore:
    """AgreementStore wired to a recording notifier."""
    s = AgreementStore(db_engine, notifier=notifier)
    notifier.store = s
    return s


@pytest.fixture
def service(store: AgreementStore) -> AgreementService:
    """AgreementService trusting the host for authorization."""
    return AgreementService(store)


@pytest.fixture
def settings(tmp_path: Path) -> LeaseSettings:
    return LeaseSettings.from_cli(data_root=tmp_path)


@pytest.fixture
def ledger(settings: LeaseSettings) -> Iterator[Ledger]:
    """Ledger on a temp directory, without an event bus."""
    led = Ledger(settings)
    try:
        yield led
    finally:
        led.close()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI opens an isolated ledger."""
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def create_agreement(
    service: AgreementService, agreement_id: str, **overrides: Any
) -> ServiceResult:
    """Call create_agreement with valid defaults, overriding selected fields."""
    fields = {**VALID_FIELDS, **overrides}
    return service.create_agreement(agreement_id, **fields)
