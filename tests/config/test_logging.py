"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from leasectl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    lease = logging.getLogger("leasectl")
    lease_level = lease.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    lease.setLevel(lease_level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("leasectl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("leasectl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("leasectl.test")
        log.warning("json test", agreement_id="A-1")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["agreement_id"] == "A-1"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "leasectl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_is_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("leasectl.infrastructure.store").debug("Stored agreement %s", "A-1")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Stored agreement A-1"
        assert parsed["level"] == "debug"

    def test_audit_plugin_logs_at_info(self, capfd: pytest.CaptureFixture[str]) -> None:
        from leasectl.plugins.builtins.audit import AuditLogPlugin

        configure_logging(verbose=True, log_json=True)
        AuditLogPlugin().agreement_created_event(
            agreement_id="A-1", landlord="GL", tenant="GT", agent=None, count=3
        )
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "agreement_created"
        assert parsed["count"] == 3
        assert parsed["logger"] == "leasectl.audit"
