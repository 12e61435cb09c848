"""Ledger — wires settings to the database, event bus, and agreement store.

Constructed once per CLI invocation (or test) and handed to services.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from leasectl.infrastructure.database.engine import init_database
from leasectl.infrastructure.store import AgreementStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from leasectl.config.settings import LeaseSettings
    from leasectl.plugins.event_bus import EventBus
    from leasectl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Ledger:
    """Owns the engine, the optional event bus, and the agreement store."""

    def __init__(self, settings: LeaseSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(self.root, db_name=settings.ledger.db_name)
        self._event_bus: EventBus | None = None
        self._plugin_manager: PluginManager | None = None
        self._store = AgreementStore(self._engine)

    @property
    def root(self) -> Path:
        return self._settings.data_root

    @property
    def settings(self) -> LeaseSettings:
        return self._settings

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def store(self) -> AgreementStore:
        return self._store

    @property
    def event_bus(self) -> EventBus | None:
        """The plugin event bus (None until :meth:`init_event_bus`)."""
        return self._event_bus

    @property
    def plugin_manager(self) -> PluginManager | None:
        return self._plugin_manager

    def init_event_bus(self, *, sync: bool = False, discover: bool = True) -> EventBus:
        """Create the plugin manager and event bus, and attach them to the store.

        Loads entry-point plugins (unless *discover* is False) and registers
        the built-in audit log plugin when ``[events] audit_log`` is on.
        """
        from leasectl.plugins.builtins.audit import AuditLogPlugin
        from leasectl.plugins.event_bus import EventBus
        from leasectl.plugins.manager import PluginManager

        events = self._settings.events
        pm = PluginManager()
        if discover:
            pm.discover_and_load()
        if events.audit_log:
            pm.register_plugin(AuditLogPlugin(), name="audit-builtin")

        bus = EventBus(
            self._engine,
            pm,
            sync=sync,
            max_retries=events.max_retries,
            max_workers=events.max_workers,
        )
        self._plugin_manager = pm
        self._event_bus = bus
        self._store = AgreementStore(self._engine, notifier=bus)
        logger.debug("Event bus ready with plugins: %s", pm.list_plugin_names())
        return bus

    def close(self) -> None:
        """Retry undelivered events, then release the bus and the engine."""
        if self._event_bus is not None:
            retried = self._event_bus.drain()
            if retried:
                logger.debug("Drained %d event(s) at close", len(retried))
            self._event_bus.shutdown()
        self._engine.dispose()
