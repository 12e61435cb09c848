"""Pluggy hook specifications for leasectl lifecycle events.

Each hook name doubles as the event topic recorded in the ``event_wal``
table, so the topic of a created agreement is ``agreement_created_event``.
"""

from __future__ import annotations

import pluggy

PROJECT_NAME = "leasectl"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)

AGREEMENT_CREATED_EVENT = "agreement_created_event"


class LeaseHookSpec:
    """Hook specifications for the leasectl plugin system."""

    @hookspec
    def agreement_created_event(
        self,
        agreement_id: str,
        landlord: str,
        tenant: str,
        agent: str | None,
        count: int,
    ) -> None:
        """Called once per agreement, after the record and counter are committed."""
