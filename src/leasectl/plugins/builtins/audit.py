"""AuditLogPlugin — structured log line for every created agreement."""

from __future__ import annotations

import structlog

from leasectl.plugins.hookspecs import hookimpl

log = structlog.get_logger("leasectl.audit")


class AuditLogPlugin:
    """Emit one ``agreement_created`` log event per creation notification."""

    @hookimpl
    def agreement_created_event(
        self,
        agreement_id: str,
        landlord: str,
        tenant: str,
        agent: str | None,
        count: int,
    ) -> None:
        log.info(
            "agreement_created",
            agreement_id=agreement_id,
            landlord=landlord,
            tenant=tenant,
            agent=agent,
            count=count,
        )
