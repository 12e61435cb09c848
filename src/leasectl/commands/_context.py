"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The ledger is opened lazily so ``--help`` and
``--version`` never touch the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from leasectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from leasectl.config.settings import LeaseSettings
    from leasectl.infrastructure.ledger import Ledger
    from leasectl.services.agreements import AgreementService
    from leasectl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: LeaseSettings, *, caller: str | None = None) -> None:
        self.settings = settings
        self.caller = caller or settings.auth.caller
        self._ledger: Ledger | None = None

        from leasectl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def ledger(self) -> Ledger:
        """The ledger (opened on first access, event bus attached)."""
        if self._ledger is None:
            from leasectl.infrastructure.ledger import Ledger

            self._ledger = Ledger(self.settings)
            self._ledger.init_event_bus(sync=self.settings.sync)
        return self._ledger

    def agreement_service(self) -> AgreementService:
        """Build an AgreementService bound to the configured caller."""
        from leasectl.services.agreements import AgreementService
        from leasectl.services.auth import CallerAuthorizer, HostAuthorizer

        authorizer = CallerAuthorizer(self.caller) if self.caller else HostAuthorizer()
        return AgreementService(
            self.ledger.store,
            authorizer,
            max_limit=self.settings.listing.max_limit,
        )

    def close(self) -> None:
        if self._ledger is not None:
            self._ledger.close()
            self._ledger = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr outside JSON mode.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
