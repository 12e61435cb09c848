"""Agreement commands: create, show, list, count, commission."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from leasectl.commands._base import LeaseCommand
from leasectl.domain.agreement import AgreementStatus
from leasectl.infrastructure.store import SortOrder

if TYPE_CHECKING:
    from leasectl.commands._context import AppContext


@click.command(
    cls=LeaseCommand,
    examples="""\
  leasectl create AGREEMENT_001 --landlord GLAND --tenant GTEN \\
      --rent 1000 --deposit 2000 --start 100 --end 200
  leasectl create AGREEMENT_002 --landlord GLAND --tenant GTEN --agent GAGENT \\
      --rent 1500 --deposit 3000 --start 1000 --end 2000 --commission 5""",
)
@click.argument("agreement_id")
@click.option("--landlord", required=True, help="Landlord principal.")
@click.option("--tenant", required=True, help="Tenant principal.")
@click.option("--agent", default=None, help="Brokering agent principal (optional).")
@click.option("--rent", "monthly_rent", type=int, required=True, help="Monthly rent (> 0).")
@click.option("--deposit", "security_deposit", type=int, required=True, help="Security deposit.")
@click.option("--start", "start_date", type=int, required=True, help="Start timestamp.")
@click.option("--end", "end_date", type=int, required=True, help="End timestamp (> start).")
@click.option(
    "--commission",
    "agent_commission_rate",
    type=int,
    default=0,
    show_default=True,
    help="Agent commission rate in percent (0-100).",
)
@click.pass_obj
def create(
    app: AppContext,
    agreement_id: str,
    landlord: str,
    tenant: str,
    agent: str | None,
    monthly_rent: int,
    security_deposit: int,
    start_date: int,
    end_date: int,
    agent_commission_rate: int,
) -> None:
    """Create a draft rent agreement."""
    app.emit(
        app.agreement_service().create_agreement(
            agreement_id,
            landlord,
            tenant,
            agent,
            monthly_rent,
            security_deposit,
            start_date,
            end_date,
            agent_commission_rate,
        )
    )


@click.command(cls=LeaseCommand, examples="  leasectl show AGREEMENT_001")
@click.argument("agreement_id")
@click.pass_obj
def show(app: AppContext, agreement_id: str) -> None:
    """Show one agreement."""
    app.emit(app.agreement_service().get_agreement(agreement_id))


@click.command(
    "list",
    cls=LeaseCommand,
    examples="""\
  leasectl list
  leasectl list --landlord GLAND --status draft
  leasectl list --page 2 --limit 20
  leasectl list --order asc""",
)
@click.option(
    "--status",
    type=click.Choice([s.value for s in AgreementStatus]),
    default=None,
    help="Filter by status.",
)
@click.option("--landlord", default=None, help="Filter by landlord.")
@click.option("--tenant", default=None, help="Filter by tenant.")
@click.option("--agent", default=None, help="Filter by agent.")
@click.option("--page", type=int, default=1, show_default=True, help="Page number (1-based).")
@click.option("--limit", type=int, default=None, help="Page size (capped by [listing] max_limit).")
@click.option(
    "--order",
    type=click.Choice([o.value for o in SortOrder]),
    default=SortOrder.DESC.value,
    show_default=True,
    help="Creation order.",
)
@click.pass_obj
def list_cmd(
    app: AppContext,
    status: str | None,
    landlord: str | None,
    tenant: str | None,
    agent: str | None,
    page: int,
    limit: int | None,
    order: str,
) -> None:
    """List agreements, newest first unless --order asc."""
    app.emit(
        app.agreement_service().list_agreements(
            status=status,
            landlord=landlord,
            tenant=tenant,
            agent=agent,
            page=page,
            limit=limit or app.settings.listing.default_limit,
            order=order,
        )
    )


@click.command(cls=LeaseCommand, examples="  leasectl count")
@click.pass_obj
def count(app: AppContext) -> None:
    """Show how many agreements have been created."""
    app.emit(app.agreement_service().agreement_count())


@click.command(cls=LeaseCommand, examples="  leasectl commission AGREEMENT_001")
@click.argument("agreement_id")
@click.pass_obj
def commission(app: AppContext, agreement_id: str) -> None:
    """Show the agent commission on one month's rent."""
    app.emit(app.agreement_service().agent_commission(agreement_id))
