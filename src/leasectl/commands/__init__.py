"""Subcommand modules for leasectl."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from leasectl.commands.agreement import commission, count, create, list_cmd, show

    cli.add_command(create)
    cli.add_command(show)
    cli.add_command(list_cmd)
    cli.add_command(count)
    cli.add_command(commission)
