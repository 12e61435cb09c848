"""Rich Console factory and theme for leasectl output.

Consoles render to a StringIO buffer so renderers can return plain
strings. In non-TTY environments (tests, pipes) Rich drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LEASE_THEME = Theme(
    {
        "lease.ok": "bold green",
        "lease.error": "bold red",
        "lease.warning": "bold yellow",
        "lease.op": "bold cyan",
        "lease.key": "dim",
        "lease.id": "bold blue",
        "lease.party": "magenta",
        "lease.amount": "green",
        "lease.status.draft": "yellow",
        "lease.status.active": "green",
        "lease.status.terminated": "red",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "draft": "lease.status.draft",
    "pending_deposit": "lease.status.draft",
    "active": "lease.status.active",
    "terminated": "lease.status.terminated",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=LEASE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    return _STATUS_STYLES.get(status, "")
