"""Named running counters.

The caller owns the transaction — pass a ``Connection`` obtained from
``engine.begin()`` so the increment commits or rolls back together with
the surrounding writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, update

from leasectl.infrastructure.database.schema import counters

if TYPE_CHECKING:
    from sqlalchemy import Connection

AGREEMENT_COUNT = "agreement_count"

KNOWN_COUNTERS = frozenset({AGREEMENT_COUNT})


def _check_name(name: str) -> None:
    if name not in KNOWN_COUNTERS:
        msg = f"Unknown counter: {name!r}. Expected one of {sorted(KNOWN_COUNTERS)}"
        raise ValueError(msg)


def increment_counter(conn: Connection, name: str) -> int:
    """Add one to counter *name* and return the new value.

    The increment is a single ``UPDATE ... SET value = value + 1`` so
    concurrent writers serialize on the row instead of losing updates.

    Raises:
        ValueError: If *name* is not a known counter.
        LookupError: If the counter row was never seeded.
    """
    _check_name(name)

    result = conn.execute(
        update(counters).where(counters.c.name == name).values(value=counters.c.value + 1)
    )
    if result.rowcount != 1:
        msg = f"Counter {name!r} is not initialized"
        raise LookupError(msg)

    return int(conn.execute(select(counters.c.value).where(counters.c.name == name)).scalar_one())


def read_counter(conn: Connection, name: str) -> int:
    """Current value of counter *name* (0 if the row is absent)."""
    _check_name(name)
    value = conn.execute(select(counters.c.value).where(counters.c.name == name)).scalar()
    return int(value or 0)
