"""AgreementStore — keyed agreement storage with a running count.

:meth:`AgreementStore.create` runs one transaction:

    UNIQUENESS CHECK → COUNT → INSERT → RECORD EVENT → COMMIT → DELIVER EVENT

- The record, the counter increment, and the pending event row commit
  together or not at all.
- ``agreement_id`` is the primary key, so a concurrent insert of the
  same id fails with ``IntegrityError`` and is reported as a duplicate
  instead of overwriting.
- The notifier is handed the event only after the commit; a failed
  creation never notifies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError

from leasectl.domain.agreement import (
    AgreementParties,
    AgreementStatus,
    AgreementTerms,
    Principal,
    RentAgreement,
)
from leasectl.domain.errors import DuplicateAgreementError
from leasectl.infrastructure.database.counters import (
    AGREEMENT_COUNT,
    increment_counter,
    read_counter,
)
from leasectl.infrastructure.database.schema import agreements
from leasectl.plugins.hookspecs import AGREEMENT_CREATED_EVENT
from leasectl.services._helpers import now_iso

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine, Row

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Receives lifecycle events. :class:`~leasectl.plugins.EventBus` implements it."""

    def record(self, conn: Connection, hook_name: str, payload: dict[str, Any]) -> int:
        """Persist the event inside the caller's transaction; return its id."""
        ...

    def deliver(self, event_id: int, hook_name: str, payload: dict[str, Any]) -> None:
        """Hand a committed event to its consumers."""
        ...


class SortOrder(StrEnum):
    """Listing order by creation sequence."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class AgreementFilter:
    """Equality filters for :meth:`AgreementStore.list`. ``None`` means any."""

    status: AgreementStatus | None = None
    landlord: Principal | None = None
    tenant: Principal | None = None
    agent: Principal | None = None


@dataclass(frozen=True)
class AgreementPage:
    """One page of agreements plus the total matching count."""

    items: list[RentAgreement]
    total: int
    page: int
    limit: int


class AgreementStore:
    """Persistent agreement records and the agreement counter."""

    def __init__(self, engine: Engine, notifier: Notifier | None = None) -> None:
        self._engine = engine
        self._notifier = notifier

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def notifier(self) -> Notifier | None:
        return self._notifier

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(
        self,
        agreement_id: str,
        parties: AgreementParties,
        terms: AgreementTerms,
    ) -> RentAgreement:
        """Persist a new draft agreement, count it, and notify.

        *terms* must already have passed validation.

        Raises:
            DuplicateAgreementError: *agreement_id* is already stored. Nothing
                is written in that case.
        """
        agreement = RentAgreement.draft(agreement_id, parties, terms)
        event: tuple[int, dict[str, Any]] | None = None

        try:
            with self._engine.begin() as conn:
                if self._exists(conn, agreement_id):
                    raise DuplicateAgreementError(agreement_id)

                # Sequence is claimed before the insert so the row carries it.
                count = increment_counter(conn, AGREEMENT_COUNT)
                conn.execute(
                    insert(agreements).values(
                        **agreement.to_dict(),
                        sequence=count,
                        created_at=now_iso(),
                    )
                )

                payload: dict[str, Any] = {
                    "agreement_id": agreement_id,
                    "landlord": agreement.landlord,
                    "tenant": agreement.tenant,
                    "agent": agreement.agent,
                    "count": count,
                }
                if self._notifier is not None:
                    event = (self._notifier.record(conn, AGREEMENT_CREATED_EVENT, payload), payload)
        except IntegrityError as exc:
            raise DuplicateAgreementError(agreement_id) from exc

        logger.debug("Stored agreement %s (count=%d)", agreement_id, count)

        if event is not None and self._notifier is not None:
            event_id, payload = event
            self._notifier.deliver(event_id, AGREEMENT_CREATED_EVENT, payload)

        return agreement

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def has(self, agreement_id: str) -> bool:
        with self._engine.connect() as conn:
            return self._exists(conn, agreement_id)

    def get(self, agreement_id: str) -> RentAgreement | None:
        """Return the stored agreement, or None if unknown."""
        with self._engine.connect() as conn:
            row = conn.execute(
                select(agreements).where(agreements.c.agreement_id == agreement_id)
            ).first()
        return _row_to_agreement(row) if row is not None else None

    def list(
        self,
        filters: AgreementFilter | None = None,
        *,
        page: int = 1,
        limit: int = 10,
        order: SortOrder = SortOrder.DESC,
    ) -> AgreementPage:
        """Return agreements ordered by creation sequence, filtered and paginated.

        Raises:
            ValueError: If *page* or *limit* is less than 1.
        """
        if page < 1 or limit < 1:
            msg = f"page and limit must be >= 1 (got page={page}, limit={limit})"
            raise ValueError(msg)

        filters = filters or AgreementFilter()
        conditions = []
        if filters.status is not None:
            conditions.append(agreements.c.status == str(filters.status))
        if filters.landlord is not None:
            conditions.append(agreements.c.landlord == filters.landlord)
        if filters.tenant is not None:
            conditions.append(agreements.c.tenant == filters.tenant)
        if filters.agent is not None:
            conditions.append(agreements.c.agent == filters.agent)

        sequence = agreements.c.sequence
        order_by = sequence.asc() if order == SortOrder.ASC else sequence.desc()

        with self._engine.connect() as conn:
            total = conn.execute(
                select(func.count()).select_from(agreements).where(*conditions)
            ).scalar_one()
            rows = conn.execute(
                select(agreements)
                .where(*conditions)
                .order_by(order_by)
                .offset((page - 1) * limit)
                .limit(limit)
            ).fetchall()

        return AgreementPage(
            items=[_row_to_agreement(r) for r in rows],
            total=int(total),
            page=page,
            limit=limit,
        )

    def count(self) -> int:
        """Number of agreements ever created."""
        with self._engine.connect() as conn:
            return read_counter(conn, AGREEMENT_COUNT)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _exists(conn: Connection, agreement_id: str) -> bool:
        row = conn.execute(
            select(agreements.c.agreement_id).where(agreements.c.agreement_id == agreement_id)
        ).first()
        return row is not None


def _row_to_agreement(row: Row[Any]) -> RentAgreement:
    return RentAgreement(
        agreement_id=row.agreement_id,
        landlord=row.landlord,
        tenant=row.tenant,
        agent=row.agent,
        monthly_rent=row.monthly_rent,
        security_deposit=row.security_deposit,
        start_date=row.start_date,
        end_date=row.end_date,
        agent_commission_rate=row.agent_commission_rate,
        status=AgreementStatus(row.status),
    )
