"""AgreementService — agreement creation pipeline and read operations.

Creation pipeline: AUTHORIZE → VALIDATE → PERSIST (+ COUNT + EVENT) → RESPOND

Any failure before PERSIST leaves storage untouched. Errors are returned
as ``ServiceResult(ok=False)`` and never retried.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from leasectl.domain.agreement import (
    AgreementParties,
    AgreementStatus,
    AgreementTerms,
    Principal,
    calculate_commission,
)
from leasectl.domain.errors import LEDGER_ERROR_NUMBERS, AgreementError, AgreementErrorCode
from leasectl.domain.validation import validate_terms
from leasectl.infrastructure.store import AgreementFilter, SortOrder
from leasectl.services.auth import Authorizer, HostAuthorizer
from leasectl.services.base import BaseService
from leasectl.services.result import ServiceResult

if TYPE_CHECKING:
    from leasectl.infrastructure.store import AgreementStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_LIMIT = 100


def _error_detail(code: AgreementErrorCode, **extra: Any) -> dict[str, Any]:
    detail = dict(extra)
    number = LEDGER_ERROR_NUMBERS.get(code)
    if number is not None:
        detail["error_number"] = number
    return detail


class AgreementService(BaseService):
    """Creates and reads rent agreements."""

    def __init__(
        self,
        store: AgreementStore,
        authorizer: Authorizer | None = None,
        *,
        max_limit: int = DEFAULT_MAX_LIMIT,
    ) -> None:
        super().__init__(store)
        self._authorizer: Authorizer = authorizer or HostAuthorizer()
        self._max_limit = max_limit

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_agreement(
        self,
        agreement_id: str,
        landlord: Principal,
        tenant: Principal,
        agent: Principal | None,
        monthly_rent: int,
        security_deposit: int,
        start_date: int,
        end_date: int,
        agent_commission_rate: int,
    ) -> ServiceResult:
        """Validate and persist a new draft agreement."""
        op = "create_agreement"

        # ── AUTHORIZE ─────────────────────────────────────────────
        if not self._authorizer.authorize(landlord):
            logger.info("Rejected %s: caller not authorized for %s", agreement_id, landlord)
            return ServiceResult.failure(
                op,
                AgreementErrorCode.UNAUTHORIZED,
                f"Caller is not authorized to act for landlord '{landlord}'",
                agreement_id=agreement_id,
            )

        # ── VALIDATE ──────────────────────────────────────────────
        terms = AgreementTerms(
            monthly_rent=monthly_rent,
            security_deposit=security_deposit,
            start_date=start_date,
            end_date=end_date,
            agent_commission_rate=agent_commission_rate,
        )
        vr = validate_terms(terms)
        if not vr.valid:
            assert vr.code is not None
            logger.info("Rejected %s: %s", agreement_id, vr.code)
            return ServiceResult.failure(
                op,
                vr.code,
                vr.message,
                **_error_detail(vr.code, agreement_id=agreement_id),
            )

        # ── PERSIST ───────────────────────────────────────────────
        parties = AgreementParties(landlord=landlord, tenant=tenant, agent=agent)
        try:
            agreement = self._store.create(agreement_id, parties, terms)
        except AgreementError as exc:
            logger.info("Rejected %s: %s", agreement_id, exc.code)
            return ServiceResult.failure(
                op,
                exc.code,
                str(exc),
                **_error_detail(exc.code, agreement_id=agreement_id),
            )

        # ── RESPOND ───────────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "agreement_id": agreement.agreement_id,
                "status": str(agreement.status),
                "landlord": agreement.landlord,
                "tenant": agreement.tenant,
                "agent": agreement.agent,
            },
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_agreement(self, agreement_id: str) -> ServiceResult:
        """Fetch one agreement by id."""
        agreement = self._store.get(agreement_id)
        if agreement is None:
            return ServiceResult.failure(
                "get_agreement",
                AgreementErrorCode.NOT_FOUND,
                f"No agreement with id '{agreement_id}'",
                agreement_id=agreement_id,
            )
        return ServiceResult(ok=True, op="get_agreement", data=agreement.to_dict())

    def list_agreements(
        self,
        *,
        status: AgreementStatus | str | None = None,
        landlord: Principal | None = None,
        tenant: Principal | None = None,
        agent: Principal | None = None,
        page: int = 1,
        limit: int = 10,
        order: SortOrder | str = SortOrder.DESC,
    ) -> ServiceResult:
        """List agreements with optional equality filters, newest first by default."""
        op = "list_agreements"
        if page < 1 or limit < 1:
            return ServiceResult.failure(
                op,
                AgreementErrorCode.INVALID_PAGINATION,
                f"page and limit must be >= 1 (got page={page}, limit={limit})",
            )
        if limit > self._max_limit:
            return ServiceResult.failure(
                op,
                AgreementErrorCode.INVALID_PAGINATION,
                f"limit must be <= {self._max_limit} (got {limit})",
                max_limit=self._max_limit,
            )

        try:
            status_filter = AgreementStatus(status) if status is not None else None
            sort_order = SortOrder(order)
        except ValueError as exc:
            return ServiceResult.failure(op, AgreementErrorCode.INVALID_FILTER, str(exc))

        filters = AgreementFilter(
            status=status_filter,
            landlord=landlord,
            tenant=tenant,
            agent=agent,
        )
        result = self._store.list(filters, page=page, limit=limit, order=sort_order)
        return ServiceResult(
            ok=True,
            op=op,
            data={"items": [a.to_dict() for a in result.items]},
            meta={
                "total": result.total,
                "page": result.page,
                "limit": result.limit,
                "order": str(sort_order),
            },
        )

    def agreement_count(self) -> ServiceResult:
        """Number of agreements created so far."""
        return ServiceResult(ok=True, op="agreement_count", data={"count": self._store.count()})

    def agent_commission(self, agreement_id: str) -> ServiceResult:
        """Commission owed to the agent on one month's rent (0 without an agent)."""
        op = "agent_commission"
        agreement = self._store.get(agreement_id)
        if agreement is None:
            return ServiceResult.failure(
                op,
                AgreementErrorCode.NOT_FOUND,
                f"No agreement with id '{agreement_id}'",
                agreement_id=agreement_id,
            )

        commission = 0
        if agreement.agent is not None:
            commission = calculate_commission(
                agreement.monthly_rent, agreement.agent_commission_rate
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "agreement_id": agreement_id,
                "agent": agreement.agent,
                "monthly_rent": agreement.monthly_rent,
                "agent_commission_rate": agreement.agent_commission_rate,
                "commission": commission,
            },
        )
