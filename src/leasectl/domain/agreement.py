"""RentAgreement record, its terms, and the status lifecycle.

INVARIANT: Identity (``agreement_id``) and parties are immutable once stored.
Principals are opaque identifiers; their authenticity is checked upstream.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel

Principal = str


class AgreementStatus(StrEnum):
    """Lifecycle status of an agreement.

    Creation always yields ``DRAFT``. The remaining states belong to the
    payment and termination flows, which this package does not drive.
    """

    DRAFT = "draft"
    PENDING_DEPOSIT = "pending_deposit"
    ACTIVE = "active"
    TERMINATED = "terminated"


class AgreementParties(BaseModel):
    """Landlord, tenant, and the optional brokering agent."""

    model_config = {"frozen": True}

    landlord: Principal
    tenant: Principal
    agent: Principal | None = None


class AgreementTerms(BaseModel):
    """Financial and date terms checked by the validator."""

    model_config = {"frozen": True}

    monthly_rent: int
    security_deposit: int
    start_date: int
    end_date: int
    agent_commission_rate: int


class RentAgreement(BaseModel):
    """A stored lease between landlord and tenant."""

    model_config = {"frozen": True}

    agreement_id: str
    landlord: Principal
    tenant: Principal
    agent: Principal | None = None
    monthly_rent: int
    security_deposit: int
    start_date: int
    end_date: int
    agent_commission_rate: int
    status: AgreementStatus = AgreementStatus.DRAFT

    @classmethod
    def draft(
        cls,
        agreement_id: str,
        parties: AgreementParties,
        terms: AgreementTerms,
    ) -> RentAgreement:
        """Build a freshly created agreement in ``DRAFT`` status."""
        return cls(
            agreement_id=agreement_id,
            **parties.model_dump(),
            **terms.model_dump(),
            status=AgreementStatus.DRAFT,
        )

    @property
    def parties(self) -> AgreementParties:
        return AgreementParties(landlord=self.landlord, tenant=self.tenant, agent=self.agent)

    @property
    def terms(self) -> AgreementTerms:
        return AgreementTerms(
            monthly_rent=self.monthly_rent,
            security_deposit=self.security_deposit,
            start_date=self.start_date,
            end_date=self.end_date,
            agent_commission_rate=self.agent_commission_rate,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation (status as its string value)."""
        return self.model_dump(mode="json")


def calculate_commission(amount: int, commission_rate: int) -> int:
    """Agent commission on *amount* at *commission_rate* percent.

    Integer ledger arithmetic: the fractional remainder is truncated
    toward negative infinity.

    Examples:
        >>> calculate_commission(1000, 10)
        100
        >>> calculate_commission(1005, 10)
        100
    """
    return amount * commission_rate // 100
