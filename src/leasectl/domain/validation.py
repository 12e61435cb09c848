"""Creation-time business rules for agreement terms.

Checks run in a fixed order and the first failure wins:

1. ``monthly_rent > 0``                      -> ``INVALID_RENT``
2. ``end_date > start_date``                 -> ``INVALID_DATE_RANGE``
3. ``0 <= agent_commission_rate <= 100``     -> ``INVALID_COMMISSION_RATE``
4. every amount fits a signed 64-bit integer -> ``AMOUNT_OUT_OF_RANGE``

The commission rate is checked whether or not an agent is present.
``security_deposit`` carries no bound beyond the storage range.

INVARIANT: Validation is pure. It never touches storage.
"""

from __future__ import annotations

from dataclasses import dataclass

from leasectl.domain.agreement import AgreementTerms
from leasectl.domain.errors import AgreementErrorCode

MIN_COMMISSION_RATE = 0
MAX_COMMISSION_RATE = 100

# SQLite INTEGER columns hold signed 64-bit values.
MIN_AMOUNT = -(2**63)
MAX_AMOUNT = 2**63 - 1

_RANGED_FIELDS = ("monthly_rent", "security_deposit", "start_date", "end_date")


@dataclass(frozen=True)
class ValidationResult:
    """Verdict of :func:`validate_terms`."""

    valid: bool
    code: AgreementErrorCode | None = None
    message: str = ""


_OK = ValidationResult(valid=True)


def validate_terms(terms: AgreementTerms) -> ValidationResult:
    """Check *terms* against the creation rules, stopping at the first violation."""
    if terms.monthly_rent <= 0:
        return ValidationResult(
            valid=False,
            code=AgreementErrorCode.INVALID_RENT,
            message=f"Monthly rent must be positive, got {terms.monthly_rent}",
        )

    if terms.end_date <= terms.start_date:
        return ValidationResult(
            valid=False,
            code=AgreementErrorCode.INVALID_DATE_RANGE,
            message=(
                f"End date ({terms.end_date}) must be after start date ({terms.start_date})"
            ),
        )

    rate = terms.agent_commission_rate
    if not MIN_COMMISSION_RATE <= rate <= MAX_COMMISSION_RATE:
        return ValidationResult(
            valid=False,
            code=AgreementErrorCode.INVALID_COMMISSION_RATE,
            message=(
                f"Commission rate must be between {MIN_COMMISSION_RATE} and "
                f"{MAX_COMMISSION_RATE}, got {rate}"
            ),
        )

    for field in _RANGED_FIELDS:
        value = getattr(terms, field)
        if not MIN_AMOUNT <= value <= MAX_AMOUNT:
            return ValidationResult(
                valid=False,
                code=AgreementErrorCode.AMOUNT_OUT_OF_RANGE,
                message=f"{field} is outside the storable range: {value}",
            )

    return _OK
