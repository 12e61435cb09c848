"""Agreement error codes and the exceptions raised by the storage layer.

Services translate the exceptions into ``ServiceResult`` errors; nothing
above the service layer ever sees them.
"""

from __future__ import annotations

from enum import StrEnum


class AgreementErrorCode(StrEnum):
    """Error codes surfaced in ``ServiceError.code``."""

    DUPLICATE_AGREEMENT = "DUPLICATE_AGREEMENT"
    INVALID_RENT = "INVALID_RENT"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_COMMISSION_RATE = "INVALID_COMMISSION_RATE"
    AMOUNT_OUT_OF_RANGE = "AMOUNT_OUT_OF_RANGE"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    INVALID_PAGINATION = "INVALID_PAGINATION"
    INVALID_FILTER = "INVALID_FILTER"


# Numeric error identifiers used by the on-ledger contract.
LEDGER_ERROR_NUMBERS: dict[AgreementErrorCode, int] = {
    AgreementErrorCode.DUPLICATE_AGREEMENT: 4,
    AgreementErrorCode.INVALID_RENT: 5,
    AgreementErrorCode.INVALID_DATE_RANGE: 6,
    AgreementErrorCode.INVALID_COMMISSION_RATE: 7,
}


class AgreementError(Exception):
    """Base class for agreement storage failures."""

    code: AgreementErrorCode

    def __init__(self, agreement_id: str, message: str) -> None:
        super().__init__(message)
        self.agreement_id = agreement_id


class DuplicateAgreementError(AgreementError):
    """An agreement with the same id is already stored."""

    code = AgreementErrorCode.DUPLICATE_AGREEMENT

    def __init__(self, agreement_id: str) -> None:
        super().__init__(agreement_id, f"Agreement '{agreement_id}' already exists")
