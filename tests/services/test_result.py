"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from leasectl.domain.errors import AgreementErrorCode
from leasectl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="create_agreement", data={"agreement_id": "A-1"})
        assert result.ok is True
        assert result.data == {"agreement_id": "A-1"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure(
            "create_agreement",
            AgreementErrorCode.INVALID_RENT,
            "Monthly rent must be positive",
            error_number=5,
        )
        assert result.ok is False
        assert result.error == ServiceError(
            code="INVALID_RENT",
            message="Monthly rent must be positive",
            detail={"error_number": 5},
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult.failure("get_agreement", AgreementErrorCode.NOT_FOUND, "missing")
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is False
        assert parsed["error"]["code"] == "NOT_FOUND"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
