"""Tests for ServiceResult formatting."""

from __future__ import annotations

import json

from leasectl.output.formatters import OutputSettings, format_result
from leasectl.services.result import ServiceResult

AGREEMENT = {
    "agreement_id": "A-1",
    "landlord": "GL",
    "tenant": "GT",
    "agent": None,
    "monthly_rent": 1000,
    "security_deposit": 2000,
    "start_date": 100,
    "end_date": 200,
    "agent_commission_rate": 0,
    "status": "draft",
}


class TestFormatResult:
    def test_json(self) -> None:
        result = ServiceResult(ok=True, op="get_agreement", data=AGREEMENT)
        out = format_result(result, settings=OutputSettings(json_output=True))
        assert json.loads(out)["data"]["agreement_id"] == "A-1"

    def test_human_generic(self) -> None:
        result = ServiceResult(ok=True, op="get_agreement", data=AGREEMENT)
        out = format_result(result)
        assert out.startswith("OK")
        assert "agreement_id: A-1" in out
        assert "agent: -" in out

    def test_human_error(self) -> None:
        result = ServiceResult.failure("create_agreement", "INVALID_RENT", "Monthly rent bad")
        out = format_result(result)
        assert "ERROR" in out
        assert "INVALID_RENT" in out
        assert "Monthly rent bad" in out

    def test_error_detail_only_when_verbose(self) -> None:
        result = ServiceResult.failure("create_agreement", "INVALID_RENT", "bad", error_number=5)
        assert "error_number" not in format_result(result)
        assert "error_number: 5" in format_result(result, settings=OutputSettings(verbose=True))

    def test_list_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_agreements",
            data={"items": [AGREEMENT]},
            meta={"total": 1, "page": 1, "limit": 10},
        )
        out = format_result(result)
        assert "A-1" in out
        assert "Landlord" in out
        assert "1 shown of 1" in out

    def test_empty_list(self) -> None:
        result = ServiceResult(ok=True, op="list_agreements", data={"items": []})
        assert "No agreements found." in format_result(result)


class TestQuiet:
    def test_quiet_list_ids(self) -> None:
        second = {**AGREEMENT, "agreement_id": "A-2"}
        result = ServiceResult(ok=True, op="list_agreements", data={"items": [AGREEMENT, second]})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "A-1\nA-2"

    def test_quiet_count(self) -> None:
        result = ServiceResult(ok=True, op="agreement_count", data={"count": 4})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "4"

    def test_quiet_error(self) -> None:
        result = ServiceResult.failure("get_agreement", "NOT_FOUND", "missing")
        assert format_result(result, settings=OutputSettings(quiet=True)).startswith("ERROR")
