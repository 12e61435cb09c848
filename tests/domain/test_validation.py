"""Tests for creation-time term validation."""

from __future__ import annotations

import pytest

from leasectl.domain.agreement import AgreementTerms
from leasectl.domain.errors import LEDGER_ERROR_NUMBERS, AgreementErrorCode
from leasectl.domain.validation import MAX_AMOUNT, MIN_AMOUNT, validate_terms


def _terms(**overrides: int) -> AgreementTerms:
    fields = {
        "monthly_rent": 1000,
        "security_deposit": 2000,
        "start_date": 100,
        "end_date": 200,
        "agent_commission_rate": 10,
    }
    fields.update(overrides)
    return AgreementTerms(**fields)


class TestValidTerms:
    def test_valid(self) -> None:
        vr = validate_terms(_terms())
        assert vr.valid
        assert vr.code is None

    @pytest.mark.parametrize("rate", [0, 100])
    def test_commission_bounds_inclusive(self, rate: int) -> None:
        assert validate_terms(_terms(agent_commission_rate=rate)).valid

    @pytest.mark.parametrize("deposit", [0, -500])
    def test_deposit_unbounded(self, deposit: int) -> None:
        assert validate_terms(_terms(security_deposit=deposit)).valid

    def test_deterministic(self) -> None:
        terms = _terms(monthly_rent=-1)
        assert validate_terms(terms) == validate_terms(terms)


class TestRuleViolations:
    @pytest.mark.parametrize("rent", [0, -100])
    def test_non_positive_rent(self, rent: int) -> None:
        vr = validate_terms(_terms(monthly_rent=rent))
        assert not vr.valid
        assert vr.code == AgreementErrorCode.INVALID_RENT

    @pytest.mark.parametrize(("start", "end"), [(200, 100), (150, 150)])
    def test_end_not_after_start(self, start: int, end: int) -> None:
        vr = validate_terms(_terms(start_date=start, end_date=end))
        assert vr.code == AgreementErrorCode.INVALID_DATE_RANGE

    @pytest.mark.parametrize("rate", [-1, 101])
    def test_commission_out_of_range(self, rate: int) -> None:
        vr = validate_terms(_terms(agent_commission_rate=rate))
        assert vr.code == AgreementErrorCode.INVALID_COMMISSION_RATE
        assert str(rate) in vr.message

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("monthly_rent", 2**63),
            ("security_deposit", -(2**70)),
            ("security_deposit", MAX_AMOUNT + 1),
            ("end_date", 2**64),
        ],
    )
    def test_amount_outside_storage_range(self, field: str, value: int) -> None:
        vr = validate_terms(_terms(**{field: value}))
        assert vr.code == AgreementErrorCode.AMOUNT_OUT_OF_RANGE
        assert field in vr.message

    def test_range_boundaries_accepted(self) -> None:
        vr = validate_terms(
            _terms(monthly_rent=MAX_AMOUNT, security_deposit=MIN_AMOUNT, end_date=MAX_AMOUNT)
        )
        assert vr.valid


class TestCheckOrder:
    def test_rent_checked_before_dates(self) -> None:
        vr = validate_terms(_terms(monthly_rent=-1, start_date=200, end_date=100))
        assert vr.code == AgreementErrorCode.INVALID_RENT

    def test_dates_checked_before_commission(self) -> None:
        vr = validate_terms(_terms(start_date=200, end_date=100, agent_commission_rate=101))
        assert vr.code == AgreementErrorCode.INVALID_DATE_RANGE

    def test_commission_checked_before_range(self) -> None:
        vr = validate_terms(_terms(agent_commission_rate=101, security_deposit=2**70))
        assert vr.code == AgreementErrorCode.INVALID_COMMISSION_RATE

    def test_all_invalid_reports_rent(self) -> None:
        vr = validate_terms(
            _terms(monthly_rent=0, start_date=5, end_date=1, agent_commission_rate=500)
        )
        assert vr.code == AgreementErrorCode.INVALID_RENT


def test_ledger_error_numbers() -> None:
    assert LEDGER_ERROR_NUMBERS[AgreementErrorCode.DUPLICATE_AGREEMENT] == 4
    assert LEDGER_ERROR_NUMBERS[AgreementErrorCode.INVALID_RENT] == 5
    assert LEDGER_ERROR_NUMBERS[AgreementErrorCode.INVALID_DATE_RANGE] == 6
    assert LEDGER_ERROR_NUMBERS[AgreementErrorCode.INVALID_COMMISSION_RATE] == 7
