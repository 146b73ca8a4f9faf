# tests/unit/test_loan_input_validation.py
from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from loan_planner.core.finance import InvalidLoanInputError, amortize, calculate_loan, monthly_emi
from loan_planner.schemas.models import LoanParameters, PrepaymentPlan


@pytest.mark.parametrize(
    "overrides",
    [
        {"principal": 0},
        {"principal": -1_000},
        {"annual_rate_percent": -0.5},
        {"tenure_years": 0},
        {"tenure_years": -3},
        {"yearly_step_up_percent": -1},
        {"prepayment": {"amount": -10, "frequency": "monthly"}},
        {"prepayment": {"amount": 10, "frequency": "weekly"}},
        {"principal": math.nan},
        {"annual_rate_percent": math.inf},
    ],
)
def test_calculate_loan_rejects_bad_inputs(overrides):
    fields = {"principal": 500_000, "annual_rate_percent": 9.0, "tenure_years": 15}
    fields.update(overrides)
    with pytest.raises(InvalidLoanInputError):
        calculate_loan(**fields)


def test_schema_rejects_unknown_frequency():
    with pytest.raises(ValidationError):
        PrepaymentPlan(amount=1_000, frequency="fortnightly")


def test_parameters_are_immutable():
    params = LoanParameters(principal=100_000, annual_rate_percent=7, tenure_years=5)
    with pytest.raises(ValidationError):
        params.principal = 1  # type: ignore[misc]
    # Frozen models hash, so callers can cache results per input
    assert hash(params) == hash(LoanParameters(principal=100_000, annual_rate_percent=7, tenure_years=5))


def test_engine_rechecks_unvalidated_parameters():
    # model_construct() skips pydantic validation; the engine must still refuse
    bad_principal = LoanParameters.model_construct(
        principal=-5.0, annual_rate_percent=8.0, tenure_years=10, prepayment=PrepaymentPlan(), yearly_step_up_percent=0.0
    )
    with pytest.raises(InvalidLoanInputError):
        amortize(bad_principal)

    bad_frequency = LoanParameters.model_construct(
        principal=100_000.0,
        annual_rate_percent=8.0,
        tenure_years=10,
        prepayment=PrepaymentPlan.model_construct(amount=0.0, frequency="weekly"),
        yearly_step_up_percent=0.0,
    )
    with pytest.raises(InvalidLoanInputError):
        amortize(bad_frequency)


@pytest.mark.parametrize(
    "args",
    [(0, 8.0, 10), (100_000, -1.0, 10), (100_000, 8.0, 0), (math.inf, 8.0, 10)],
)
def test_monthly_emi_rejects_bad_arguments(args):
    with pytest.raises(InvalidLoanInputError):
        monthly_emi(*args)


def test_monthly_emi_tiny_rate_approaches_straight_line():
    # 1 + r rounds to 1.0 here; the discount factor is still computed without cancellation
    assert monthly_emi(12_000, 1e-15, 1) == pytest.approx(1_000.0)


def test_invalid_input_error_is_value_error():
    assert issubclass(InvalidLoanInputError, ValueError)


def test_calculate_loan_accepts_nested_prepayment():
    res = calculate_loan(
        principal=1_000_000,
        annual_rate_percent=8.5,
        tenure_years=20,
        prepayment={"amount": 5_000, "frequency": "quarterly"},
    )
    assert res.truncated is False
    assert res.payoff_years < 20
