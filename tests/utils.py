# tests/utils.py
"""
Single source of truth for test data and factories.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from typing import Any

from loan_planner.schemas.models import LoanParameters, PrepaymentPlan

# -----------------------------
# Global defaults (edit once)
# -----------------------------

# Reference loan: 10 lakh at 8.5% over 20 years (EMI ≈ 8,678.23)
DEFAULT_PRINCIPAL = 1_000_000.0
DEFAULT_RATE_PERCENT = 8.5
DEFAULT_TENURE_YEARS = 20
REFERENCE_EMI = 8_678.23

# Zero-rate loan with an exact EMI of 1,000
ZERO_RATE_PRINCIPAL = 120_000.0
ZERO_RATE_TENURE_YEARS = 10


def make_prepayment(amount: float = 0.0, frequency: str = "monthly") -> PrepaymentPlan:
    return PrepaymentPlan(amount=amount, frequency=frequency)


def make_loan_parameters(**overrides: Any) -> LoanParameters:
    """
    Build validated LoanParameters from the reference defaults.

    Extra keys:
        prepayment_amount / prepayment_frequency: shortcuts for the nested plan.
    """
    amount = overrides.pop("prepayment_amount", 0.0)
    frequency = overrides.pop("prepayment_frequency", "monthly")
    data: dict[str, Any] = {
        "principal": DEFAULT_PRINCIPAL,
        "annual_rate_percent": DEFAULT_RATE_PERCENT,
        "tenure_years": DEFAULT_TENURE_YEARS,
        "prepayment": make_prepayment(amount, frequency),
        "yearly_step_up_percent": 0.0,
    }
    data.update(overrides)
    return LoanParameters(**data)
