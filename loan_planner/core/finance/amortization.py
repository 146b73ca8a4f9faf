# loan_planner/core/finance/amortization.py

from __future__ import annotations

import logging
import math
from typing import Any

from loan_planner.schemas.models import (
    AmortizationResult,
    LoanParameters,
    PrepaymentPlan,
    PrincipalInterestSplit,
    YearSnapshot,
)

from .errors import InvalidLoanInputError, loan_input_guard

logger = logging.getLogger(__name__)

_EPS = 1e-6  # for floating cleanup
_REL_EPS = 1e-9  # residual tolerance relative to principal; covers drift over long schedules

# Months between prepayments; a prepayment lands on months divisible by the interval.
PREPAYMENT_INTERVAL_MONTHS: dict[str, int] = {
    "monthly": 1,
    "quarterly": 3,
    "yearly": 12,
}


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise InvalidLoanInputError(f"{name} must be a finite number, got {value!r}")


def monthly_emi(principal: float, annual_rate_percent: float, tenure_years: float) -> float:
    """
    Equated monthly installment for a fully-amortizing fixed-rate loan.

    Formula (standard annuity, negative-exponent form):
        EMI = P * r / [ 1 - (1 + r)^-n ]   ==   P * r * (1 + r)^n / [ (1 + r)^n - 1 ]

    Where:
        P = principal
        r = monthly rate = annual_rate_percent / 12 / 100
        n = number of months = tenure_years * 12

    Notes:
        - At r == 0 the ratio is 0/0, so the zero-rate case returns P / n directly.
        - 1 - (1 + r)^-n is evaluated as -expm1(-n * log1p(r)): no overflow for large r * n
          (EMI tends to P * r) and no cancellation for tiny r.
    """
    _require_finite(principal=principal, annual_rate_percent=annual_rate_percent, tenure_years=tenure_years)
    if principal <= 0:
        raise InvalidLoanInputError("principal must be > 0")
    if annual_rate_percent < 0:
        raise InvalidLoanInputError("annual_rate_percent must be >= 0")
    if tenure_years <= 0:
        raise InvalidLoanInputError("tenure_years must be > 0")

    r = annual_rate_percent / 12 / 100
    n = tenure_years * 12

    if r == 0:
        return principal / n

    discount = -math.expm1(-n * math.log1p(r))
    if discount == 0.0:
        return principal / n
    return principal * r / discount


def prepayment_for_month(plan: PrepaymentPlan, month: int) -> float:
    """Prepayment due in a 1-based month (0.0 when none falls due)."""
    interval = PREPAYMENT_INTERVAL_MONTHS.get(plan.frequency)
    if interval is None:
        raise InvalidLoanInputError(f"Unrecognized prepayment frequency: {plan.frequency!r}")
    if not plan.enabled:
        return 0.0
    return plan.amount if month % interval == 0 else 0.0


def _validate_parameters(params: LoanParameters) -> None:
    """
    Re-check what the schema enforces, for instances built with model_construct().
    Principal, rate and tenure are checked by monthly_emi().
    """
    _require_finite(
        prepayment_amount=params.prepayment.amount,
        yearly_step_up_percent=params.yearly_step_up_percent,
    )
    if params.prepayment.amount < 0:
        raise InvalidLoanInputError("prepayment amount must be >= 0")
    if params.prepayment.frequency not in PREPAYMENT_INTERVAL_MONTHS:
        raise InvalidLoanInputError(f"Unrecognized prepayment frequency: {params.prepayment.frequency!r}")
    if params.yearly_step_up_percent < 0:
        raise InvalidLoanInputError("yearly_step_up_percent must be >= 0")


def _month_limit(params: LoanParameters, max_months: int | None) -> int:
    if max_months is None:
        return max(1, int(params.total_months * 2))
    if max_months < 1:
        raise InvalidLoanInputError("max_months must be >= 1")
    return int(max_months)


def amortize(params: LoanParameters, *, max_months: int | None = None) -> AmortizationResult:
    """
    Run the month-by-month EMI schedule until the loan is paid off.

    Each month:
      - Year boundary (month 13, 25, ...): EMI grows by yearly_step_up_percent.
      - interest = balance * r; principal part = EMI - interest.
      - balance -= principal part + any prepayment due this month.
      - Every 12th month records a YearSnapshot (balance floored at 0).

    The loop stops once the balance is paid off or after `max_months` months
    (default: twice the tenure). Stopping on the bound yields `truncated=True`.

    Raises:
        InvalidLoanInputError: before any computation, for out-of-range inputs.
    """
    base_emi = monthly_emi(params.principal, params.annual_rate_percent, params.tenure_years)
    _validate_parameters(params)
    limit = _month_limit(params, max_months)

    rate = params.monthly_rate
    step_up = params.yearly_step_up_percent
    tolerance = max(_EPS, params.principal * _REL_EPS)

    balance = float(params.principal)
    current_emi = base_emi
    initial_emi = current_emi  # month 1 never steps up
    total_interest = 0.0
    total_prepaid = 0.0
    schedule: list[YearSnapshot] = []
    month = 0

    while balance > tolerance and month < limit:
        month += 1

        if month % 12 == 1 and month > 1 and step_up > 0:
            current_emi *= 1 + step_up / 100

        interest = balance * rate
        principal_part = current_emi - interest
        prepayment = prepayment_for_month(params.prepayment, month)

        balance -= principal_part + prepayment
        total_interest += interest
        total_prepaid += prepayment

        if month % 12 == 0:
            schedule.append(
                YearSnapshot(
                    year=month // 12,
                    remaining_balance=_clamp(balance, tolerance),
                    emi_at_year_end=current_emi,
                )
            )

    truncated = balance > tolerance
    if truncated:
        logger.warning(
            "safety bound of %d months reached with %.6g still outstanding; returning truncated result",
            limit,
            balance,
        )
    logger.debug(
        "amortized principal=%.2f rate=%.4f%% tenure=%.2fy in %d months (interest=%.2f)",
        params.principal,
        params.annual_rate_percent,
        params.tenure_years,
        month,
        total_interest,
    )

    return AmortizationResult(
        monthly_emi=current_emi,
        initial_emi=initial_emi,
        total_interest_paid=total_interest,
        total_prepaid=total_prepaid,
        months_elapsed=month,
        payoff_years=month / 12,
        yearly_schedule=schedule,
        principal_interest_split=PrincipalInterestSplit(
            principal=params.principal,
            total_interest_paid=total_interest,
        ),
        final_balance=_clamp(balance, tolerance),
        truncated=truncated,
    )


def _clamp(balance: float, tolerance: float) -> float:
    # Clean tiny residual drift; overshoot in the final month reads as 0
    return 0.0 if balance < tolerance else balance


def calculate_loan(*, max_months: int | None = None, **fields: Any) -> AmortizationResult:
    """
    Validate keyword fields into LoanParameters, then amortize.

    Example:
        calculate_loan(principal=1_000_000, annual_rate_percent=8.5, tenure_years=20,
                       prepayment={"amount": 5_000, "frequency": "quarterly"})
    """
    with loan_input_guard():
        params = LoanParameters.model_validate(fields)
    return amortize(params, max_months=max_months)


__all__ = [
    "PREPAYMENT_INTERVAL_MONTHS",
    "monthly_emi",
    "prepayment_for_month",
    "amortize",
    "calculate_loan",
]
