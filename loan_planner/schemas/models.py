# loan_planner/schemas/models.py

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PrepaymentFrequency = Literal["monthly", "quarterly", "yearly"]

# =========================
# Core inputs
# =========================


class PrepaymentPlan(BaseModel):
    """
    Extra principal paid on top of the scheduled EMI. An amount of 0 disables prepayment.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    amount: float = Field(0.0, ge=0, description="Extra principal paid on each prepayment month (currency units).")
    frequency: PrepaymentFrequency = Field(
        "monthly", description='How often the prepayment is made: "monthly", "quarterly" or "yearly".'
    )

    @property
    def enabled(self) -> bool:
        return self.amount > 0


class LoanParameters(BaseModel):
    """
    Immutable input bundle for one amortization run. All money amounts share one currency.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    principal: float = Field(..., gt=0, description="Amount borrowed (currency units).")
    annual_rate_percent: float = Field(..., ge=0, description="Annual interest rate in percent (e.g., 8.5 = 8.5%).")
    tenure_years: float = Field(..., gt=0, description="Loan tenure in years; converted to months as years * 12.")
    prepayment: PrepaymentPlan = Field(default_factory=PrepaymentPlan, description="Optional periodic prepayment.")
    yearly_step_up_percent: float = Field(
        0.0, ge=0, description="Percent increase applied to the EMI at the start of every year after the first."
    )

    @property
    def monthly_rate(self) -> float:
        """Monthly rate as a fraction (8.5% annual -> 0.0070833...)."""
        return self.annual_rate_percent / 12 / 100

    @property
    def total_months(self) -> float:
        return self.tenure_years * 12


# =========================
# Computed outputs
# =========================


class YearSnapshot(BaseModel):
    """State of the loan at the end of one completed 12-month block."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, description="Year index starting at 1.")
    remaining_balance: float = Field(..., ge=0, description="Outstanding principal after the year's last payment, floored at 0.")
    emi_at_year_end: float = Field(..., description="EMI in effect during the year's last month.")


class PrincipalInterestSplit(BaseModel):
    """Borrowed amount vs. total interest, for distribution displays."""

    model_config = ConfigDict(frozen=True)

    principal: float = Field(..., description="Original principal borrowed.")
    total_interest_paid: float = Field(..., description="Interest accrued over the whole run.")

    @property
    def total_payable(self) -> float:
        return self.principal + self.total_interest_paid


class AmortizationResult(BaseModel):
    """
    Output of one amortization run.

    If `truncated` is True the safety bound stopped the loop before the balance reached zero;
    every other field then describes the state at that point (best effort, not a payoff).
    """

    model_config = ConfigDict(frozen=True)

    monthly_emi: float = Field(..., description="EMI in effect when the loop stopped (final EMI after step-ups).")
    initial_emi: float = Field(..., description="EMI charged in month 1.")
    total_interest_paid: float = Field(..., description="Sum of every monthly interest amount.")
    total_prepaid: float = Field(0.0, description="Sum of every prepayment applied.")
    months_elapsed: int = Field(..., ge=0, description="Number of months processed.")
    payoff_years: float = Field(..., ge=0, description="months_elapsed / 12.")
    yearly_schedule: list[YearSnapshot] = Field(default_factory=list, description="One entry per completed 12-month block.")
    principal_interest_split: PrincipalInterestSplit
    final_balance: float = Field(0.0, ge=0, description="Balance when the loop stopped, floored at 0.")
    truncated: bool = Field(False, description="True when the safety bound was reached before payoff.")
