# loan_planner/core/finance/__init__.py

from .amortization import (
    PREPAYMENT_INTERVAL_MONTHS,
    amortize,
    calculate_loan,
    monthly_emi,
    prepayment_for_month,
)
from .errors import LOAN_ERRORS, InvalidLoanInputError, LoanCalculationError, loan_input_guard

__all__ = [
    "amortize",
    "calculate_loan",
    "monthly_emi",
    "prepayment_for_month",
    "PREPAYMENT_INTERVAL_MONTHS",
    "LoanCalculationError",
    "InvalidLoanInputError",
    "LOAN_ERRORS",
    "loan_input_guard",
]
