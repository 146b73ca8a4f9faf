# loan_planner/core/finance/errors.py
"""
Typed errors for the amortization engine.

Exports
-------
- LoanCalculationError, InvalidLoanInputError
- LOAN_ERRORS
- loan_input_guard()

A run that hits the safety bound is not an error: it comes back as a
result with `truncated=True`.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError

# =========================
# Exception types
# =========================


class LoanCalculationError(ValueError):
    """Base class for amortization failures."""


class InvalidLoanInputError(LoanCalculationError):
    """Loan parameters were rejected before any computation started."""


# Selector tuple for grouped exception handling
LOAN_ERRORS = (InvalidLoanInputError,)


@contextmanager
def loan_input_guard() -> Iterator[None]:
    """Re-raise pydantic validation failures as InvalidLoanInputError."""
    try:
        yield
    except ValidationError as exc:
        raise InvalidLoanInputError(f"Loan parameters failed validation:\n{exc}") from exc


__all__ = [
    "LoanCalculationError",
    "InvalidLoanInputError",
    "LOAN_ERRORS",
    "loan_input_guard",
]
