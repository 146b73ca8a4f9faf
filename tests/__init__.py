# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_loan_parameters
"""

from .utils import make_loan_parameters, make_prepayment

__all__ = ["make_loan_parameters", "make_prepayment"]
