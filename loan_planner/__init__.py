# loan_planner/__init__.py
"""EMI amortization engine with prepayment and yearly step-up support."""
