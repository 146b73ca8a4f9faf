# loan_planner/core/__init__.py
