# loan_planner/schemas/__init__.py
