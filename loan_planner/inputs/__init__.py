# loan_planner/inputs/__init__.py
