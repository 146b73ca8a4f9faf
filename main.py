# main.py
"""
Entry Point — Loan Planner

Purpose
-------
Compute an EMI amortization schedule and emit it as JSON:
  1) Load loan parameters (calculator defaults or --config JSON).
  2) Apply CLI overrides (principal, rate, tenure, prepayment, step-up).
  3) Run the amortization engine and write the result to --out or stdout.

Design
------
- CLI-friendly; pure Python. All arithmetic lives in loan_planner.core.finance.
- Presentation (charts, currency formatting) is left to whoever consumes the JSON.

Usage
-----
    python main.py
    python main.py --principal 2500000 --rate 9 --tenure 15 \
                   --prepayment 50000 --frequency yearly --step-up 5
    python main.py --config loan.json --out schedule.json --debug
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from loan_planner.core.finance import LOAN_ERRORS, amortize
from loan_planner.core.logs import configure_logging
from loan_planner.inputs.inputs import AppInputs, InputsLoader
from loan_planner.schemas.models import LoanParameters, PrepaymentPlan

logger = logging.getLogger("loan_planner.cli")


def build_sample_parameters() -> LoanParameters:
    """Return the web calculator's starting values for demo runs."""
    return LoanParameters(
        principal=1_000_000.0,
        annual_rate_percent=8.5,
        tenure_years=20,
        prepayment=PrepaymentPlan(amount=0.0, frequency="monthly"),
        yearly_step_up_percent=0.0,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Loan Planner: EMI amortization with prepayment and step-up")
    p.add_argument("--config", type=str, default=None, help="Path to JSON inputs (flat, structured or calculator shape).")
    p.add_argument("--principal", type=float, default=None, help="Loan amount.")
    p.add_argument("--rate", type=float, default=None, help="Annual interest rate in percent (e.g. 8.5).")
    p.add_argument("--tenure", type=float, default=None, help="Loan tenure in years.")
    p.add_argument("--prepayment", type=float, default=None, help="Prepayment amount (0 disables).")
    p.add_argument(
        "--frequency",
        type=str,
        default=None,
        choices=["monthly", "quarterly", "yearly"],
        help="Prepayment frequency.",
    )
    p.add_argument("--step-up", type=float, default=None, help="Yearly EMI step-up in percent (0 disables).")
    p.add_argument("--max-months", type=int, default=None, help="Safety bound on months processed (default: 2x tenure).")
    p.add_argument("--out", type=str, default=None, help="Write result JSON to this path instead of stdout.")
    p.add_argument("--debug", action="store_true", help="Enable debug logging (also LOANPLAN_DEBUG=1).")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run one calculation; returns the process exit status."""
    args = parse_args(argv)
    configure_logging(debug=True if args.debug else None)

    loader = InputsLoader()
    try:
        if args.config:
            cfg = loader.load(args.config)
            logger.debug("loaded inputs from %s", args.config)
        else:
            cfg = AppInputs(loan=build_sample_parameters())
        cfg = loader.with_overrides(
            cfg,
            out=args.out,
            max_months=args.max_months,
            principal=args.principal,
            annual_rate_percent=args.rate,
            tenure_years=args.tenure,
            prepayment_amount=args.prepayment,
            prepayment_frequency=args.frequency,
            yearly_step_up_percent=args.step_up,
        )
        result = amortize(cfg.loan, max_months=cfg.run.max_months)
    except (*LOAN_ERRORS, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    payload = result.model_dump_json(indent=2)
    if cfg.run.out:
        out_path = Path(cfg.run.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload + "\n", encoding="utf-8")
        print(f"Schedule written to {out_path}")
    else:
        print(payload)

    if result.truncated:
        print(
            f"Warning: loan not paid off within {result.months_elapsed} months; "
            f"{result.final_balance:.6g} still outstanding.",
            file=sys.stderr,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
