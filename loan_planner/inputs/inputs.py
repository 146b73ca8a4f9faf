# loan_planner/inputs/inputs.py
"""
Inputs loader for the loan planner.

Goals
-----
- File-first inputs with validation via Pydantic.
- Accept the flat LoanParameters shape, the structured shape with run
  options, and the field names used by the original web calculator.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Flat (root = LoanParameters)
   {"principal": 1000000, "annual_rate_percent": 8.5, "tenure_years": 20}

2) Structured (root = AppInputs)
   {
     "loan": { ... LoanParameters ... },
     "run": {"out": "schedule.json", "max_months": 480}
   }

3) Calculator (camelCase form fields)
   {"loanAmount": 1000000, "interestRate": 8.5, "loanTenure": 20,
    "prepaymentAmount": 0, "prepaymentFrequency": "monthly", "yearlyStepUp": 0}

Environment overrides (optional)
--------------------------------
- LOANPLAN_OUT         -> AppInputs.run.out
- LOANPLAN_MAX_MONTHS  -> AppInputs.run.max_months (int)

Public API
----------
- class InputsLoader:
    - load(path: str | Path) -> AppInputs
    - load_json(text: str) -> AppInputs
    - with_overrides(cfg, **kwargs) -> AppInputs (non-destructive copies)
- function load_inputs(path: str | Path) -> AppInputs  (convenience)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, Field

from loan_planner.core.finance.errors import loan_input_guard
from loan_planner.schemas.models import LoanParameters

logger = logging.getLogger(__name__)

# Calculator form field -> LoanParameters field
_CALCULATOR_KEYS: dict[str, str] = {
    "loanAmount": "principal",
    "interestRate": "annual_rate_percent",
    "loanTenure": "tenure_years",
    "yearlyStepUp": "yearly_step_up_percent",
}

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling the calculation run."""

    out: str | None = Field(None, description="Path to write the result JSON. None prints to stdout.")
    max_months: int | None = Field(None, ge=1, description="Override for the loop safety bound (default: 2x tenure).")


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        loan: The validated LoanParameters consumed by the engine.
        run:  Non-financial, runtime options for the current execution.
    """

    loan: LoanParameters
    run: RunOptions = RunOptions()


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Responsibilities:
        - Read JSON from a file or string
        - Accept flat, structured and calculator shapes
        - Validate with Pydantic
        - Apply environment overrides for run options
    """

    env_prefix: str = "LOANPLAN_"

    # ---------- Public API ----------

    def load(self, path: str | Path) -> AppInputs:
        """
        Load inputs from a JSON file.

        Raises:
            FileNotFoundError: path does not exist.
            ValueError: unsupported extension or malformed JSON.
            InvalidLoanInputError: payload fails validation.
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Inputs file not found: {p}")
        raw = self._read_json_file(p)
        return self._build(raw)

    def load_json(self, text: str) -> AppInputs:
        """Load inputs from a JSON string (any supported shape)."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Inputs payload must be a JSON object.")
        return self._build(raw)

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        max_months: int | None = None,
        **loan_fields: Any,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied.

        `loan_fields` are LoanParameters field names; `prepayment_amount` and
        `prepayment_frequency` update the nested prepayment plan.
        Does not mutate the original instance.
        """
        run_updates: dict[str, Any] = {}
        if out is not None:
            run_updates["out"] = out
        if max_months is not None:
            run_updates["max_months"] = max_months

        loan_updates = {k: v for k, v in loan_fields.items() if v is not None}
        prepay_updates: dict[str, Any] = {}
        if "prepayment_amount" in loan_updates:
            prepay_updates["amount"] = loan_updates.pop("prepayment_amount")
        if "prepayment_frequency" in loan_updates:
            prepay_updates["frequency"] = loan_updates.pop("prepayment_frequency")

        if not run_updates and not loan_updates and not prepay_updates:
            return cfg

        # Re-validate so overrides get the same checks as file inputs
        data = cfg.model_dump()
        data["run"].update(run_updates)
        data["loan"].update(loan_updates)
        data["loan"]["prepayment"].update(prepay_updates)
        return self._parse_root(data)

    # ---------- Internals ----------

    def _build(self, raw: dict[str, Any]) -> AppInputs:
        data = self._normalize_shape(raw)
        cfg = self._parse_root(data)
        return self._apply_env_overrides(cfg)

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            payload = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(payload, dict):
            raise ValueError(f"Inputs in {p} must be a JSON object.")
        return cast(dict[str, Any], payload)

    def _normalize_shape(self, raw: dict[str, Any]) -> dict[str, Any]:
        """
        Accept structured (AppInputs), flat (LoanParameters) or calculator (camelCase) shapes
        and return the structured one.
        """
        if "loan" in raw:
            return raw  # already structured

        if any(k in raw for k in _CALCULATOR_KEYS) or "prepaymentAmount" in raw:
            loan: dict[str, Any] = {}
            for src, dst in _CALCULATOR_KEYS.items():
                if src in raw:
                    loan[dst] = raw[src]
            prepayment: dict[str, Any] = {}
            if "prepaymentAmount" in raw:
                prepayment["amount"] = raw["prepaymentAmount"]
            if "prepaymentFrequency" in raw:
                prepayment["frequency"] = raw["prepaymentFrequency"]
            if prepayment:
                loan["prepayment"] = prepayment
            logger.debug("translated calculator-style inputs: %s", sorted(loan))
            return {"loan": loan}

        return {"loan": raw}

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        with loan_input_guard():
            return AppInputs.model_validate(data)

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """
        Apply light, optional overrides from environment variables to run options.
        """
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        out = os.getenv(f"{prefix}OUT")
        if out:
            updates["out"] = out

        max_months = os.getenv(f"{prefix}MAX_MONTHS")
        if max_months:
            try:
                value = int(max_months)
            except ValueError:
                value = 0
            if value >= 1:
                updates["max_months"] = value
            else:
                # Ignore bad value; keep validated cfg.run.max_months
                logger.warning("ignoring %sMAX_MONTHS=%r (expected a positive integer)", prefix, max_months)

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
