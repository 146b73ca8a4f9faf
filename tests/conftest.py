# tests/conftest.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from loan_planner.core.finance import amortize
from loan_planner.core.logs import ROOT_LOGGER_NAME
from tests.utils import make_loan_parameters


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("LOANPLAN_OUT", "LOANPLAN_MAX_MONTHS", "LOANPLAN_DEBUG", "LOANPLAN_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers added by configure_logging() so each test starts clean."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


# -------- Loan fixtures --------
@pytest.fixture
def loan_params():
    """Factory for the reference loan (overridable)."""

    def _factory(**overrides):
        return make_loan_parameters(**overrides)

    return _factory


@pytest.fixture
def run_loan():
    """Factory to amortize the reference loan with overrides."""

    def _factory(*, max_months: int | None = None, **overrides):
        return amortize(make_loan_parameters(**overrides), max_months=max_months)

    return _factory


@pytest.fixture
def json_inputs_file(tmp_path: Path):
    """
    Callable factory writing a JSON payload into tmp_path.

    Usage:
        path = json_inputs_file({"principal": 100000, ...})
        path = json_inputs_file("{not json", filename="broken.json")
    """

    def _factory(payload: Any, *, filename: str = "loan.json") -> Path:
        p = tmp_path / filename
        text = payload if isinstance(payload, str) else json.dumps(payload)
        p.write_text(text, encoding="utf-8")
        return p

    return _factory


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
