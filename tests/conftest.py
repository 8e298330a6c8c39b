"""Pytest configuration and shared fixtures."""

from dataclasses import replace

import pytest

from risk_calc_app.calculator.core import RiskCalculator
from risk_calc_app.data.models import InputSnapshot, TickTable
from risk_calc_app.state.session import CalculatorSession


@pytest.fixture
def valid_snapshot() -> InputSnapshot:
    """Default form with the two blank required fields filled in."""
    return replace(
        InputSnapshot.from_defaults(),
        max_contract_size="1",
        max_loss="2500",
        daily_loss_cap="500",
        profit_target="3000",
        trades_to_bust="10",
        asset="ES",
        stop_ticks="12",
    )


@pytest.fixture
def tick_table() -> TickTable:
    """Built-in instrument table."""
    return TickTable()


@pytest.fixture
def calculator(tick_table: TickTable) -> RiskCalculator:
    """Calculator over the built-in instrument table."""
    return RiskCalculator(tick_table=tick_table)


@pytest.fixture
def session(calculator: RiskCalculator, valid_snapshot: InputSnapshot) -> CalculatorSession:
    """Session whose form already holds a valid snapshot."""
    return CalculatorSession(calculator=calculator, snapshot=valid_snapshot)


@pytest.fixture
def instruments_yaml(tmp_path):
    """Write an instruments.yaml into a temporary config directory."""
    def _write(text: str):
        (tmp_path / "instruments.yaml").write_text(text, encoding="utf-8")
        return tmp_path
    return _write
