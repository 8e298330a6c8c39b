"""Validation and contract sizing for the risk calculator form"""

from .core import RiskCalculator, calculate
from .sizing import (
    max_daily_profit,
    max_trades_per_day,
    risk_in_ticks,
    risk_per_contract,
    risk_per_trade,
    suggested_contracts,
)
from .validation import InputValidator

__all__ = [
    "RiskCalculator",
    "InputValidator",
    "calculate",
    "risk_per_trade",
    "risk_per_contract",
    "suggested_contracts",
    "risk_in_ticks",
    "max_trades_per_day",
    "max_daily_profit",
]
