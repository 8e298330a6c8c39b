"""Contract sizing arithmetic on already-validated numbers"""

import math
from typing import Optional


def risk_per_trade(max_loss: float, trades_to_bust: float) -> float:
    """Currency the trader can lose on one trade and still survive ``trades_to_bust`` losses."""
    return max_loss / trades_to_bust


def risk_per_contract(stop_ticks: float, tick_value: float) -> float:
    """Currency lost by one contract when the stop is hit."""
    return stop_ticks * tick_value


def suggested_contracts(trade_risk: float, contract_risk: float, max_contract_size: float) -> int:
    """
    Whole contracts affordable within the per-trade risk, capped by the firm limit.

    Args:
        trade_risk: Risk per trade in currency
        contract_risk: Risk per contract in currency, must be positive and finite
        max_contract_size: Firm contract limit; fractional limits round down

    Returns:
        Non-negative contract count (0 when one contract is already too risky)
    """
    raw = trade_risk / contract_risk
    capped = math.floor(max_contract_size)
    # Quotient overflows when a tiny contract risk meets a huge budget
    if not math.isfinite(raw):
        return capped
    return min(math.floor(raw), capped)


def risk_in_ticks(trade_risk: float, tick_value: float) -> float:
    return trade_risk / tick_value


def max_trades_per_day(daily_loss_cap: float, trade_risk: float) -> int:
    """Full-risk losing trades that fit inside the daily loss cap."""
    return math.floor(daily_loss_cap / trade_risk)


def max_daily_profit(profit_target: Optional[float], consistency_pct: Optional[float],
                     percent_scale: float = 100.0) -> Optional[float]:
    """
    Largest single-day profit allowed by a consistency rule.

    Returns None when either input is missing, non-finite or not positive.
    """
    if profit_target is None or consistency_pct is None:
        return None
    if not (math.isfinite(profit_target) and math.isfinite(consistency_pct)):
        return None
    if profit_target <= 0 or consistency_pct <= 0:
        return None
    return profit_target * (consistency_pct / percent_scale)
