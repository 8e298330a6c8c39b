#!/usr/bin/env python3
"""
Basic Usage Example - Prop Firm Risk Calculator

This script walks through one interactive form session. It shows how to:
- Start a session with the default form values
- Calculate and read the risk figures
- Edit inputs and see the result go stale
- Handle field errors

Run: python examples/basic_usage.py
"""

import json

from risk_calc_app.logging import configure_logging
from risk_calc_app.state import CalculatorSession
from risk_calc_app.utils import format_currency, format_number


def print_outcome(session: CalculatorSession) -> None:
    """Print the outcome currently on display."""
    view = session.view()
    if view.outcome is None:
        print("  (nothing on display)")
        return

    if not view.outcome.success:
        for field_name, message in view.errors.items():
            print(f"  ✗ {field_name}: {message}")
        return

    result = view.outcome.result
    marker = " [stale]" if view.is_stale else ""
    print(f"  Risk per trade:      {format_currency(result.risk_per_trade)}"
          f" ({format_number(result.risk_per_trade_ticks)} ticks){marker}")
    print(f"  Risk per contract:   {format_currency(result.risk_per_contract)}")
    print(f"  Suggested contracts: {result.suggested_contracts}")
    print(f"  Max trades per day:  {result.max_trades_per_day}")
    if view.max_daily_profit is not None:
        print(f"  MAX daily profit:    {format_currency(view.max_daily_profit)}")
    if view.show_warning:
        for warning in view.outcome.warnings:
            print(f"  ⚠️  {warning}")


def main() -> None:
    configure_logging(level="WARNING", include_timestamp=False)

    print("🧮 Prop Firm Risk Calculator - Basic Usage")
    print("=" * 50)

    session = CalculatorSession()
    print(f"\n📋 Initial form: asset={session.snapshot.asset} tick={session.tick_value}")

    print("\n1️⃣  Calculate with the daily loss limit still blank")
    session.calculate()
    print_outcome(session)

    print("\n2️⃣  Fill in the missing fields")
    session.update(profit_target="3000", daily_loss_cap="500")
    session.calculate()
    print_outcome(session)

    print("\n3️⃣  Switch to MES without recalculating")
    session.update(asset="MES")
    print_outcome(session)

    print("\n4️⃣  Recalculate with a 40% consistency rule")
    session.update(max_contract_size="10", apply_consistency_rule=True, consistency_rule="40")
    session.calculate()
    print_outcome(session)

    print("\n5️⃣  A wide stop on a custom instrument")
    session.update(asset="Custom", custom_tick_value="50", stop_ticks="40")
    session.calculate()
    print_outcome(session)

    print("\n📦 JSON outcome:")
    print(json.dumps(session.outcome.to_dict(), indent=2))


if __name__ == "__main__":
    main()
