"""Command-line front end for the prop firm risk calculator."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

import structlog

from .calculator.core import RiskCalculator
from .config.defaults import CUSTOM_INSTRUMENT, DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .data.models import ERROR_FIELDS
from .errors import ConfigurationError
from .logging.config import configure_logging
from .state.session import CalculatorSession
from .utils.formatting import format_currency, format_number

logger = structlog.get_logger(__name__)

LOG_LEVEL_ENV = "RISK_CALC_LOG_LEVEL"

EXIT_OK = 0
EXIT_INVALID_INPUT = 1
EXIT_CONFIG_ERROR = 2

# CLI option dest -> InputSnapshot field
FIELD_OPTIONS = {
    "profit_target": "profit_target",
    "max_loss": "max_loss",
    "max_contracts": "max_contract_size",
    "daily_loss_cap": "daily_loss_cap",
    "trades_to_bust": "trades_to_bust",
    "stop_ticks": "stop_ticks",
    "instrument": "asset",
    "tick_value": "custom_tick_value",
}

FIELD_LABELS = {
    "profitTarget": "Profit Target ($)",
    "maxLoss": "Max Loss Limit ($)",
    "maxContractSize": "Max Contract Size",
    "dailyLossCap": "Daily Loss Limit ($)",
    "tradesToBust": "Trades until account is lost",
    "stopTicks": "Stop loss (ticks)",
    "tickValue": "Tick Value ($/tick)",
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        "risk-calc",
        description="Size futures positions from prop firm account limits.",
    )
    p.add_argument("--profit-target", help="Account profit target in dollars")
    p.add_argument("--max-loss", help="Max loss limit in dollars")
    p.add_argument("--max-contracts", help="Max contract size allowed by the firm")
    p.add_argument("--daily-loss-cap", help="Daily loss limit in dollars")
    p.add_argument("--trades-to-bust", help="Losing trades until the account is lost")
    p.add_argument("--stop-ticks", help="Stop loss size in ticks")
    p.add_argument(
        "--instrument",
        help=f"Instrument symbol, or '{CUSTOM_INSTRUMENT}' together with --tick-value",
    )
    p.add_argument(
        "--tick-value",
        help=f"Dollars per tick; selects the '{CUSTOM_INSTRUMENT}' instrument when given alone",
    )
    p.add_argument(
        "--consistency-rule",
        metavar="PCT",
        help="Consistency rule percentage (0-100) for the max daily profit figure",
    )
    p.add_argument("--list-instruments", action="store_true", help="Print the tick table and exit")
    p.add_argument("--config-dir", type=Path, help="Directory holding instruments.yaml")
    p.add_argument("--json", action="store_true", help="Emit the outcome as JSON")
    p.add_argument(
        "--log-level",
        default=os.getenv(LOG_LEVEL_ENV, "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    return p


def snapshot_from_args(args: argparse.Namespace) -> dict[str, object]:
    """Form edits implied by the parsed command line."""
    changes: dict[str, object] = {}
    for option, field_name in FIELD_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            changes[field_name] = value

    if args.tick_value is not None and args.instrument is None:
        changes["asset"] = CUSTOM_INSTRUMENT

    if args.consistency_rule is not None:
        changes["apply_consistency_rule"] = True
        changes["consistency_rule"] = args.consistency_rule

    return changes


def render_instruments(session: CalculatorSession, out: TextIO) -> None:
    table = session.calculator.tick_table
    for symbol in table.symbols:
        out.write(f"{symbol:<6} {format_currency(table[symbol])}/tick\n")


def render_outcome(session: CalculatorSession, out: TextIO) -> None:
    """Write the outcome block the way the form's output panel lays it out."""
    outcome = session.outcome
    if outcome is None:
        out.write("Enter inputs and calculate to see risk outputs.\n")
        return

    if not outcome.success:
        for field_name in ERROR_FIELDS:
            if field_name in outcome.errors:
                out.write(f"{FIELD_LABELS[field_name]}: {outcome.errors[field_name]}\n")
        return

    result = outcome.result
    out.write(f"Risk per trade:         {format_currency(result.risk_per_trade)}"
              f" ({format_number(result.risk_per_trade_ticks)} ticks per trade)\n")
    out.write(f"Risk per contract:      {format_currency(result.risk_per_contract)}\n")
    out.write(f"Daily Profit Target:    {format_currency(result.daily_profit_threshold)}\n")

    max_daily_profit = session.max_daily_profit
    if max_daily_profit is not None:
        out.write(f"MAX Daily Profit:       {format_currency(max_daily_profit)}\n")

    out.write(f"Suggested contracts:    {result.suggested_contracts}\n")
    for warning in outcome.warnings:
        out.write(f"  ! {warning}\n")

    out.write(f"Max trades per day:     {result.max_trades_per_day}\n")
    out.write(f"Daily profit threshold: {format_currency(result.daily_profit_threshold)}\n")


def render_json(session: CalculatorSession, out: TextIO) -> None:
    payload = session.outcome.to_dict() if session.outcome is not None else {}
    payload["instrument"] = session.snapshot.asset
    payload["tickValue"] = session.tick_value
    payload["maxDailyProfit"] = session.max_daily_profit
    json.dump(payload, out, indent=2)
    out.write("\n")


def build_session(config_dir: Optional[Path]) -> CalculatorSession:
    """Session wired to the tick table and form defaults from configuration."""
    loader = ConfigLoader.create(config_dir)
    defaults = get_default_config()
    config = DefaultConfig(form=loader.load_form_defaults(), calculator=defaults.calculator)
    calculator = RiskCalculator(tick_table=loader.build_tick_table(), config=config)
    return CalculatorSession(calculator=calculator)


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, stream=sys.stderr, include_timestamp=False)

    try:
        session = build_session(args.config_dir)
    except ConfigurationError as e:
        logger.error("Configuration error", error=str(e), source=e.source)
        sys.stderr.write(f"Configuration error: {e}\n")
        for err in e.errors:
            sys.stderr.write(f"  • {err.field}: {err.message} (value: {err.value})\n")
        return EXIT_CONFIG_ERROR

    if args.list_instruments:
        render_instruments(session, out)
        return EXIT_OK

    session.update(**snapshot_from_args(args))
    outcome = session.calculate()

    if args.json:
        render_json(session, out)
    else:
        render_outcome(session, out)

    return EXIT_OK if outcome.success else EXIT_INVALID_INPUT


if __name__ == "__main__":
    sys.exit(main())
