"""Risk calculator coordinating validation and contract sizing"""

import math
from typing import Optional

import structlog

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import (
    DAILY_LOSS_CAP,
    MAX_LOSS,
    STOP_TICKS,
    TICK_VALUE,
    CalculationOutcome,
    FieldError,
    InputSnapshot,
    RiskResult,
    TickTable,
)
from ..data.parsers import ParsedNumber, parse_number
from ..errors import FieldErrorKind
from ..logging.config import get_calculation_logger
from . import sizing
from .validation import InputValidator, ValidatedInputs

logger = structlog.get_logger(__name__)

DAILY_LOSS_CAP_TOO_LOW = (
    "Daily loss cap is lower than risk per trade. Increase the cap or reduce risk."
)
BELOW_MINIMUM_WARNING = (
    "Suggested contracts is below 1. Increase max loss or reduce stop size."
)
RISK_PER_TRADE_OUT_OF_RANGE = (
    "Max loss is too small to spread across that many trades."
)
RISK_PER_CONTRACT_OUT_OF_RANGE = (
    "Stop loss size and tick value give a risk per contract that is out of range."
)
RISK_IN_TICKS_OUT_OF_RANGE = "Tick value is too small for this risk per trade."
DAILY_LOSS_CAP_OUT_OF_RANGE = "Daily loss limit is too large for this risk per trade."


class RiskCalculator:
    """
    Maps a raw input snapshot to either risk figures or field errors.

    The calculator holds no per-request state; calling ``calculate`` twice
    with the same snapshot yields equal outcomes.
    """

    def __init__(self, tick_table: Optional[TickTable] = None,
                 config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()
        self.tick_table = tick_table if tick_table is not None else TickTable()
        self.validator = InputValidator()
        self.logger = logger
        self.calculation_logger = get_calculation_logger(__name__)

    def resolve_tick_value(self, snapshot: InputSnapshot) -> Optional[float]:
        """
        Tick value for the selected instrument.

        Returns the parsed custom value for the custom selector, the table
        value for a listed symbol, and None otherwise.
        """
        if snapshot.asset == self.config.calculator.custom_instrument:
            return parse_number(snapshot.custom_tick_value).value
        return self.tick_table.get(snapshot.asset)

    def calculate(self, snapshot: InputSnapshot) -> CalculationOutcome:
        """
        Validate a snapshot and compute contract sizing.

        Args:
            snapshot: Raw form values

        Returns:
            CalculationOutcome holding a RiskResult, or the field errors that
            prevented one
        """
        self.logger.debug("calculation_requested", asset=snapshot.asset)
        tick_value = self.resolve_tick_value(snapshot)
        validated = self.validator.validate(snapshot, tick_value)

        if not validated.is_valid:
            self.calculation_logger.info(
                "calculation_rejected",
                asset=snapshot.asset,
                fields=[e.field for e in validated.errors],
            )
            return CalculationOutcome.failed(list(validated.errors))

        max_loss = validated.max_loss.value
        trades = validated.trades_to_bust.value
        stop_ticks = validated.stop_ticks.value
        tick = validated.tick_value.value
        daily_cap = validated.daily_loss_cap.value

        trade_risk = sizing.risk_per_trade(max_loss, trades)
        contract_risk = sizing.risk_per_contract(stop_ticks, tick)
        ticks = sizing.risk_in_ticks(trade_risk, tick)

        range_errors = self.check_derived_figures(validated, trade_risk, contract_risk, ticks)
        if range_errors:
            self.calculation_logger.warning(
                "derived_figures_out_of_range",
                asset=snapshot.asset,
                fields=[e.field for e in range_errors],
            )
            return CalculationOutcome.failed(range_errors)

        if trade_risk > daily_cap:
            self.calculation_logger.warning(
                "daily_loss_cap_below_trade_risk",
                risk_per_trade=trade_risk,
                daily_loss_cap=daily_cap,
            )
            return CalculationOutcome.failed([
                FieldError(
                    field=DAILY_LOSS_CAP,
                    kind=FieldErrorKind.INVARIANT,
                    message=DAILY_LOSS_CAP_TOO_LOW,
                    value=snapshot.daily_loss_cap,
                )
            ])

        result = RiskResult(
            risk_per_trade=trade_risk,
            risk_per_contract=contract_risk,
            suggested_contracts=sizing.suggested_contracts(
                trade_risk, contract_risk, validated.max_contract_size.value
            ),
            risk_per_trade_ticks=ticks,
            max_trades_per_day=sizing.max_trades_per_day(daily_cap, trade_risk),
            daily_profit_threshold=daily_cap,
        )

        warnings: tuple[str, ...] = ()
        if result.suggested_contracts < self.config.calculator.min_contracts:
            warnings = (BELOW_MINIMUM_WARNING,)
            self.calculation_logger.warning(
                "suggested_contracts_below_minimum",
                risk_per_trade=trade_risk,
                risk_per_contract=contract_risk,
            )

        self.calculation_logger.info(
            "calculation_completed",
            asset=snapshot.asset,
            tick_value=tick,
            **result.to_dict(),
        )
        return CalculationOutcome.succeeded(result, warnings)

    def check_derived_figures(self, validated: ValidatedInputs, trade_risk: float,
                              contract_risk: float, ticks: float) -> list[FieldError]:
        """
        Range errors for figures that valid fields cannot produce as numbers.

        Extreme but finite inputs can underflow a product to zero or overflow
        a quotient to infinity; each case is blamed on the field behind it.
        """
        errors = []

        if not trade_risk > 0:
            errors.append(self._out_of_range(MAX_LOSS, RISK_PER_TRADE_OUT_OF_RANGE, validated.max_loss))

        if not (contract_risk > 0 and math.isfinite(contract_risk)):
            errors.append(self._out_of_range(STOP_TICKS, RISK_PER_CONTRACT_OUT_OF_RANGE, validated.stop_ticks))

        if not math.isfinite(ticks):
            errors.append(self._out_of_range(TICK_VALUE, RISK_IN_TICKS_OUT_OF_RANGE, validated.tick_value))

        if trade_risk > 0 and not math.isfinite(validated.daily_loss_cap.value / trade_risk):
            errors.append(self._out_of_range(DAILY_LOSS_CAP, DAILY_LOSS_CAP_OUT_OF_RANGE, validated.daily_loss_cap))

        return errors

    def _out_of_range(self, field: str, message: str, parsed: ParsedNumber) -> FieldError:
        return FieldError(field=field, kind=FieldErrorKind.RANGE, message=message, value=parsed.raw)

    def max_daily_profit(self, snapshot: InputSnapshot) -> Optional[float]:
        """Display-only consistency-rule figure; never gates a calculation."""
        if not snapshot.apply_consistency_rule:
            return None
        return sizing.max_daily_profit(
            parse_number(snapshot.profit_target).value,
            parse_number(snapshot.consistency_rule).value,
            percent_scale=self.config.calculator.percent_scale,
        )


def calculate(snapshot: InputSnapshot, tick_table: Optional[TickTable] = None) -> CalculationOutcome:
    """Calculate an outcome for ``snapshot`` with a one-off calculator."""
    return RiskCalculator(tick_table=tick_table).calculate(snapshot)
