"""
Field validation for calculator input snapshots.

Every rule runs on every request so the user sees all problems at once; each
field contributes at most one error.
"""

from dataclasses import dataclass
from typing import Optional

from ..data.models import (
    DAILY_LOSS_CAP,
    MAX_CONTRACT_SIZE,
    MAX_LOSS,
    PROFIT_TARGET,
    STOP_TICKS,
    TICK_VALUE,
    TRADES_TO_BUST,
    FieldError,
    InputSnapshot,
)
from ..data.parsers import ParsedNumber, parse_number
from ..errors import FieldErrorKind
from ..logging.config import get_calculation_logger, log_validation_outcome


PROFIT_TARGET_REQUIRED = "Profit Target is required."
PROFIT_TARGET_POSITIVE = "Profit Target must be greater than 0."
MAX_CONTRACT_SIZE_MINIMUM = "Enter a whole number of at least 1."
MAX_LOSS_POSITIVE = "Max loss must be greater than 0."
TRADES_TO_BUST_REQUIRED = "Trades until account is lost is required."
TRADES_TO_BUST_MINIMUM = "Trades until account is lost must be at least 1."
STOP_TICKS_POSITIVE = "Stop loss size must be greater than 0."
TICK_VALUE_POSITIVE = "Tick value must be greater than 0."
DAILY_LOSS_CAP_RECOMMENDED = (
    "Even if the prop firm doesn't have a Daily Loss Limit, "
    "you should still have one as part of your trading plan."
)
DAILY_LOSS_CAP_POSITIVE = "Daily loss limit must be greater than 0."


@dataclass(frozen=True)
class ValidatedInputs:
    """Parsed numbers for a snapshot plus any field errors found."""
    profit_target: ParsedNumber
    max_contract_size: ParsedNumber
    max_loss: ParsedNumber
    trades_to_bust: ParsedNumber
    stop_ticks: ParsedNumber
    tick_value: ParsedNumber
    daily_loss_cap: ParsedNumber
    errors: tuple[FieldError, ...]

    @property
    def is_valid(self) -> bool:
        return not self.errors


class InputValidator:
    """Applies per-field rules to a raw input snapshot."""

    def __init__(self):
        self.calculation_logger = get_calculation_logger(__name__)

    def validate(self, snapshot: InputSnapshot, tick_value: Optional[float]) -> ValidatedInputs:
        """
        Validate all fields of a snapshot.

        Args:
            snapshot: Raw form values
            tick_value: Tick value resolved from the instrument table or the
                custom field; None when nothing could be resolved

        Returns:
            ValidatedInputs carrying parsed values and the collected errors
        """
        profit_target = parse_number(snapshot.profit_target)
        max_contract_size = parse_number(snapshot.max_contract_size)
        max_loss = parse_number(snapshot.max_loss)
        trades_to_bust = parse_number(snapshot.trades_to_bust)
        stop_ticks = parse_number(snapshot.stop_ticks)
        tick = parse_number(tick_value)
        daily_loss_cap = parse_number(snapshot.daily_loss_cap)

        checks = [
            self.check_profit_target(profit_target),
            self.check_max_contract_size(max_contract_size),
            self.check_max_loss(max_loss),
            self.check_trades_to_bust(trades_to_bust),
            self.check_stop_ticks(stop_ticks),
            self.check_tick_value(tick),
            self.check_daily_loss_cap(daily_loss_cap),
        ]

        return ValidatedInputs(
            profit_target=profit_target,
            max_contract_size=max_contract_size,
            max_loss=max_loss,
            trades_to_bust=trades_to_bust,
            stop_ticks=stop_ticks,
            tick_value=tick,
            daily_loss_cap=daily_loss_cap,
            errors=tuple(error for error in checks if error is not None),
        )

    def check_profit_target(self, parsed: ParsedNumber) -> Optional[FieldError]:
        """Required; must be greater than zero."""
        if parsed.is_blank:
            return self._reject(PROFIT_TARGET, FieldErrorKind.REQUIRED, PROFIT_TARGET_REQUIRED, parsed)
        if not parsed.greater_than(0):
            return self._reject(PROFIT_TARGET, FieldErrorKind.RANGE, PROFIT_TARGET_POSITIVE, parsed)
        return self._accept(PROFIT_TARGET, "> 0", parsed)

    def check_max_contract_size(self, parsed: ParsedNumber) -> Optional[FieldError]:
        """Must be at least one contract."""
        if not parsed.at_least(1):
            return self._reject(MAX_CONTRACT_SIZE, FieldErrorKind.RANGE, MAX_CONTRACT_SIZE_MINIMUM, parsed)
        return self._accept(MAX_CONTRACT_SIZE, ">= 1", parsed)

    def check_max_loss(self, parsed: ParsedNumber) -> Optional[FieldError]:
        if not parsed.greater_than(0):
            return self._reject(MAX_LOSS, FieldErrorKind.RANGE, MAX_LOSS_POSITIVE, parsed)
        return self._accept(MAX_LOSS, "> 0", parsed)

    def check_trades_to_bust(self, parsed: ParsedNumber) -> Optional[FieldError]:
        """Required; must be at least one trade."""
        if parsed.is_blank:
            return self._reject(TRADES_TO_BUST, FieldErrorKind.REQUIRED, TRADES_TO_BUST_REQUIRED, parsed)
        if not parsed.at_least(1):
            return self._reject(TRADES_TO_BUST, FieldErrorKind.RANGE, TRADES_TO_BUST_MINIMUM, parsed)
        return self._accept(TRADES_TO_BUST, ">= 1", parsed)

    def check_stop_ticks(self, parsed: ParsedNumber) -> Optional[FieldError]:
        if not parsed.greater_than(0):
            return self._reject(STOP_TICKS, FieldErrorKind.RANGE, STOP_TICKS_POSITIVE, parsed)
        return self._accept(STOP_TICKS, "> 0", parsed)

    def check_tick_value(self, parsed: ParsedNumber) -> Optional[FieldError]:
        if not parsed.greater_than(0):
            return self._reject(TICK_VALUE, FieldErrorKind.RANGE, TICK_VALUE_POSITIVE, parsed)
        return self._accept(TICK_VALUE, "> 0", parsed)

    def check_daily_loss_cap(self, parsed: ParsedNumber) -> Optional[FieldError]:
        """
        Required even when the prop firm sets no daily limit.

        The empty case is worded as advice but still blocks the calculation.
        """
        if parsed.is_blank:
            return self._reject(DAILY_LOSS_CAP, FieldErrorKind.REQUIRED, DAILY_LOSS_CAP_RECOMMENDED, parsed)
        if not parsed.greater_than(0):
            return self._reject(DAILY_LOSS_CAP, FieldErrorKind.RANGE, DAILY_LOSS_CAP_POSITIVE, parsed)
        return self._accept(DAILY_LOSS_CAP, "> 0", parsed)

    def _accept(self, field: str, rule: str, parsed: ParsedNumber) -> None:
        log_validation_outcome(self.calculation_logger, field, True, rule, parsed.raw)
        return None

    def _reject(self, field: str, kind: FieldErrorKind, message: str,
                parsed: ParsedNumber) -> FieldError:
        log_validation_outcome(
            self.calculation_logger, field, False, message, parsed.raw,
            context={"kind": kind.value}
        )
        return FieldError(field=field, kind=kind, message=message, value=parsed.raw)
