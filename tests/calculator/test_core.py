"""Tests for the risk calculator core."""

from dataclasses import replace

import pytest

from risk_calc_app.calculator.core import (
    BELOW_MINIMUM_WARNING,
    DAILY_LOSS_CAP_OUT_OF_RANGE,
    DAILY_LOSS_CAP_TOO_LOW,
    RISK_IN_TICKS_OUT_OF_RANGE,
    RISK_PER_CONTRACT_OUT_OF_RANGE,
    RISK_PER_TRADE_OUT_OF_RANGE,
    RiskCalculator,
    calculate,
)
from risk_calc_app.calculator.validation import (
    DAILY_LOSS_CAP_RECOMMENDED,
    MAX_CONTRACT_SIZE_MINIMUM,
    MAX_LOSS_POSITIVE,
    PROFIT_TARGET_REQUIRED,
    STOP_TICKS_POSITIVE,
    TICK_VALUE_POSITIVE,
    TRADES_TO_BUST_MINIMUM,
    TRADES_TO_BUST_REQUIRED,
)
from risk_calc_app.config.defaults import CalculatorParams, DefaultConfig, FormDefaults
from risk_calc_app.data.models import ERROR_FIELDS, InputSnapshot, TickTable
from risk_calc_app.errors import FieldErrorKind
from risk_calc_app.state.session import CalculatorSession


class TestWorkedExample:
    """ES with a $2,500 drawdown spread across ten losing trades."""

    def test_result_figures(self, calculator, valid_snapshot):
        """Every result field matches the hand-computed values."""
        outcome = calculator.calculate(valid_snapshot)

        assert outcome.success
        assert outcome.errors == {}
        result = outcome.result
        assert result.risk_per_trade == 250
        assert result.risk_per_contract == 150
        assert result.suggested_contracts == 1
        assert result.risk_per_trade_ticks == 20
        assert result.max_trades_per_day == 2
        assert result.daily_profit_threshold == 500
        assert outcome.warnings == ()

    def test_daily_profit_threshold_equals_daily_cap(self, calculator, valid_snapshot):
        """The threshold always mirrors the daily loss cap."""
        outcome = calculator.calculate(replace(valid_snapshot, daily_loss_cap="1234.5"))
        assert outcome.result.daily_profit_threshold == 1234.5

    def test_module_level_calculate(self, valid_snapshot):
        """The convenience function uses the built-in tick table."""
        outcome = calculate(valid_snapshot)
        assert outcome.success
        assert outcome.result.risk_per_contract == 150

    def test_repeated_calculation_is_identical(self, calculator, valid_snapshot):
        """Calculating twice with the same inputs yields equal outcomes."""
        first = calculator.calculate(valid_snapshot)
        second = calculator.calculate(valid_snapshot)
        assert first == second
        assert first.to_dict() == second.to_dict()


class TestContractSizing:
    """Suggested contracts capped by the firm limit."""

    def test_firm_limit_caps_contracts(self, calculator, valid_snapshot):
        """MES affords sixteen contracts but the firm allows ten."""
        snapshot = replace(valid_snapshot, asset="MES", max_contract_size="10")
        result = calculator.calculate(snapshot).result

        assert result.risk_per_contract == 15
        assert result.suggested_contracts == 10
        assert result.risk_per_trade_ticks == 200

    def test_risk_budget_caps_contracts(self, calculator, valid_snapshot):
        """With a generous firm limit the risk budget decides."""
        snapshot = replace(valid_snapshot, max_contract_size="10")
        assert calculator.calculate(snapshot).result.suggested_contracts == 1

    def test_fractional_contract_limit_rounds_down(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, asset="MES", max_contract_size="2.9")
        assert calculator.calculate(snapshot).result.suggested_contracts == 2

    def test_fractional_trades_to_bust_accepted(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, trades_to_bust="2.5", daily_loss_cap="1000")
        outcome = calculator.calculate(snapshot)
        assert outcome.success
        assert outcome.result.risk_per_trade == 1000

    def test_scientific_notation_accepted(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, max_loss="2.5e3")
        assert calculator.calculate(snapshot).result.risk_per_trade == 250


class TestBelowMinimumWarning:
    """Plans whose stop is too wide for even one contract."""

    def test_zero_contracts_is_a_result_with_warning(self, calculator, valid_snapshot):
        """A 40 tick ES stop costs $500, twice the per-trade budget."""
        outcome = calculator.calculate(replace(valid_snapshot, stop_ticks="40"))

        assert outcome.success
        assert outcome.result.suggested_contracts == 0
        assert outcome.warnings == (BELOW_MINIMUM_WARNING,)

    def test_no_warning_at_one_contract(self, calculator, valid_snapshot):
        outcome = calculator.calculate(valid_snapshot)
        assert outcome.warnings == ()

    def test_configured_minimum_raises_threshold(self, valid_snapshot):
        """Warning and session display follow the configured minimum."""
        config = DefaultConfig(form=FormDefaults(), calculator=CalculatorParams(min_contracts=2))
        calculator = RiskCalculator(config=config)
        outcome = calculator.calculate(valid_snapshot)

        assert outcome.result.suggested_contracts == 1
        assert outcome.warnings == (BELOW_MINIMUM_WARNING,)

        session = CalculatorSession(calculator=calculator, snapshot=valid_snapshot)
        session.calculate()
        assert session.show_warning
        assert session.view().show_warning


class TestDailyLossCapInvariant:
    """Risk per trade must fit inside the daily loss cap."""

    def test_cap_below_trade_risk_rejected(self, calculator, valid_snapshot):
        outcome = calculator.calculate(replace(valid_snapshot, daily_loss_cap="200"))

        assert not outcome.success
        assert outcome.result is None
        assert outcome.errors == {"dailyLossCap": DAILY_LOSS_CAP_TOO_LOW}
        assert outcome.error_kinds == {"dailyLossCap": FieldErrorKind.INVARIANT}

    def test_cap_equal_to_trade_risk_accepted(self, calculator, valid_snapshot):
        outcome = calculator.calculate(replace(valid_snapshot, daily_loss_cap="250"))
        assert outcome.success
        assert outcome.result.max_trades_per_day == 1

    def test_invariant_not_checked_when_fields_invalid(self, calculator, valid_snapshot):
        """Field errors are reported without the cross-field rule."""
        snapshot = replace(valid_snapshot, daily_loss_cap="200", profit_target="")
        outcome = calculator.calculate(snapshot)
        assert outcome.errors == {"profitTarget": PROFIT_TARGET_REQUIRED}


class TestFieldErrors:
    """Validation failures are returned, not raised."""

    def test_blank_profit_target(self, calculator, valid_snapshot):
        outcome = calculator.calculate(replace(valid_snapshot, profit_target=""))
        assert outcome.errors == {"profitTarget": PROFIT_TARGET_REQUIRED}
        assert outcome.error_kinds["profitTarget"] is FieldErrorKind.REQUIRED

    def test_trades_to_bust_zero(self, calculator, valid_snapshot):
        outcome = calculator.calculate(replace(valid_snapshot, trades_to_bust="0"))
        assert outcome.errors == {"tradesToBust": TRADES_TO_BUST_MINIMUM}

    def test_blank_daily_loss_cap_blocks_calculation(self, calculator, valid_snapshot):
        """The advisory wording still counts as an error."""
        outcome = calculator.calculate(replace(valid_snapshot, daily_loss_cap=""))
        assert not outcome.success
        assert outcome.errors == {"dailyLossCap": DAILY_LOSS_CAP_RECOMMENDED}

    def test_infinite_max_loss_rejected(self, calculator, valid_snapshot):
        outcome = calculator.calculate(replace(valid_snapshot, max_loss="Infinity"))
        assert outcome.errors == {"maxLoss": MAX_LOSS_POSITIVE}

    def test_default_form_reports_both_blank_required_fields(self, calculator):
        outcome = calculator.calculate(InputSnapshot.from_defaults())
        assert list(outcome.errors) == ["profitTarget", "dailyLossCap"]

    def test_all_errors_collected_in_field_order(self, calculator):
        """Every invalid field is reported in a single pass."""
        snapshot = replace(
            InputSnapshot.from_defaults(),
            max_contract_size="0",
            max_loss="-1",
            daily_loss_cap="",
            profit_target="",
            trades_to_bust="",
            asset="Custom",
            custom_tick_value="",
            stop_ticks="abc",
        )
        outcome = calculator.calculate(snapshot)

        assert list(outcome.errors) == list(ERROR_FIELDS)
        assert outcome.errors["maxContractSize"] == MAX_CONTRACT_SIZE_MINIMUM
        assert outcome.errors["maxLoss"] == MAX_LOSS_POSITIVE
        assert outcome.errors["tradesToBust"] == TRADES_TO_BUST_REQUIRED
        assert outcome.errors["stopTicks"] == STOP_TICKS_POSITIVE
        assert outcome.errors["tickValue"] == TICK_VALUE_POSITIVE
        assert outcome.errors["dailyLossCap"] == DAILY_LOSS_CAP_RECOMMENDED


class TestTickValueResolution:
    """Tick value from the table or the custom field."""

    def test_custom_tick_value(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, asset="Custom", custom_tick_value="5",
                           max_contract_size="10")
        outcome = calculator.calculate(snapshot)

        assert outcome.result.risk_per_contract == 60
        assert outcome.result.suggested_contracts == 4
        assert outcome.result.risk_per_trade_ticks == 50

    def test_custom_tick_value_ignored_for_listed_symbol(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, custom_tick_value="99")
        assert calculator.resolve_tick_value(snapshot) == 12.5

    def test_blank_custom_tick_value(self, calculator, valid_snapshot):
        outcome = calculator.calculate(replace(valid_snapshot, asset="Custom"))
        assert outcome.errors == {"tickValue": TICK_VALUE_POSITIVE}

    def test_unknown_instrument_reports_tick_value(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, asset="ZZZ")
        assert calculator.resolve_tick_value(snapshot) is None
        assert calculator.calculate(snapshot).errors == {"tickValue": TICK_VALUE_POSITIVE}

    def test_extended_table(self, valid_snapshot):
        """Callers may add instruments to the table."""
        calculator = RiskCalculator(tick_table=TickTable().extended({"FDAX": 25.0}))
        outcome = calculator.calculate(replace(valid_snapshot, asset="FDAX"))
        assert outcome.result.risk_per_contract == 300

    def test_replaced_table(self, valid_snapshot):
        """A replacement table no longer lists the built-in symbols."""
        calculator = RiskCalculator(tick_table=TickTable({"FDAX": 25.0}))
        assert not calculator.calculate(valid_snapshot).success


class TestMaxDailyProfit:
    """Consistency rule figure is display-only."""

    def test_applied_rule(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, apply_consistency_rule=True, consistency_rule="40")
        assert calculator.max_daily_profit(snapshot) == pytest.approx(1200)

    def test_rule_not_applied(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, consistency_rule="40")
        assert calculator.max_daily_profit(snapshot) is None

    @pytest.mark.parametrize("pct", ["", "0", "-5", "abc"])
    def test_unusable_percentage(self, calculator, valid_snapshot, pct):
        snapshot = replace(valid_snapshot, apply_consistency_rule=True, consistency_rule=pct)
        assert calculator.max_daily_profit(snapshot) is None

    def test_rule_does_not_affect_sizing(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, apply_consistency_rule=True, consistency_rule="abc")
        assert calculator.calculate(snapshot) == calculator.calculate(valid_snapshot)


class TestExtremeInputs:
    """Finite inputs whose derived figures overflow or underflow."""

    def test_overflowing_contract_quotient_caps_at_firm_limit(self, calculator, valid_snapshot):
        """A huge budget over a tiny contract risk sizes to the firm limit."""
        snapshot = replace(valid_snapshot, max_loss="1e308", daily_loss_cap="1e308",
                           asset="Custom", custom_tick_value="0.5", stop_ticks="0.001")
        outcome = calculator.calculate(snapshot)

        assert outcome.success
        assert outcome.result.suggested_contracts == 1

    def test_overflowing_trades_per_day_rejected(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, max_loss="1", trades_to_bust="1e10",
                           daily_loss_cap="1e308")
        outcome = calculator.calculate(snapshot)

        assert outcome.errors == {"dailyLossCap": DAILY_LOSS_CAP_OUT_OF_RANGE}
        assert outcome.error_kinds == {"dailyLossCap": FieldErrorKind.RANGE}

    def test_underflowing_contract_risk_rejected(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, asset="Custom", custom_tick_value="1e-200",
                           stop_ticks="1e-200")
        outcome = calculator.calculate(snapshot)

        assert outcome.errors == {"stopTicks": RISK_PER_CONTRACT_OUT_OF_RANGE}
        assert outcome.error_kinds == {"stopTicks": FieldErrorKind.RANGE}

    def test_overflowing_contract_risk_rejected(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, asset="Custom", custom_tick_value="1e200",
                           stop_ticks="1e200")
        outcome = calculator.calculate(snapshot)
        assert outcome.errors == {"stopTicks": RISK_PER_CONTRACT_OUT_OF_RANGE}

    def test_underflowing_trade_risk_rejected(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, max_loss="1e-320", trades_to_bust="1e10")
        outcome = calculator.calculate(snapshot)
        assert outcome.errors == {"maxLoss": RISK_PER_TRADE_OUT_OF_RANGE}

    def test_overflowing_risk_in_ticks_rejected(self, calculator, valid_snapshot):
        snapshot = replace(valid_snapshot, max_loss="1e300", daily_loss_cap="1e300",
                           trades_to_bust="1", asset="Custom",
                           custom_tick_value="1e-10", stop_ticks="1e10")
        outcome = calculator.calculate(snapshot)
        assert outcome.errors == {"tickValue": RISK_IN_TICKS_OUT_OF_RANGE}

    def test_session_survives_extreme_inputs(self, session):
        session.update(asset="Custom", custom_tick_value="1e-200", stop_ticks="1e-200")
        outcome = session.calculate()

        assert not outcome.success
        assert "stopTicks" in session.errors
