"""
Form session management for the risk calculator.

A session owns the current input snapshot and the outcome of the last
calculate action. Edits replace the snapshot wholesale; they never touch the
numbers of a shown result, they only flag it as stale.
"""

from dataclasses import replace
from typing import Any, Optional

import structlog

from ..calculator.core import RiskCalculator
from ..data.models import CalculationOutcome, InputSnapshot, RiskResult
from ..errors import UnknownFieldError
from ..logging.config import get_session_logger, log_session_transition
from .models import Freshness, SessionView

logger = structlog.get_logger(__name__)


class CalculatorSession:
    """Tracks {snapshot, outcome, freshness} for one interactive form."""

    def __init__(self, calculator: Optional[RiskCalculator] = None,
                 snapshot: Optional[InputSnapshot] = None):
        self.calculator = calculator or RiskCalculator()
        self.logger = logger
        self.session_logger = get_session_logger(__name__)
        self._snapshot = snapshot or InputSnapshot.from_defaults(self.calculator.config.form)
        self._outcome: Optional[CalculationOutcome] = None
        self._freshness = Freshness.FRESH

    @property
    def snapshot(self) -> InputSnapshot:
        return self._snapshot

    @property
    def outcome(self) -> Optional[CalculationOutcome]:
        return self._outcome

    @property
    def freshness(self) -> Freshness:
        return self._freshness

    @property
    def is_stale(self) -> bool:
        return self._freshness is Freshness.STALE

    @property
    def result(self) -> Optional[RiskResult]:
        """Last successful result still on display, stale or not."""
        return self._outcome.result if self._outcome is not None else None

    @property
    def errors(self) -> dict[str, str]:
        """Field errors currently on display."""
        return dict(self._outcome.errors) if self._outcome is not None else {}

    @property
    def tick_value(self) -> Optional[float]:
        """Tick value of the selected instrument, as shown beside the selector."""
        return self.calculator.resolve_tick_value(self._snapshot)

    @property
    def max_daily_profit(self) -> Optional[float]:
        return self.calculator.max_daily_profit(self._snapshot)

    @property
    def show_warning(self) -> bool:
        """Below-minimum warning is on display."""
        return self._outcome is not None and bool(self._outcome.warnings)

    def update(self, **changes: Any) -> InputSnapshot:
        """
        Apply user edits to the form.

        Args:
            **changes: Snapshot field names mapped to their new raw values

        Returns:
            The new input snapshot

        Raises:
            UnknownFieldError: If a name is not an input snapshot field
        """
        names = InputSnapshot.field_names()
        for name in changes:
            if name not in names:
                raise UnknownFieldError(name)

        if changes.get("apply_consistency_rule") is False:
            changes.setdefault("consistency_rule", "")

        self._snapshot = replace(self._snapshot, **changes)
        trigger = ",".join(sorted(changes))

        if self.result is not None and not self.is_stale:
            self._set_freshness(Freshness.STALE, trigger)

        # Editing dismisses any error messages on display
        if self._outcome is not None and not self._outcome.success:
            self._outcome = None
            self.logger.debug("Cleared field errors after edit", trigger=trigger)

        return self._snapshot

    def calculate(self) -> CalculationOutcome:
        """Run the calculator on the current snapshot and replace the outcome."""
        if self.is_stale:
            self._set_freshness(Freshness.FRESH, "calculate")

        self._outcome = self.calculator.calculate(self._snapshot)
        return self._outcome

    def reset(self) -> None:
        """Return the form to its initial values with nothing on display."""
        self._snapshot = InputSnapshot.from_defaults(self.calculator.config.form)
        self._outcome = None
        self._freshness = Freshness.FRESH
        self.logger.debug("Session reset")

    def view(self) -> SessionView:
        """Snapshot of everything needed to render the form."""
        return SessionView(
            snapshot=self._snapshot,
            outcome=self._outcome,
            freshness=self._freshness,
            tick_value=self.tick_value,
            max_daily_profit=self.max_daily_profit,
        )

    def _set_freshness(self, freshness: Freshness, trigger: str) -> None:
        log_session_transition(
            self.session_logger,
            from_state=self._freshness.value,
            to_state=freshness.value,
            trigger=trigger,
        )
        self._freshness = freshness
