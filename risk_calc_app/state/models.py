"""
Form session state models.

The displayed outcome is either fresh (matches the current inputs) or stale
(inputs were edited after it was produced).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..data.models import CalculationOutcome, InputSnapshot


class Freshness(str, Enum):
    """Whether the displayed outcome still reflects the inputs."""
    FRESH = "fresh"
    STALE = "stale"


@dataclass(frozen=True)
class SessionView:
    """Everything a front end needs to render the form once."""
    snapshot: InputSnapshot
    outcome: Optional[CalculationOutcome]
    freshness: Freshness
    tick_value: Optional[float]
    max_daily_profit: Optional[float]

    @property
    def is_stale(self) -> bool:
        return self.freshness is Freshness.STALE

    @property
    def errors(self) -> dict[str, str]:
        return dict(self.outcome.errors) if self.outcome is not None else {}

    @property
    def show_warning(self) -> bool:
        return self.outcome is not None and bool(self.outcome.warnings)
