"""
Form session state.

Holds the current input snapshot together with the last calculation outcome
and whether that outcome still matches the inputs.
"""

from .models import Freshness, SessionView
from .session import CalculatorSession

__all__ = [
    "CalculatorSession",
    "Freshness",
    "SessionView",
]
