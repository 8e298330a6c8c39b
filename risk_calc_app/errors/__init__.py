"""
Error classification for the risk calculator.

Input validation failures are data (see ``FieldErrorKind``); exceptions are
reserved for configuration problems and misuse of the public API.
"""

from .configuration import (
    CalculatorError,
    ConfigurationError,
    UnknownFieldError,
    UnknownInstrumentError,
)
from .kinds import FieldErrorKind

__all__ = [
    "CalculatorError",
    "ConfigurationError",
    "UnknownFieldError",
    "UnknownInstrumentError",
    "FieldErrorKind",
]
