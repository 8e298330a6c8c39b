"""
Configuration and usage error classifications.

Field-level input problems are reported as values in a calculation outcome,
never raised. The exceptions here cover broken configuration and callers
asking for things that do not exist.
"""

from typing import Any, Optional


class CalculatorError(Exception):
    """Base class for risk calculator exceptions."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ConfigurationError(CalculatorError):
    """Configuration file is unreadable or holds invalid values."""

    def __init__(self, message: str, source: Optional[str] = None,
                 errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.errors = errors or []


class UnknownInstrumentError(CalculatorError, KeyError):
    """Symbol is not present in the tick table."""

    def __init__(self, symbol: str, available: Optional[list[str]] = None, **kwargs):
        super().__init__(f"Unknown instrument '{symbol}'", **kwargs)
        self.symbol = symbol
        self.available = available or []
        self.recoverable = True

    def __str__(self) -> str:
        return self.args[0]


class UnknownFieldError(CalculatorError, AttributeError):
    """Form field name does not exist on the input snapshot."""

    def __init__(self, field: str, **kwargs):
        super().__init__(f"Unknown form field '{field}'", **kwargs)
        self.field = field
        self.recoverable = True
