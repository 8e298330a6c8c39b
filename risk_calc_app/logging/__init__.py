"""
Logging configuration and utilities for the risk calculator.
"""
from .config import (
    configure_logging,
    get_calculation_logger,
    get_logger,
    get_session_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_calculation_logger",
    "get_session_logger",
]
