"""
Utility functions module.

Display formatting shared by the command-line front end and any other
presentation layer.
"""

from .formatting import format_currency, format_number

__all__ = ["format_currency", "format_number"]
