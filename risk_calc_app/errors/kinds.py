"""Categories of field-level validation failures."""

from enum import Enum


class FieldErrorKind(str, Enum):
    """Why a form field was rejected."""
    REQUIRED = "required"      # Mandatory value left empty
    RANGE = "range"            # Non-numeric, non-finite or out of bounds
    INVARIANT = "invariant"    # Cross-field rule broken after fields passed
