"""
Parsing of raw form values into numbers.

A blank field is *absent*, which is different from a field holding ``0`` or a
value that is not a number at all. Validation rules depend on that difference,
so parsing never collapses the three cases into one.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

RawValue = Union[str, int, float, None]


@dataclass(frozen=True)
class ParsedNumber:
    """Raw form value alongside its numeric interpretation."""
    raw: str
    value: Optional[float]      # None when blank or not a number

    @property
    def is_blank(self) -> bool:
        return self.raw.strip() == ""

    @property
    def is_finite(self) -> bool:
        return self.value is not None and math.isfinite(self.value)

    def greater_than(self, bound: float) -> bool:
        """Finite and strictly above ``bound``."""
        return self.is_finite and self.value > bound  # type: ignore[operator]

    def at_least(self, bound: float) -> bool:
        """Finite and not below ``bound``."""
        return self.is_finite and self.value >= bound  # type: ignore[operator]


def parse_number(raw: RawValue) -> ParsedNumber:
    """
    Interpret a raw form value as a number.

    Args:
        raw: Text as typed by the user; numbers and None are accepted from
            programmatic callers

    Returns:
        ParsedNumber whose ``value`` is None for blank or non-numeric input
    """
    if raw is None:
        return ParsedNumber(raw="", value=None)

    if isinstance(raw, bool):
        return ParsedNumber(raw=str(raw), value=None)

    if isinstance(raw, (int, float)):
        return ParsedNumber(raw=str(raw), value=float(raw))

    text = raw.strip()
    if not text or "_" in text:
        return ParsedNumber(raw=raw, value=None)

    try:
        return ParsedNumber(raw=raw, value=float(text))
    except ValueError:
        return ParsedNumber(raw=raw, value=None)
