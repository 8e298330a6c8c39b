"""
Canonical data models for calculator input and output.

Inputs are kept exactly as typed (raw strings) so that an empty field can be
told apart from a zero or a typo. Outputs are immutable and rebuilt in full by
every calculation.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Optional

from ..config.defaults import CUSTOM_INSTRUMENT, DEFAULT_TICK_VALUES, FormDefaults
from ..errors import FieldErrorKind, UnknownInstrumentError

# Error-set keys, one per validated field
PROFIT_TARGET = "profitTarget"
MAX_CONTRACT_SIZE = "maxContractSize"
MAX_LOSS = "maxLoss"
TRADES_TO_BUST = "tradesToBust"
STOP_TICKS = "stopTicks"
TICK_VALUE = "tickValue"
DAILY_LOSS_CAP = "dailyLossCap"

ERROR_FIELDS = (
    PROFIT_TARGET,
    MAX_CONTRACT_SIZE,
    MAX_LOSS,
    TRADES_TO_BUST,
    STOP_TICKS,
    TICK_VALUE,
    DAILY_LOSS_CAP,
)


@dataclass(frozen=True)
class InputSnapshot:
    """
    Raw form values at the moment of a calculation request.

    Initial values come from ``FormDefaults``; build a fresh form with
    ``from_defaults`` and derive edits with ``dataclasses.replace``.
    """
    max_contract_size: str
    max_loss: str
    daily_loss_cap: str
    profit_target: str
    trades_to_bust: str
    asset: str
    custom_tick_value: str
    stop_ticks: str
    apply_consistency_rule: bool
    consistency_rule: str

    @classmethod
    def from_defaults(cls, defaults: Optional[FormDefaults] = None) -> "InputSnapshot":
        """Create the initial snapshot of a fresh form."""
        defaults = defaults or FormDefaults()
        return cls(**{f.name: getattr(defaults, f.name) for f in fields(cls)})

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of all editable form fields."""
        return tuple(f.name for f in fields(cls))

    @property
    def is_custom(self) -> bool:
        """True when the user supplies the tick value."""
        return self.asset == CUSTOM_INSTRUMENT


class TickTable(Mapping[str, float]):
    """Read-only instrument symbol to tick value mapping."""

    def __init__(self, values: Optional[Mapping[str, float]] = None):
        source = DEFAULT_TICK_VALUES if values is None else values
        self._values = MappingProxyType({str(k): float(v) for k, v in source.items()})

    def __getitem__(self, symbol: str) -> float:
        return self._values[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TickTable({len(self)} instruments)"

    @property
    def symbols(self) -> list[str]:
        """Symbols in selector order."""
        return list(self._values)

    def require(self, symbol: str) -> float:
        """Tick value for ``symbol``, raising if the table does not list it."""
        try:
            return self._values[symbol]
        except KeyError:
            raise UnknownInstrumentError(symbol, available=self.symbols) from None

    def extended(self, overrides: Mapping[str, float]) -> "TickTable":
        """New table with ``overrides`` added or replacing existing symbols."""
        merged = dict(self._values)
        merged.update(overrides)
        return TickTable(merged)


@dataclass(frozen=True)
class FieldError:
    """A single rejected form field."""
    field: str
    kind: FieldErrorKind
    message: str
    value: object = None


@dataclass(frozen=True)
class RiskResult:
    """Derived risk figures for a valid input snapshot."""
    risk_per_trade: float
    risk_per_contract: float
    suggested_contracts: int
    risk_per_trade_ticks: float
    max_trades_per_day: int
    daily_profit_threshold: float

    def to_dict(self) -> dict[str, float]:
        return {
            "riskPerTrade": self.risk_per_trade,
            "riskPerContract": self.risk_per_contract,
            "suggestedContracts": self.suggested_contracts,
            "riskPerTradeTicks": self.risk_per_trade_ticks,
            "maxTradesPerDay": self.max_trades_per_day,
            "dailyProfitThreshold": self.daily_profit_threshold,
        }


@dataclass(frozen=True)
class CalculationOutcome:
    """Either a RiskResult or the set of field errors that blocked it."""
    result: Optional[RiskResult] = None
    field_errors: tuple[FieldError, ...] = ()
    warnings: tuple[str, ...] = ()
    errors: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if (self.result is None) == (not self.field_errors):
            raise ValueError("Outcome needs exactly one of a result or field errors")
        object.__setattr__(self, "errors", {e.field: e.message for e in self.field_errors})

    @classmethod
    def succeeded(cls, result: RiskResult, warnings: tuple[str, ...] = ()) -> "CalculationOutcome":
        """Create successful outcome."""
        return cls(result=result, warnings=warnings)

    @classmethod
    def failed(cls, field_errors: list[FieldError]) -> "CalculationOutcome":
        """Create error outcome."""
        return cls(field_errors=tuple(field_errors))

    @property
    def success(self) -> bool:
        return self.result is not None

    @property
    def error_kinds(self) -> dict[str, FieldErrorKind]:
        """Classification of each entry in ``errors``."""
        return {e.field: e.kind for e in self.field_errors}

    def to_dict(self) -> dict:
        if self.result is not None:
            return {"result": self.result.to_dict(), "warnings": list(self.warnings)}
        return {"errors": dict(self.errors)}
