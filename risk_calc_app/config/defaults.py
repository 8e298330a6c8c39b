"""Default configuration parameters for the risk calculator."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

# Currency (USD) gained or lost per one-tick move of one contract.
# Insertion order is the display order of the instrument selector.
DEFAULT_TICK_VALUES: Mapping[str, float] = MappingProxyType({
    # Equity index
    "ES": 12.5,
    "MES": 1.25,
    "NQ": 5.0,
    "MNQ": 0.5,
    "RTY": 5.0,
    "M2K": 0.5,
    "NKD": 25.0,
    # Crypto
    "MBT": 0.5,
    "MET": 0.25,
    # Currencies
    "6A": 10.0,
    "6B": 6.25,
    "6C": 10.0,
    "6E": 6.25,
    "6J": 6.25,
    "6S": 12.5,
    "E7": 6.25,
    "M6E": 1.25,
    "M6A": 1.0,
    "6M": 5.0,
    "6N": 10.0,
    "M6B": 0.625,
    # Livestock
    "HE": 10.0,
    "LE": 10.0,
    # Energy
    "CL": 10.0,
    "QM": 12.5,
    "NG": 10.0,
    "QG": 12.5,
    "MCL": 1.0,
    "RB": 4.2,
    "HO": 4.2,
    "PL": 5.0,
    "MNG": 2.5,
    # Grains
    "ZC": 12.5,
    "ZW": 12.5,
    "ZS": 12.5,
    "ZM": 10.0,
    "ZL": 6.0,
    # Dow
    "YM": 5.0,
    "MYM": 0.5,
    # Rates
    "ZT": 15.625,
    "ZF": 7.8125,
    "ZN": 15.625,
    "TN": 15.625,
    "ZB": 31.25,
    "UB": 31.25,
    # Metals
    "GC": 10.0,
    "SI": 25.0,
    "HG": 12.5,
    "MGC": 1.0,
    "SIL": 5.0,
    "MHG": 1.25,
})

CUSTOM_INSTRUMENT = "Custom"


@dataclass(frozen=True)
class FormDefaults:
    """Initial raw values of the calculator form."""
    max_contract_size: str = "1"
    max_loss: str = "2500"
    daily_loss_cap: str = ""
    profit_target: str = ""
    trades_to_bust: str = "10"
    asset: str = "ES"
    custom_tick_value: str = ""
    stop_ticks: str = "12"
    apply_consistency_rule: bool = False
    consistency_rule: str = ""


@dataclass(frozen=True)
class CalculatorParams:
    """Calculation constants."""
    custom_instrument: str = CUSTOM_INSTRUMENT   # Selector value for a user tick value
    min_contracts: int = 1                       # Below this the plan is flagged
    percent_scale: float = 100.0                 # Consistency rule is a percentage


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    form: FormDefaults
    calculator: CalculatorParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        form=FormDefaults(),
        calculator=CalculatorParams(),
    )
