"""Configuration loader with 3-tier parameter precedence."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from ..data.models import TickTable
from ..errors import ConfigurationError
from .defaults import DEFAULT_TICK_VALUES, DefaultConfig, FormDefaults, get_default_config
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)

CONFIG_DIR_ENV = "RISK_CALC_CONFIG_DIR"
INSTRUMENTS_FILE = "instruments.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            env_dir = os.getenv(CONFIG_DIR_ENV)
            if env_dir:
                config_dir = Path(env_dir)
            else:
                config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_instrument_config(self) -> dict[str, Any]:
        """Load and validate the instrument configuration file, if present."""
        instruments_file = self.config_dir / INSTRUMENTS_FILE

        if not instruments_file.exists():
            return {}

        try:
            with open(instruments_file, encoding="utf-8") as f:
                instruments_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse {instruments_file}: {e}",
                source=str(instruments_file)
            ) from e

        if instruments_config is None:
            return {}

        if not isinstance(instruments_config, dict):
            raise ConfigurationError(
                f"{instruments_file} must contain a mapping at the top level",
                source=str(instruments_file)
            )

        errors = ConfigValidator.validate_config(instruments_config)
        if errors:
            raise ConfigurationError(
                f"Invalid configuration in {instruments_file}",
                source=str(instruments_file),
                errors=errors
            )

        logger.debug(
            "Loaded instrument configuration",
            path=str(instruments_file),
            tick_overrides=len(instruments_config.get("tick_values") or {}),
        )
        return instruments_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Caller overrides (highest priority)
        2. instruments.yaml
        3. Built-in defaults (lowest priority)

        A ``replace: true`` flag at any tier above the defaults discards the
        built-in tick table instead of extending it.
        """
        config: dict[str, Any] = {
            "replace": False,
            "tick_values": dict(DEFAULT_TICK_VALUES),
            "form_defaults": self._dataclass_to_dict(self.defaults.form),
        }

        for tier in (self.load_instrument_config(), overrides or {}):
            if tier.get("replace"):
                config["tick_values"] = {}
                config["replace"] = True
            config = self._deep_merge(config, tier)

        return config

    def build_tick_table(self, overrides: Optional[dict[str, Any]] = None) -> TickTable:
        """Immutable tick table after applying file and caller overrides."""
        if overrides:
            errors = ConfigValidator.validate_config(overrides)
            if errors:
                raise ConfigurationError("Invalid configuration overrides", errors=errors)

        config = self.merge_config(overrides)
        table = TickTable(config["tick_values"])

        if not table:
            raise ConfigurationError("Tick table is empty", source=str(self.config_dir))

        return table

    def load_form_defaults(self, overrides: Optional[dict[str, Any]] = None) -> FormDefaults:
        """Initial form values after applying file and caller overrides."""
        merged = self.merge_config(overrides)["form_defaults"]
        names = {f.name for f in fields(FormDefaults)}
        values = {
            name: value if name == "apply_consistency_rule" else str(value)
            for name, value in merged.items()
            if name in names
        }
        return FormDefaults(**values)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
