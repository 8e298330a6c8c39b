"""Configuration validation utilities."""

import math
from dataclasses import dataclass, fields
from typing import Any

from .defaults import CUSTOM_INSTRUMENT, FormDefaults


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_tick_table(values: Any) -> list[ValidationError]:
        """Validate an instrument symbol to tick value mapping."""
        if not isinstance(values, dict):
            return [ValidationError(
                field="tick_values",
                message="Must be a mapping of symbol to tick value",
                value=values
            )]

        errors = []

        for symbol, tick in values.items():
            if not isinstance(symbol, str) or not symbol.strip():
                errors.append(ValidationError(
                    field=f"tick_values.{symbol}",
                    message="Symbol must be a non-empty string",
                    value=symbol
                ))
                continue

            if symbol == CUSTOM_INSTRUMENT:
                errors.append(ValidationError(
                    field=f"tick_values.{symbol}",
                    message=f"'{CUSTOM_INSTRUMENT}' is reserved for user-supplied tick values",
                    value=tick
                ))
                continue

            if (isinstance(tick, bool) or not isinstance(tick, (int, float))
                    or not math.isfinite(tick) or tick <= 0):
                errors.append(ValidationError(
                    field=f"tick_values.{symbol}",
                    message="Must be a positive number",
                    value=tick
                ))

        return errors

    @staticmethod
    def validate_form_defaults(params: Any) -> list[ValidationError]:
        """Validate initial form value overrides."""
        if not isinstance(params, dict):
            return [ValidationError(
                field="form_defaults",
                message="Must be a mapping of form field to value",
                value=params
            )]

        errors = []
        known = {f.name for f in fields(FormDefaults)}

        for name, value in params.items():
            if name not in known:
                errors.append(ValidationError(
                    field=f"form_defaults.{name}",
                    message="Unknown form field",
                    value=value
                ))
                continue

            if name == "apply_consistency_rule":
                if not isinstance(value, bool):
                    errors.append(ValidationError(
                        field=f"form_defaults.{name}",
                        message="Must be a boolean",
                        value=value
                    ))
            elif isinstance(value, bool) or not isinstance(value, (str, int, float)):
                errors.append(ValidationError(
                    field=f"form_defaults.{name}",
                    message="Must be a string or number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "replace" in config and not isinstance(config["replace"], bool):
            errors.append(ValidationError(
                field="replace",
                message="Must be a boolean",
                value=config["replace"]
            ))

        if "tick_values" in config:
            errors.extend(ConfigValidator.validate_tick_table(config["tick_values"]))

        if "form_defaults" in config:
            errors.extend(ConfigValidator.validate_form_defaults(config["form_defaults"]))

        return errors
