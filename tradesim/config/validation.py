"""Configuration validation utilities."""

import re
from dataclasses import dataclass, fields
from typing import Any

from .defaults import (
    OptionParams,
    PortfolioParams,
    PriceFeedParams,
    SessionParams,
    SignalParams,
)

_SESSION_START_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

_PARAM_GROUPS = {
    "session": SessionParams,
    "portfolio": PortfolioParams,
    "signal": SignalParams,
    "options": OptionParams,
    "feed": PriceFeedParams,
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_unknown_fields(group: str, params: dict[str, Any]) -> list[ValidationError]:
        """Reject parameters that do not exist in the group."""
        known = {f.name for f in fields(_PARAM_GROUPS[group])}
        return [
            ValidationError(field=f"{group}.{name}", message="Unknown parameter", value=value)
            for name, value in params.items()
            if name not in known
        ]

    @staticmethod
    def validate_session_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate session parameters."""
        errors = []

        # Validate ticks_per_session
        if "ticks_per_session" in params:
            value = params["ticks_per_session"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="ticks_per_session",
                    message="Must be a positive integer",
                    value=value
                ))

        # Validate tick_minutes
        if "tick_minutes" in params:
            value = params["tick_minutes"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="tick_minutes",
                    message="Must be a positive integer",
                    value=value
                ))

        # Validate session_start
        if "session_start" in params:
            value = params["session_start"]
            if not isinstance(value, str) or not _SESSION_START_PATTERN.match(value):
                errors.append(ValidationError(
                    field="session_start",
                    message="Must be a time formatted as HH:MM",
                    value=value
                ))

        # Validate instruments
        if "instruments" in params:
            value = params["instruments"]
            if (not isinstance(value, (list, tuple)) or not value
                    or not all(isinstance(item, str) and item for item in value)):
                errors.append(ValidationError(
                    field="instruments",
                    message="Must be a non-empty list of instrument names",
                    value=value
                ))
            elif len(set(value)) != len(value):
                errors.append(ValidationError(
                    field="instruments",
                    message="Instrument names must be unique",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_portfolio_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate portfolio parameters."""
        errors = []

        # Validate initial_balance
        if "initial_balance" in params:
            value = params["initial_balance"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="initial_balance",
                    message="Must be a positive number",
                    value=value
                ))

        # Validate companies
        if "companies" in params:
            value = params["companies"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="companies",
                    message="Must be a positive integer",
                    value=value
                ))

        # Validate slippage
        if "slippage" in params:
            value = params["slippage"]
            if not _is_number(value) or value < 0 or value >= 1:
                errors.append(ValidationError(
                    field="slippage",
                    message="Must be a number in [0, 1)",
                    value=value
                ))

        # Validate exit_cost_mult
        if "exit_cost_mult" in params:
            value = params["exit_cost_mult"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="exit_cost_mult",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_signal_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate trend signal parameters."""
        errors = []

        for name in ("sma_window", "evaluation_cadence"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        # Validate forecast_drop_mult
        if "forecast_drop_mult" in params:
            value = params["forecast_drop_mult"]
            if not _is_number(value) or value <= 0 or value > 1:
                errors.append(ValidationError(
                    field="forecast_drop_mult",
                    message="Must be a number in (0, 1]",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_option_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate option pricing parameters."""
        errors = []

        # Zero maturity and zero volatility are priced at intrinsic value
        for name in ("maturity", "volatility"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative number",
                        value=value
                    ))

        # Validate risk_free_rate
        if "risk_free_rate" in params:
            value = params["risk_free_rate"]
            if not _is_number(value):
                errors.append(ValidationError(
                    field="risk_free_rate",
                    message="Must be a number",
                    value=value
                ))

        for name in ("call_strike_mult", "put_strike_mult"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_feed_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate price feed parameters."""
        errors = []

        # Validate seed
        if "seed" in params:
            value = params["seed"]
            if value is not None and not _is_int(value):
                errors.append(ValidationError(
                    field="seed",
                    message="Must be an integer or null",
                    value=value
                ))

        # Validate start_price_min
        if "start_price_min" in params:
            value = params["start_price_min"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="start_price_min",
                    message="Must be a positive number",
                    value=value
                ))

        # Validate start_price_spread
        if "start_price_spread" in params:
            value = params["start_price_spread"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="start_price_spread",
                    message="Must be a positive integer",
                    value=value
                ))

        # Validate max_move_pct
        if "max_move_pct" in params:
            value = params["max_move_pct"]
            if not _is_number(value) or value < 0 or value >= 1:
                errors.append(ValidationError(
                    field="max_move_pct",
                    message="Must be a number in [0, 1)",
                    value=value
                ))

        # Validate move_resolution
        if "move_resolution" in params:
            value = params["move_resolution"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="move_resolution",
                    message="Must be a positive number",
                    value=value
                ))

        # Validate price_decimals
        if "price_decimals" in params:
            value = params["price_decimals"]
            if not _is_int(value) or value < 0:
                errors.append(ValidationError(
                    field="price_decimals",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        validators = {
            "session": ConfigValidator.validate_session_params,
            "portfolio": ConfigValidator.validate_portfolio_params,
            "signal": ConfigValidator.validate_signal_params,
            "options": ConfigValidator.validate_option_params,
            "feed": ConfigValidator.validate_feed_params,
        }

        for group, params in config.items():
            if group not in validators:
                errors.append(ValidationError(
                    field=group,
                    message="Unknown configuration section",
                    value=params
                ))
                continue
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=group,
                    message="Must be a mapping of parameters",
                    value=params
                ))
                continue
            errors.extend(ConfigValidator.validate_unknown_fields(group, params))
            errors.extend(validators[group](params))

        return errors
