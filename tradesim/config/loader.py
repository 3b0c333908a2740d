"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import ConfigurationError
from .defaults import (
    EngineConfig,
    OptionParams,
    PortfolioParams,
    PriceFeedParams,
    SessionParams,
    SignalParams,
    get_default_config,
)
from .validation import ConfigValidator

SESSION_CONFIG_FILE = "session.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: EngineConfig

    @classmethod
    def create(cls, config_dir: Optional[Union[str, Path]] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_session_config(self) -> dict[str, Any]:
        """Load session-level overrides from the config directory."""
        session_file = self.config_dir / SESSION_CONFIG_FILE

        if not session_file.exists():
            return {}

        with open(session_file) as f:
            session_config = yaml.safe_load(f)

        return session_config or {}

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. Session file overrides
        3. Global defaults (lowest priority)
        """
        # Start with global defaults
        config = self._dataclass_to_dict(self.defaults)

        # Apply session file overrides
        config = self._deep_merge(config, self.load_session_config())

        # Apply explicit overrides
        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> EngineConfig:
        """Merge, validate and build the engine configuration."""
        config = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            details = "; ".join(f"{err.field}: {err.message} (got: {err.value})" for err in errors)
            raise ConfigurationError(f"Invalid configuration: {details}", errors=errors)

        return build_engine_config(config)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, tuple):
                    result[field_name] = list(value)
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


def build_engine_config(config: dict[str, Any]) -> EngineConfig:
    """Build an EngineConfig from a merged configuration dictionary."""
    session = dict(config.get("session", {}))
    if "instruments" in session:
        session["instruments"] = tuple(session["instruments"])

    return EngineConfig(
        session=SessionParams(**session),
        portfolio=PortfolioParams(**config.get("portfolio", {})),
        signal=SignalParams(**config.get("signal", {})),
        options=OptionParams(**config.get("options", {})),
        feed=PriceFeedParams(**config.get("feed", {})),
    )
