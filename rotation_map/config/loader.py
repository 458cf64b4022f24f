"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..data.models import CoinDefinition
from ..errors import ConfigurationError
from .defaults import DefaultConfig, get_default_config
from .universe import DEFAULT_UNIVERSE, parse_universe
from .validation import ConfigValidator


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def _read_yaml(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename

        if not path.exists():
            return {}

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}", source=str(path))

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping", source=str(path))

        return data

    def load_settings_overrides(self) -> dict[str, Any]:
        """Load file-level overrides from ``settings.yaml``."""
        return self._read_yaml("settings.yaml").get("settings", {}) or {}

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Runtime overrides (highest priority)
        2. ``settings.yaml`` in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_settings_overrides())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """
        Load, validate and build the effective configuration.

        Raises:
            ConfigurationError: If any section fails validation or names
                unknown parameters
        """
        config_dict = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(config_dict)
        if errors:
            details = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise ConfigurationError(
                "Configuration validation failed: " + "; ".join(details),
                errors=errors,
            )

        return self._build_config(config_dict)

    def load_universe(self) -> tuple[CoinDefinition, ...]:
        """Load the coin universe from ``coins.yaml``, falling back to defaults."""
        raw = self._read_yaml("coins.yaml").get("coins")

        if not raw:
            return DEFAULT_UNIVERSE

        return parse_universe(raw)

    def _build_config(self, config_dict: dict[str, Any]) -> DefaultConfig:
        """Rebuild nested frozen dataclasses from a merged dictionary."""
        sections = {}

        for section_field in fields(self.defaults):
            section_default = getattr(self.defaults, section_field.name)
            section_type = type(section_default)
            values = config_dict.get(section_field.name, {})

            known = {f.name for f in fields(section_type)}
            unknown = set(values) - known
            if unknown:
                raise ConfigurationError(
                    f"Unknown parameters in {section_field.name}: {', '.join(sorted(unknown))}",
                    source=section_field.name,
                )

            sections[section_field.name] = section_type(**values)

        return DefaultConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
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
