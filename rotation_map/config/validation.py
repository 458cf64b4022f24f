"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def _validate_descending(section: str, params: dict[str, Any],
                             order: list[str]) -> list[ValidationError]:
        """Check that threshold fields are numbers and strictly descending."""
        errors = []

        present = []
        for name in order:
            if name not in params:
                continue
            value = params[name]
            if not _is_number(value):
                errors.append(ValidationError(
                    field=f"{section}.{name}",
                    message="Must be a number",
                    value=value
                ))
            else:
                present.append((name, value))

        for (upper_name, upper), (lower_name, lower) in zip(present, present[1:]):
            if upper <= lower:
                errors.append(ValidationError(
                    field=f"{section}.{lower_name}",
                    message=f"Must be below {section}.{upper_name} ({upper})",
                    value=lower
                ))

        return errors

    @staticmethod
    def validate_sentiment_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate sentiment thresholds."""
        return ConfigValidator._validate_descending(
            "sentiment", params,
            ["strong_bullish", "bullish", "bearish", "strong_bearish"]
        )

    @staticmethod
    def validate_trend_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate trend label thresholds."""
        return ConfigValidator._validate_descending(
            "trend", params,
            ["strong_uptrend", "uptrend", "downtrend", "strong_downtrend"]
        )

    @staticmethod
    def validate_phase_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate trend phase thresholds."""
        return ConfigValidator._validate_descending(
            "phase", params,
            ["parabolic", "expansion", "early_uptrend",
             "grinding_downtrend", "sharp_downtrend", "capitulation"]
        )

    @staticmethod
    def validate_ema_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate EMA periods."""
        errors = []

        for name in ("fast_period", "slow_period"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=f"ema.{name}",
                        message="Must be a positive integer",
                        value=value
                    ))

        fast = params.get("fast_period")
        slow = params.get("slow_period")
        if isinstance(fast, int) and isinstance(slow, int) and fast >= slow:
            errors.append(ValidationError(
                field="ema.fast_period",
                message="Must be shorter than ema.slow_period",
                value=fast
            ))

        return errors

    @staticmethod
    def validate_scoring_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate scoring divisors and weights."""
        errors = []

        for name in ("trend_divisor", "momentum_divisor", "strength_scale_pct"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"scoring.{name}",
                        message="Must be a positive number",
                        value=value
                    ))

        for name in ("trend_weight", "momentum_weight"):
            if name in params and not _is_number(params[name]):
                errors.append(ValidationError(
                    field=f"scoring.{name}",
                    message="Must be a number",
                    value=params[name]
                ))

        return errors

    @staticmethod
    def validate_traffic_light_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate traffic light cut-offs."""
        return ConfigValidator._validate_descending(
            "traffic_light", params, ["favorable_min", "high_risk_max"]
        )

    @staticmethod
    def validate_signal_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate rotation signal thresholds."""
        errors = []

        if "sector_gap_min" in params:
            value = params["sector_gap_min"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="signals.sector_gap_min",
                    message="Must be a non-negative number",
                    value=value
                ))

        errors.extend(ConfigValidator._validate_descending(
            "signals", params, ["sector_leader_min", "sector_abandon_max"]
        ))
        errors.extend(ConfigValidator._validate_descending(
            "signals", params, ["coin_acceleration_min", "coin_capitulation_max"]
        ))

        return errors

    @staticmethod
    def validate_refresh_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate polling interval."""
        errors = []

        if "interval_seconds" in params:
            value = params["interval_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="refresh.interval_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_render_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate console output settings."""
        errors = []

        if "format" in params and params["format"] not in ("pretty", "json"):
            errors.append(ValidationError(
                field="render.format",
                message="Must be 'pretty' or 'json'",
                value=params["format"]
            ))

        for name in ("bar_width", "sparkline_width"):
            if name not in params:
                continue
            value = params[name]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field=f"render.{name}",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        validators = {
            "sentiment": ConfigValidator.validate_sentiment_params,
            "trend": ConfigValidator.validate_trend_params,
            "phase": ConfigValidator.validate_phase_params,
            "ema": ConfigValidator.validate_ema_params,
            "scoring": ConfigValidator.validate_scoring_params,
            "traffic_light": ConfigValidator.validate_traffic_light_params,
            "signals": ConfigValidator.validate_signal_params,
            "refresh": ConfigValidator.validate_refresh_params,
            "render": ConfigValidator.validate_render_params,
        }

        for section, validator in validators.items():
            if section in config:
                errors.extend(validator(config[section]))

        return errors
