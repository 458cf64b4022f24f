"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from rotation_map.config.defaults import get_default_config
from rotation_map.config.loader import ConfigLoader
from rotation_map.config.universe import DEFAULT_UNIVERSE, parse_universe
from rotation_map.config.validation import ConfigValidator
from rotation_map.data.models import Sector
from rotation_map.errors import ConfigurationError


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration carries the canonical thresholds."""
        config = get_default_config()
        assert config.sentiment.strong_bullish == 3.0
        assert config.sentiment.bullish == 0.5
        assert config.trend.strong_uptrend == 15.0
        assert config.scoring.trend_weight == 2.0
        assert config.traffic_light.favorable_min == 6.0
        assert config.traffic_light.high_risk_max == -2.0
        assert config.signals.sector_gap_min == 1.5
        assert config.ema.fast_period == 20
        assert config.ema.slow_period == 50


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)

    def test_merge_config_defaults_only(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path)
        config = loader.merge_config()

        assert config["scoring"]["trend_divisor"] == 4.0
        assert config["refresh"]["interval_seconds"] == 60.0

    def test_settings_file_then_overrides(self, tmp_path) -> None:
        """Runtime overrides beat settings.yaml, which beats defaults."""
        (tmp_path / "settings.yaml").write_text(
            "settings:\n"
            "  refresh:\n"
            "    interval_seconds: 30\n"
            "  signals:\n"
            "    sector_gap_min: 2.0\n"
        )
        loader = ConfigLoader.create(tmp_path)

        config = loader.load_config({"signals": {"sector_gap_min": 1.0}})

        assert config.refresh.interval_seconds == 30
        assert config.signals.sector_gap_min == 1.0
        assert config.signals.sector_leader_min == 3.0

    def test_invalid_overrides_raise(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load_config({"sentiment": {"bullish": 4.0}})

        assert exc_info.value.errors[0].field == "sentiment.bullish"

    def test_unknown_parameter_raises(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ConfigurationError):
            loader.load_config({"scoring": {"bonus": 1.0}})

    def test_invalid_yaml(self, tmp_path) -> None:
        (tmp_path / "settings.yaml").write_text("settings: [unclosed\n")
        loader = ConfigLoader.create(tmp_path)

        with pytest.raises(ConfigurationError):
            loader.merge_config()

    def test_universe_default_when_no_file(self, tmp_path) -> None:
        assert ConfigLoader.create(tmp_path).load_universe() == DEFAULT_UNIVERSE

    def test_universe_from_file(self, tmp_path) -> None:
        (tmp_path / "coins.yaml").write_text(
            "coins:\n"
            "  - {id: uniswap, symbol: UNI, name: Uniswap, sector: DeFi}\n"
            "  - {id: arbitrum, symbol: ARB, name: Arbitrum, sector: L2}\n"
        )

        universe = ConfigLoader.create(tmp_path).load_universe()

        assert [coin.id for coin in universe] == ["uniswap", "arbitrum"]
        assert universe[0].sector == Sector.DEFI

    def test_shipped_config_dir(self) -> None:
        """The repository config directory loads cleanly."""
        loader = ConfigLoader.create()
        loader.load_config()
        assert [coin.id for coin in loader.load_universe()] == [coin.id for coin in DEFAULT_UNIVERSE]


class TestUniverseParsing:
    """Test suite for coin universe parsing."""

    def test_unknown_sector(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_universe([{"id": "x", "symbol": "X", "name": "X", "sector": "Memes"}])

    def test_duplicate_ids(self) -> None:
        coin = {"id": "x", "symbol": "X", "name": "X", "sector": "L1"}
        with pytest.raises(ConfigurationError):
            parse_universe([coin, coin])

    def test_missing_fields(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_universe([{"id": "x", "sector": "L1"}])

    def test_empty(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_universe([])


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_defaults(self, tmp_path) -> None:
        config = ConfigLoader.create(tmp_path).merge_config()
        assert ConfigValidator.validate_config(config) == []

    def test_sentiment_order(self) -> None:
        errors = ConfigValidator.validate_sentiment_params(
            {"strong_bullish": 3.0, "bullish": 0.5, "bearish": 1.0, "strong_bearish": -3.0}
        )
        assert len(errors) == 1
        assert errors[0].field == "sentiment.bearish"

    def test_non_numeric_threshold(self) -> None:
        errors = ConfigValidator.validate_trend_params({"uptrend": "five"})
        assert errors[0].message == "Must be a number"

    def test_ema_periods(self) -> None:
        errors = ConfigValidator.validate_ema_params({"fast_period": 50, "slow_period": 20})
        assert [err.field for err in errors] == ["ema.fast_period"]

        errors = ConfigValidator.validate_ema_params({"fast_period": 0})
        assert errors[0].message == "Must be a positive integer"

    def test_scoring_divisors(self) -> None:
        errors = ConfigValidator.validate_scoring_params({"trend_divisor": 0})
        assert errors[0].field == "scoring.trend_divisor"

    def test_traffic_light_order(self) -> None:
        errors = ConfigValidator.validate_traffic_light_params(
            {"favorable_min": -3.0, "high_risk_max": -2.0}
        )
        assert len(errors) == 1

    def test_refresh_interval(self) -> None:
        errors = ConfigValidator.validate_refresh_params({"interval_seconds": 0})
        assert len(errors) == 1

    def test_render_format(self) -> None:
        errors = ConfigValidator.validate_render_params({"format": "html"})
        assert errors[0].field == "render.format"

    def test_sparkline_width(self) -> None:
        errors = ConfigValidator.validate_render_params({"sparkline_width": 0})
        assert [err.field for err in errors] == ["render.sparkline_width"]
