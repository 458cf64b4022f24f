"""Tests for the per-coin signal calculator"""

import pytest

from rotation_map.config.defaults import get_default_config
from rotation_map.data.models import MarketSnapshot
from rotation_map.metrics.calculator import SignalCalculator
from rotation_map.models.scores import (
    AccelerationLabel,
    Sentiment,
    TrafficLightColor,
    TrendLabel,
    TrendPhase,
)


class TestSignalCalculator:
    """Test SignalCalculator"""

    def test_strong_coin(self, universe):
        """24h +8%, 7d +18%"""
        calculator = SignalCalculator()
        snapshot = MarketSnapshot(coin_id="ethereum", price=3200.0, change_24h=8.0, change_7d=18.0)

        result = calculator.score_coin(universe[1], snapshot)

        assert result.momentum_score == pytest.approx(2.6667, abs=1e-4)
        assert result.trend_score == pytest.approx(4.5)
        assert result.rotation_score == pytest.approx(11.6667, abs=1e-4)
        assert result.traffic_light.color == TrafficLightColor.GREEN
        assert result.trend_label == TrendLabel.STRONG_UPTREND
        assert result.trend_phase == TrendPhase.EXPANSION
        assert result.sentiment == Sentiment.STRONG_BULLISH
        # daily pace 18/7 ~ 2.57, 8 > 5.57
        assert result.acceleration == AccelerationLabel.ACCELERATION

    def test_all_missing_coin(self, universe):
        """Missing data never counts as a 0% move in the labels"""
        calculator = SignalCalculator()

        result = calculator.score_coin(universe[4], MarketSnapshot.unknown("avalanche-2"))

        assert result.rotation_score == 0.0
        assert result.traffic_light.color == TrafficLightColor.YELLOW
        assert result.sentiment == Sentiment.UNKNOWN
        assert result.trend_label == TrendLabel.UNKNOWN
        assert result.trend_phase == TrendPhase.UNKNOWN
        assert result.acceleration == AccelerationLabel.UNKNOWN
        assert result.ema_trend_score == 0
        assert result.strength_intensity == 0.0

    def test_ema_stack_from_series(self, universe):
        """Rising series with price above both EMAs scores +2"""
        calculator = SignalCalculator()
        series = tuple(100.0 + i for i in range(60))
        snapshot = MarketSnapshot(coin_id="bitcoin", price=170.0, change_24h=1.0,
                                  change_7d=5.0, price_series=series)

        result = calculator.score_coin(universe[0], snapshot)

        assert result.indicators.ema20 is not None
        assert result.indicators.ema50 is not None
        assert result.indicators.ema20 > result.indicators.ema50
        assert result.ema_trend_score == 2

    def test_score_universe_preserves_order(self, universe):
        """Coins without a snapshot still get a result"""
        calculator = SignalCalculator()
        snapshots = {"solana": MarketSnapshot(coin_id="solana", change_24h=1.0, change_7d=2.0)}

        results = calculator.score_universe(universe, snapshots)

        assert list(results) == [coin.id for coin in universe]
        assert results["bitcoin"].rotation_score == 0.0
        assert results["solana"].rotation_score == pytest.approx(2.0 / 4 * 2 + 1.0 / 3)

    def test_warmup_period(self):
        calculator = SignalCalculator(get_default_config())
        assert calculator.get_warmup_period() == 50
