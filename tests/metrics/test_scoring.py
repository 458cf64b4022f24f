"""Tests for rotation scoring and the traffic light"""

import math

import pytest

from rotation_map.config.defaults import ScoringParams, TrafficLightParams
from rotation_map.metrics.scoring import (
    classify_traffic_light,
    momentum_score,
    rotation_score,
    trend_score,
)
from rotation_map.models.scores import SeverityTier, TrafficLightColor


class TestScoreComponents:
    """Test trend and momentum components"""

    def test_trend_score(self):
        assert trend_score(18.0) == pytest.approx(4.5)
        assert trend_score(-8.0) == pytest.approx(-2.0)

    def test_momentum_score_is_continuous(self):
        assert momentum_score(8.0) == pytest.approx(8.0 / 3.0)
        assert momentum_score(-1.5) == pytest.approx(-0.5)

    def test_unknown_components_are_zero(self):
        assert trend_score(None) == 0.0
        assert momentum_score(None) == 0.0
        assert trend_score(math.nan) == 0.0

    def test_custom_divisors(self):
        params = ScoringParams(trend_divisor=2.0, momentum_divisor=1.0)
        assert trend_score(10.0, params) == 5.0
        assert momentum_score(3.0, params) == 3.0


class TestRotationScore:
    """Test composite rotation score"""

    def test_trend_weighted_twice(self):
        """rotation = trend * 2 + momentum"""
        assert rotation_score(8.0, 18.0) == pytest.approx(4.5 * 2 + 8.0 / 3.0)
        assert rotation_score(8.0, 18.0) == pytest.approx(11.6667, abs=1e-4)

    def test_all_unknown_is_zero(self):
        assert rotation_score(None, None) == 0.0

    def test_only_24h_known(self):
        assert rotation_score(6.0, None) == pytest.approx(2.0)

    def test_deterministic(self):
        """Same inputs always produce the same score"""
        scores = {rotation_score(2.5, -7.0) for _ in range(10)}
        assert len(scores) == 1


class TestTrafficLight:
    """Test traffic light partition"""

    @pytest.mark.parametrize("score,color,tier", [
        (11.67, TrafficLightColor.GREEN, SeverityTier.FAVORABLE),
        (6.0, TrafficLightColor.GREEN, SeverityTier.FAVORABLE),
        (5.99, TrafficLightColor.YELLOW, SeverityTier.NEUTRAL),
        (0.0, TrafficLightColor.YELLOW, SeverityTier.NEUTRAL),
        (-1.99, TrafficLightColor.YELLOW, SeverityTier.NEUTRAL),
        (-2.0, TrafficLightColor.RED, SeverityTier.HIGH_RISK),
        (-40.0, TrafficLightColor.RED, SeverityTier.HIGH_RISK),
    ])
    def test_partition(self, score, color, tier):
        light = classify_traffic_light(score)
        assert light.color == color
        assert light.tier == tier

    def test_every_score_maps_to_one_light(self):
        """Exhaustive over a sweep of the real line"""
        for step in range(-400, 401):
            light = classify_traffic_light(step / 20.0)
            assert light.color in set(TrafficLightColor)

    def test_labels(self):
        assert classify_traffic_light(7.0).label.startswith("Green")
        assert classify_traffic_light(-3.0).label.startswith("Red")
        assert classify_traffic_light(1.0).label.startswith("Yellow")

    def test_custom_cutoffs(self):
        params = TrafficLightParams(favorable_min=3.0, high_risk_max=-1.0)
        assert classify_traffic_light(3.0, params).color == TrafficLightColor.GREEN
        assert classify_traffic_light(-1.0, params).color == TrafficLightColor.RED
