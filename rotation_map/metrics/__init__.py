"""Signal calculation engine for per-coin indicators and scores"""

from .calculator import SignalCalculator
from .indicators import (
    classify_acceleration,
    classify_sentiment,
    classify_trend,
    classify_trend_phase,
    compute_trend_indicators,
    ema,
    strength_intensity,
    trend_score_from_ema,
)
from .scoring import classify_traffic_light, momentum_score, rotation_score, trend_score

__all__ = [
    "SignalCalculator",
    "ema",
    "classify_sentiment",
    "classify_trend",
    "classify_trend_phase",
    "classify_acceleration",
    "compute_trend_indicators",
    "strength_intensity",
    "trend_score_from_ema",
    "trend_score",
    "momentum_score",
    "rotation_score",
    "classify_traffic_light",
]
