"""Trend indicators and threshold classifiers for 24h/7d percent changes"""

import math
from typing import Optional, Sequence

from ..config.defaults import (
    AccelerationParams,
    PhaseParams,
    SentimentParams,
    TrendParams,
)
from ..data.models import MarketSnapshot
from ..models.scores import (
    AccelerationLabel,
    Sentiment,
    TrendIndicators,
    TrendLabel,
    TrendPhase,
)


def is_known(value: Optional[float]) -> bool:
    """True for a finite number; None and NaN are unknown."""
    return value is not None and not math.isnan(value)


def ema(series: Sequence[float], period: int) -> Optional[float]:
    """
    Calculate an Exponential Moving Average seeded with the first sample

    ema = sample * k + ema * (1 - k), k = 2 / (period + 1)

    Args:
        series: Prices in chronological order
        period: EMA period

    Returns:
        EMA value or None if the series is shorter than the period
    """
    if period < 1 or len(series) < period:
        return None

    k = 2.0 / (period + 1)
    value = float(series[0])
    for sample in series[1:]:
        value = sample * k + value * (1.0 - k)

    return value


def classify_sentiment(change_24h: Optional[float],
                       params: Optional[SentimentParams] = None) -> Sentiment:
    """
    Classify 24h sentiment

    Args:
        change_24h: 24h percent change
        params: Threshold table (strict comparisons)

    Returns:
        Sentiment label, UNKNOWN if the input is missing
    """
    if not is_known(change_24h):
        return Sentiment.UNKNOWN

    params = params or SentimentParams()

    if change_24h > params.strong_bullish:
        return Sentiment.STRONG_BULLISH
    if change_24h > params.bullish:
        return Sentiment.BULLISH
    if change_24h < params.strong_bearish:
        return Sentiment.STRONG_BEARISH
    if change_24h < params.bearish:
        return Sentiment.BEARISH
    return Sentiment.NEUTRAL


def classify_trend(change_7d: Optional[float],
                   params: Optional[TrendParams] = None) -> TrendLabel:
    """Classify the 7d trend direction"""
    if not is_known(change_7d):
        return TrendLabel.UNKNOWN

    params = params or TrendParams()

    if change_7d > params.strong_uptrend:
        return TrendLabel.STRONG_UPTREND
    if change_7d > params.uptrend:
        return TrendLabel.UPTREND
    if change_7d < params.strong_downtrend:
        return TrendLabel.STRONG_DOWNTREND
    if change_7d < params.downtrend:
        return TrendLabel.DOWNTREND
    return TrendLabel.SIDEWAYS


def classify_trend_phase(change_7d: Optional[float],
                         params: Optional[PhaseParams] = None) -> TrendPhase:
    """Classify the 7d trend phase"""
    if not is_known(change_7d):
        return TrendPhase.UNKNOWN

    params = params or PhaseParams()

    if change_7d > params.parabolic:
        return TrendPhase.PARABOLIC
    if change_7d > params.expansion:
        return TrendPhase.EXPANSION
    if change_7d > params.early_uptrend:
        return TrendPhase.EARLY_UPTREND
    if change_7d < params.capitulation:
        return TrendPhase.CAPITULATION
    if change_7d < params.sharp_downtrend:
        return TrendPhase.SHARP_DOWNTREND
    if change_7d < params.grinding_downtrend:
        return TrendPhase.GRINDING_DOWNTREND
    return TrendPhase.RANGE_COMPRESSION


def classify_acceleration(change_24h: Optional[float], change_7d: Optional[float],
                          params: Optional[AccelerationParams] = None) -> AccelerationLabel:
    """
    Compare the latest 24h move with the average daily move of the last 7 days

    Args:
        change_24h: 24h percent change
        change_7d: 7d percent change
        params: Band width and number of days in the trailing window

    Returns:
        Acceleration label, UNKNOWN if either input is missing
    """
    if not is_known(change_24h) or not is_known(change_7d):
        return AccelerationLabel.UNKNOWN

    params = params or AccelerationParams()
    daily_avg = change_7d / params.trend_days

    if change_24h > daily_avg + params.band_pct:
        return AccelerationLabel.ACCELERATION
    if change_24h < daily_avg - params.band_pct:
        return AccelerationLabel.DECELERATION
    return AccelerationLabel.STABLE


def trend_score_from_ema(price: Optional[float], ema20: Optional[float],
                         ema50: Optional[float]) -> int:
    """
    Score the EMA stack

    +2 for price > ema20 > ema50, +1 for ema20 > ema50 otherwise,
    -2 for price < ema20 < ema50, -1 for any other arrangement.

    Returns:
        Stack score, 0 if price or either EMA is unknown
    """
    if not (is_known(price) and is_known(ema20) and is_known(ema50)):
        return 0

    if price > ema20 > ema50:
        return 2
    if ema20 > ema50:
        return 1
    if price < ema20 < ema50:
        return -2
    return -1


def strength_intensity(change_7d: Optional[float], scale_pct: float = 20.0) -> float:
    """
    7d strength bar value in [-1, 1]

    Args:
        change_7d: 7d percent change
        scale_pct: Percent change that fills the bar

    Returns:
        Clamped intensity, 0.0 if unknown
    """
    if not is_known(change_7d) or scale_pct <= 0:
        return 0.0

    return max(-1.0, min(1.0, change_7d / scale_pct))


def compute_trend_indicators(snapshot: MarketSnapshot, fast_period: int = 20,
                             slow_period: int = 50) -> TrendIndicators:
    """
    Build trend indicators from a market snapshot

    Args:
        snapshot: Normalized market snapshot
        fast_period: Fast EMA period
        slow_period: Slow EMA period

    Returns:
        TrendIndicators with EMAs left unknown when history is too short
    """
    return TrendIndicators(
        ema20=ema(snapshot.price_series, fast_period),
        ema50=ema(snapshot.price_series, slow_period),
        change_7d=snapshot.change_7d,
    )
