"""Rotation scoring: trend and momentum components and the traffic light"""

from typing import Optional

from ..config.defaults import ScoringParams, TrafficLightParams
from ..models.scores import SeverityTier, TrafficLight, TrafficLightColor
from .indicators import is_known

GREEN_LIGHT = TrafficLight(
    color=TrafficLightColor.GREEN,
    tier=SeverityTier.FAVORABLE,
    label="Green – Favorable rotation",
)
YELLOW_LIGHT = TrafficLight(
    color=TrafficLightColor.YELLOW,
    tier=SeverityTier.NEUTRAL,
    label="Yellow – Neutral / wait",
)
RED_LIGHT = TrafficLight(
    color=TrafficLightColor.RED,
    tier=SeverityTier.HIGH_RISK,
    label="Red – High risk",
)


def trend_score(change_7d: Optional[float], params: Optional[ScoringParams] = None) -> float:
    """
    Trend component of the rotation score

    Returns:
        change_7d / trend_divisor, 0.0 if unknown
    """
    if not is_known(change_7d):
        return 0.0

    params = params or ScoringParams()
    return change_7d / params.trend_divisor


def momentum_score(change_24h: Optional[float], params: Optional[ScoringParams] = None) -> float:
    """
    Momentum component of the rotation score

    Returns:
        change_24h / momentum_divisor, 0.0 if unknown
    """
    if not is_known(change_24h):
        return 0.0

    params = params or ScoringParams()
    return change_24h / params.momentum_divisor


def rotation_score(change_24h: Optional[float], change_7d: Optional[float],
                   params: Optional[ScoringParams] = None) -> float:
    """
    Composite rotation score

    rotation = trend_score * 2 + momentum_score with default weights, so the
    7d structure counts twice as much as the latest day.
    """
    params = params or ScoringParams()

    return (trend_score(change_7d, params) * params.trend_weight +
            momentum_score(change_24h, params) * params.momentum_weight)


def classify_traffic_light(score: float,
                           params: Optional[TrafficLightParams] = None) -> TrafficLight:
    """
    Map a rotation score onto Green / Yellow / Red

    The favorable bar sits higher than the risk bar on purpose. Both cut-offs
    are inclusive; everything in between is Yellow.
    """
    params = params or TrafficLightParams()

    if score >= params.favorable_min:
        return GREEN_LIGHT
    if score <= params.high_risk_max:
        return RED_LIGHT
    return YELLOW_LIGHT
