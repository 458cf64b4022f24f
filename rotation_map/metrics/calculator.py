"""Per-coin signal calculator coordinating indicators and scores"""

from typing import Iterable, Optional

import structlog

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import CoinDefinition, MarketSnapshot
from ..models.scores import ScoreResult
from .indicators import (
    classify_acceleration,
    classify_sentiment,
    classify_trend,
    classify_trend_phase,
    compute_trend_indicators,
    strength_intensity,
    trend_score_from_ema,
)
from .scoring import classify_traffic_light, momentum_score, rotation_score, trend_score

logger = structlog.get_logger(__name__)


class SignalCalculator:
    """
    Turns market snapshots into score results

    Stateless apart from configuration: every call recomputes from its inputs,
    and missing data flows through as unknown labels and zero score components.
    """

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()

    def score_coin(self, coin: CoinDefinition, snapshot: MarketSnapshot) -> ScoreResult:
        """
        Calculate all signals for one coin

        Args:
            coin: Coin definition
            snapshot: Market snapshot for the same coin

        Returns:
            ScoreResult with labels, scores and traffic light
        """
        cfg = self.config
        change_24h = snapshot.change_24h
        change_7d = snapshot.change_7d

        indicators = compute_trend_indicators(
            snapshot,
            fast_period=cfg.ema.fast_period,
            slow_period=cfg.ema.slow_period,
        )

        score = rotation_score(change_24h, change_7d, cfg.scoring)

        return ScoreResult(
            coin=coin,
            indicators=indicators,
            trend_score=trend_score(change_7d, cfg.scoring),
            momentum_score=momentum_score(change_24h, cfg.scoring),
            rotation_score=score,
            sentiment=classify_sentiment(change_24h, cfg.sentiment),
            trend_label=classify_trend(change_7d, cfg.trend),
            trend_phase=classify_trend_phase(change_7d, cfg.phase),
            acceleration=classify_acceleration(change_24h, change_7d, cfg.acceleration),
            traffic_light=classify_traffic_light(score, cfg.traffic_light),
            ema_trend_score=trend_score_from_ema(
                snapshot.price, indicators.ema20, indicators.ema50
            ),
            strength_intensity=strength_intensity(change_7d, cfg.scoring.strength_scale_pct),
        )

    def score_universe(
        self,
        universe: Iterable[CoinDefinition],
        snapshots: dict[str, MarketSnapshot]
    ) -> dict[str, ScoreResult]:
        """
        Score every coin of the universe, in universe order

        Coins without a snapshot are scored from an all-unknown snapshot.
        """
        results: dict[str, ScoreResult] = {}

        for coin in universe:
            snapshot = snapshots.get(coin.id) or MarketSnapshot.unknown(coin.id)
            results[coin.id] = self.score_coin(coin, snapshot)

            logger.debug(
                "Scored coin",
                coin_id=coin.id,
                rotation_score=round(results[coin.id].rotation_score, 4),
                traffic_light=results[coin.id].traffic_light.color.value
            )

        return results

    def get_warmup_period(self) -> int:
        """Minimum price-series length for both EMAs to be known"""
        return max(self.config.ema.fast_period, self.config.ema.slow_period)
