"""
Main rotation engine coordinator.

Orchestrates one refresh of the signal pipeline: provider payload to market
snapshots, per-coin indicators and scores, rotation leaderboard, sector
aggregation and rotation signal messages.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, Optional

import structlog

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .data.models import CoinDefinition, Sector
from .data.normalizer import MarketDataNormalizer
from .errors import DataQualityError
from .metrics.calculator import SignalCalculator
from .models.scores import DashboardSnapshot, RotationLeaderboard
from .signals.ranking import rank_rotation
from .signals.sectors import aggregate_sectors, emit_rotation_signals

logger = structlog.get_logger(__name__)


class RotationMapEngine:
    """
    Main coordinator for the rotation signal pipeline.

    Manages the evaluation pipeline:
    Provider Payload → Snapshots → Indicators/Scores → Leaderboard + Sectors → Signals

    Each call to ``evaluate`` is self-contained; nothing carries over between
    refreshes.
    """

    def __init__(
        self,
        config_dir: Optional[str] = None,
        config: Optional[DefaultConfig] = None,
        universe: Optional[Iterable[CoinDefinition]] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> None:
        """Initialize the rotation engine."""
        self.logger = logger

        self.config_loader = ConfigLoader.create(config_dir)
        self.config = config or self.config_loader.load_config(overrides)
        self.universe: tuple[CoinDefinition, ...] = (
            tuple(universe) if universe is not None else self.config_loader.load_universe()
        )

        self.normalizer = MarketDataNormalizer(self.config.normalizer)
        self.calculator = SignalCalculator(self.config)

        self.logger.info(
            "Rotation engine initialized",
            coin_count=len(self.universe),
            coin_ids=[coin.id for coin in self.universe]
        )

    @property
    def coin_ids(self) -> list[str]:
        return [coin.id for coin in self.universe]

    def evaluate(self, payload: Any, refresh_id: int = 0) -> Optional[DashboardSnapshot]:
        """
        Run the full pipeline over one provider payload.

        Args:
            payload: Decoded provider response
            refresh_id: Sequence number of the refresh this payload belongs to

        Returns:
            DashboardSnapshot, or None if the payload could not be normalized
            (the caller keeps showing its previous snapshot)
        """
        try:
            build = self.normalizer.build_snapshots(payload, self.universe)

        except DataQualityError as e:
            self.logger.warning(
                "Data quality issue during refresh",
                refresh_id=refresh_id,
                error=str(e),
                error_type=type(e).__name__,
                context=getattr(e, 'context', {})
            )
            return None

        scores = self.calculator.score_universe(self.universe, build.snapshots)
        scored = list(scores.values())

        leaderboard = rank_rotation(scored)
        sector_stats = aggregate_sectors(scored)
        signals = emit_rotation_signals(scored, self.config.signals)

        snapshot = DashboardSnapshot(
            refresh_id=refresh_id,
            generated_at=datetime.now(timezone.utc),
            snapshots=build.snapshots,
            scores=scores,
            leaderboard=leaderboard,
            sector_stats=tuple(sector_stats),
            signals=tuple(signals),
        )

        self.logger.info(
            "Refresh evaluated",
            refresh_id=refresh_id,
            coin_count=len(scores),
            missing_ids=list(build.missing_ids),
            leader=leaderboard.leader.coin.id if leaderboard.leader else None,
            signal_count=len(signals)
        )

        return snapshot

    def leaderboard(
        self,
        snapshot: DashboardSnapshot,
        visible_ids: Optional[Iterable[str]] = None,
        sector: Optional[Sector] = None
    ) -> RotationLeaderboard:
        """Re-rank a stored snapshot for a display filter without recomputing scores."""
        return rank_rotation(snapshot.scores.values(), visible_ids=visible_ids, sector=sector)

    def get_runtime_stats(self) -> dict[str, Any]:
        """Get runtime statistics."""
        return {
            'tracked_coins': len(self.universe),
            'warmup_period': self.calculator.get_warmup_period(),
            'sectors': sorted({coin.sector.value for coin in self.universe}),
        }
