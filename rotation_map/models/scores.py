"""
Derived signal data models.

This module defines the labels produced by the threshold classifiers and the
immutable per-coin and per-refresh results consumed by renderers. Display
text lives in the enum values.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..data.models import CoinDefinition, MarketSnapshot, Sector


class Sentiment(str, Enum):
    """Short-horizon (24h) mood."""
    STRONG_BULLISH = "Strong Bullish"
    BULLISH = "Bullish"
    NEUTRAL = "Neutral"
    BEARISH = "Bearish"
    STRONG_BEARISH = "Strong Bearish"
    UNKNOWN = "Unknown"


class TrendLabel(str, Enum):
    """Medium-horizon (7d) direction."""
    STRONG_UPTREND = "Strong Uptrend"
    UPTREND = "Uptrend"
    SIDEWAYS = "Sideways"
    DOWNTREND = "Downtrend"
    STRONG_DOWNTREND = "Strong Downtrend"
    UNKNOWN = "Unknown"


class TrendPhase(str, Enum):
    """7d direction with magnitude granularity."""
    PARABOLIC = "Parabolic Uptrend"
    EXPANSION = "Expansion Phase"
    EARLY_UPTREND = "Early Uptrend"
    RANGE_COMPRESSION = "Range / Compression"
    GRINDING_DOWNTREND = "Grinding Downtrend"
    SHARP_DOWNTREND = "Sharp Downtrend"
    CAPITULATION = "Capitulation"
    UNKNOWN = "Unknown"


class AccelerationLabel(str, Enum):
    """Latest day's move against the trailing 7d daily pace."""
    ACCELERATION = "Short-term acceleration"
    DECELERATION = "Short-term deceleration"
    STABLE = "Stable vs recent trend"
    UNKNOWN = "Unknown"


class TrafficLightColor(str, Enum):
    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"


class SeverityTier(str, Enum):
    FAVORABLE = "Favorable"
    NEUTRAL = "Neutral"
    HIGH_RISK = "HighRisk"


@dataclass(frozen=True)
class TrafficLight:
    """Coarse actionability classification of a rotation score."""
    color: TrafficLightColor
    tier: SeverityTier
    label: str

    def to_dict(self) -> dict[str, str]:
        return {"color": self.color.value, "tier": self.tier.value, "label": self.label}


@dataclass(frozen=True)
class TrendIndicators:
    """Series-derived trend inputs. None means insufficient history or unknown."""
    ema20: Optional[float] = None
    ema50: Optional[float] = None
    change_7d: Optional[float] = None


@dataclass(frozen=True)
class ScoreResult:
    """All derived signals for one coin on one refresh."""
    coin: CoinDefinition
    indicators: TrendIndicators
    trend_score: float
    momentum_score: float
    rotation_score: float
    sentiment: Sentiment
    trend_label: TrendLabel
    trend_phase: TrendPhase
    acceleration: AccelerationLabel
    traffic_light: TrafficLight
    ema_trend_score: int = 0
    strength_intensity: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Flatten for JSON output."""
        return {
            "coin_id": self.coin.id,
            "symbol": self.coin.symbol,
            "name": self.coin.name,
            "sector": self.coin.sector.value,
            "trend_score": self.trend_score,
            "momentum_score": self.momentum_score,
            "rotation_score": self.rotation_score,
            "sentiment": self.sentiment.value,
            "trend_label": self.trend_label.value,
            "trend_phase": self.trend_phase.value,
            "acceleration": self.acceleration.value,
            "traffic_light": self.traffic_light.to_dict(),
            "ema_trend_score": self.ema_trend_score,
            "strength_intensity": self.strength_intensity,
            "ema20": self.indicators.ema20,
            "ema50": self.indicators.ema50,
        }


@dataclass(frozen=True)
class LeaderboardEntry:
    """One row of the rotation leaderboard."""
    rank: int
    coin: CoinDefinition
    rotation_score: float


@dataclass(frozen=True)
class RotationLeaderboard:
    """Coins ordered by rotation score, descending, ties in universe order."""
    entries: tuple[LeaderboardEntry, ...] = ()
    sector: Optional[Sector] = None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def coin_ids(self) -> list[str]:
        return [entry.coin.id for entry in self.entries]

    @property
    def leader(self) -> Optional[LeaderboardEntry]:
        return self.entries[0] if self.entries else None


@dataclass(frozen=True)
class SectorStat:
    """Average rotation score of one sector."""
    sector: Sector
    average_score: float
    member_count: int


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything one refresh produced, replaced wholesale on the next one."""
    refresh_id: int
    generated_at: datetime
    snapshots: dict[str, MarketSnapshot] = field(default_factory=dict)
    scores: dict[str, ScoreResult] = field(default_factory=dict)
    leaderboard: RotationLeaderboard = field(default_factory=RotationLeaderboard)
    sector_stats: tuple[SectorStat, ...] = ()
    signals: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON renderers."""
        return {
            "refresh_id": self.refresh_id,
            "generated_at": self.generated_at.isoformat(),
            "coins": [
                {
                    **score.to_dict(),
                    "price": self.snapshots[coin_id].price if coin_id in self.snapshots else None,
                    "change_24h": self.snapshots[coin_id].change_24h if coin_id in self.snapshots else None,
                    "change_7d": self.snapshots[coin_id].change_7d if coin_id in self.snapshots else None,
                }
                for coin_id, score in self.scores.items()
            ],
            "leaderboard": [
                {"rank": e.rank, "coin_id": e.coin.id, "rotation_score": e.rotation_score}
                for e in self.leaderboard
            ],
            "sectors": [
                {"sector": s.sector.value, "average_score": s.average_score,
                 "member_count": s.member_count}
                for s in self.sector_stats
            ],
            "signals": list(self.signals),
        }
