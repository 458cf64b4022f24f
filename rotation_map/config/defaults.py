"""Default configuration parameters for the rotation signal engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SentimentParams:
    """24h sentiment thresholds (percent, strict comparisons)."""
    strong_bullish: float = 3.0                      # change_24h > this
    bullish: float = 0.5
    bearish: float = -0.5
    strong_bearish: float = -3.0                     # change_24h < this


@dataclass(frozen=True)
class TrendParams:
    """7d trend label thresholds (percent)."""
    strong_uptrend: float = 15.0
    uptrend: float = 5.0
    downtrend: float = -5.0
    strong_downtrend: float = -15.0


@dataclass(frozen=True)
class PhaseParams:
    """7d trend phase thresholds (percent)."""
    parabolic: float = 20.0
    expansion: float = 10.0
    early_uptrend: float = 3.0
    grinding_downtrend: float = -3.0
    sharp_downtrend: float = -10.0
    capitulation: float = -20.0


@dataclass(frozen=True)
class AccelerationParams:
    """Short-term move vs trailing 7d pace."""
    band_pct: float = 3.0                            # Deviation from daily pace
    trend_days: int = 7                              # Days the 7d change spans


@dataclass(frozen=True)
class EMAParams:
    """EMA structure parameters."""
    fast_period: int = 20
    slow_period: int = 50


@dataclass(frozen=True)
class ScoringParams:
    """Rotation score composition."""
    trend_divisor: float = 4.0                       # trend_score = change_7d / 4
    momentum_divisor: float = 3.0                    # momentum_score = change_24h / 3
    trend_weight: float = 2.0
    momentum_weight: float = 1.0
    strength_scale_pct: float = 20.0                 # 7d change mapped to full strength bar


@dataclass(frozen=True)
class TrafficLightParams:
    """Traffic light cut-offs on the rotation score (inclusive)."""
    favorable_min: float = 6.0
    high_risk_max: float = -2.0


@dataclass(frozen=True)
class SignalParams:
    """Cross-market rotation signal thresholds."""
    sector_leader_min: float = 3.0
    sector_gap_min: float = 1.5
    sector_abandon_max: float = -2.0
    coin_acceleration_min: float = 6.0
    coin_capitulation_max: float = -6.0


@dataclass(frozen=True)
class NormalizerParams:
    """Provider payload normalization."""
    derive_change_7d_from_series: bool = True


@dataclass(frozen=True)
class ProviderParams:
    """Market-data provider settings."""
    base_url: str = "https://api.coingecko.com/api/v3"
    vs_currency: str = "usd"
    timeout_seconds: float = 15.0
    user_agent: str = "rotation-map/0.1"


@dataclass(frozen=True)
class RefreshParams:
    """Polling schedule."""
    interval_seconds: float = 60.0


@dataclass(frozen=True)
class PreferenceParams:
    """Visible-coin preference storage."""
    path: str = "~/.rotation_map/preferences.json"


@dataclass(frozen=True)
class RenderParams:
    """Console dashboard output."""
    format: str = "pretty"                           # pretty, json
    bar_width: int = 20                              # 7d strength bar characters
    sparkline_width: int = 28                        # 7d price shape characters


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    sentiment: SentimentParams
    trend: TrendParams
    phase: PhaseParams
    acceleration: AccelerationParams
    ema: EMAParams
    scoring: ScoringParams
    traffic_light: TrafficLightParams
    signals: SignalParams
    normalizer: NormalizerParams
    provider: ProviderParams
    refresh: RefreshParams
    preferences: PreferenceParams
    render: RenderParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        sentiment=SentimentParams(),
        trend=TrendParams(),
        phase=PhaseParams(),
        acceleration=AccelerationParams(),
        ema=EMAParams(),
        scoring=ScoringParams(),
        traffic_light=TrafficLightParams(),
        signals=SignalParams(),
        normalizer=NormalizerParams(),
        provider=ProviderParams(),
        refresh=RefreshParams(),
        preferences=PreferenceParams(),
        render=RenderParams(),
    )
