"""
Canonical data models for normalized market data.

This module defines immutable data structures for the coin universe and the
per-refresh market snapshot of each coin. ``None`` always means unknown;
a missing percentage is never represented as 0.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Sector(str, Enum):
    """Coarse asset categories used for sector rotation."""
    MACRO = "Macro"
    L1 = "L1"
    L2 = "L2"
    ORACLE = "Oracle"
    DEFI = "DeFi"


@dataclass(frozen=True)
class CoinDefinition:
    """A coin in the configured universe."""
    id: str             # Provider coin id, e.g. "avalanche-2"
    symbol: str         # Ticker, e.g. "AVAX"
    name: str           # Display name
    sector: Sector


@dataclass(frozen=True)
class MarketSnapshot:
    """Normalized market data for one coin on one refresh."""
    coin_id: str
    price: Optional[float] = None           # Spot price, None if unknown
    change_24h: Optional[float] = None      # Percent, None if unknown
    change_7d: Optional[float] = None       # Percent, None if unknown
    price_series: tuple[float, ...] = ()    # Chronological, may be empty

    @classmethod
    def unknown(cls, coin_id: str) -> "MarketSnapshot":
        """Snapshot for a coin the provider said nothing about."""
        return cls(coin_id=coin_id)

    @property
    def has_price_series(self) -> bool:
        return len(self.price_series) > 0

    @property
    def is_empty(self) -> bool:
        """True when every field is unknown."""
        return (self.price is None and
                self.change_24h is None and
                self.change_7d is None and
                not self.price_series)


@dataclass(frozen=True)
class SnapshotBuildResult:
    """Result of turning one provider payload into market snapshots."""

    # coin_id -> snapshot, in universe order, one entry per configured coin
    snapshots: dict[str, MarketSnapshot] = field(default_factory=dict)

    # Provider ids outside the universe
    skipped_ids: tuple[str, ...] = ()

    # Universe ids the provider did not return
    missing_ids: tuple[str, ...] = ()

    # Coins whose 7d change was derived from their price series
    derived_change_ids: tuple[str, ...] = ()
