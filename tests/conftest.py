"""Pytest configuration and shared fixtures."""

import pytest
from typing import Any, Callable, Dict, List, Optional

from rotation_map.config.defaults import get_default_config
from rotation_map.config.universe import DEFAULT_UNIVERSE
from rotation_map.data.models import CoinDefinition, MarketSnapshot, Sector
from rotation_map.metrics.calculator import SignalCalculator
from rotation_map.models.scores import ScoreResult


def make_market_entry(
    coin_id: str,
    price: Any = 100.0,
    change_24h: Any = None,
    change_7d: Any = None,
    series: Optional[List[Any]] = None,
) -> Dict[str, Any]:
    """Build one CoinGecko /coins/markets entry."""
    return {
        "id": coin_id,
        "current_price": price,
        "price_change_percentage_24h_in_currency": change_24h,
        "price_change_percentage_7d_in_currency": change_7d,
        "sparkline_in_7d": {"price": series if series is not None else []},
    }


@pytest.fixture
def universe() -> tuple:
    """Default five-coin universe."""
    return DEFAULT_UNIVERSE


@pytest.fixture
def two_sector_universe() -> tuple:
    """Four coins split across two sectors."""
    return (
        CoinDefinition(id="alpha", symbol="ALP", name="Alpha", sector=Sector.L1),
        CoinDefinition(id="beta", symbol="BET", name="Beta", sector=Sector.L1),
        CoinDefinition(id="gamma", symbol="GAM", name="Gamma", sector=Sector.DEFI),
        CoinDefinition(id="delta", symbol="DEL", name="Delta", sector=Sector.DEFI),
    )


@pytest.fixture
def sample_markets_payload() -> List[Dict[str, Any]]:
    """Provider payload for the default universe."""
    return [
        make_market_entry("bitcoin", 65000.0, change_24h=1.2, change_7d=4.0,
                          series=[62000.0 + i * 50 for i in range(60)]),
        make_market_entry("ethereum", 3200.0, change_24h=8.0, change_7d=18.0,
                          series=[2700.0 + i * 10 for i in range(60)]),
        make_market_entry("solana", 150.0, change_24h=-4.0, change_7d=-12.0),
        make_market_entry("chainlink", 14.0, change_24h=0.2, change_7d=None),
        make_market_entry("avalanche-2", None, change_24h=None, change_7d=None),
        make_market_entry("dogecoin", 0.1, change_24h=20.0, change_7d=40.0),
    ]


@pytest.fixture
def score_factory() -> Callable[..., ScoreResult]:
    """Score a coin from 24h/7d changes with default thresholds."""
    calculator = SignalCalculator(get_default_config())

    def _score(coin: CoinDefinition, change_24h: Optional[float] = None,
               change_7d: Optional[float] = None) -> ScoreResult:
        snapshot = MarketSnapshot(coin_id=coin.id, change_24h=change_24h, change_7d=change_7d)
        return calculator.score_coin(coin, snapshot)

    return _score


@pytest.fixture
def market_entry() -> Callable[..., Dict[str, Any]]:
    """Factory for provider market entries."""
    return make_market_entry
