"""Coin universe definition and parsing."""

from typing import Any, Iterable

from ..data.models import CoinDefinition, Sector
from ..errors import ConfigurationError

DEFAULT_UNIVERSE: tuple[CoinDefinition, ...] = (
    CoinDefinition(id="bitcoin", symbol="BTC", name="Bitcoin", sector=Sector.MACRO),
    CoinDefinition(id="ethereum", symbol="ETH", name="Ethereum", sector=Sector.L1),
    CoinDefinition(id="solana", symbol="SOL", name="Solana", sector=Sector.L1),
    CoinDefinition(id="chainlink", symbol="LINK", name="Chainlink", sector=Sector.ORACLE),
    CoinDefinition(id="avalanche-2", symbol="AVAX", name="Avalanche", sector=Sector.L1),
)


def parse_universe(raw_coins: Iterable[dict[str, Any]]) -> tuple[CoinDefinition, ...]:
    """
    Build a coin universe from plain dictionaries (e.g. ``coins.yaml``).

    Args:
        raw_coins: Iterable of mappings with id, symbol, name and sector

    Returns:
        Tuple of coin definitions in the given order

    Raises:
        ConfigurationError: On missing fields, unknown sectors or duplicate ids
    """
    coins = []
    seen: set[str] = set()

    for index, raw in enumerate(raw_coins):
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Coin entry {index} must be a mapping", source="coins")

        missing = [key for key in ("id", "symbol", "name", "sector") if not raw.get(key)]
        if missing:
            raise ConfigurationError(
                f"Coin entry {index} missing fields: {', '.join(missing)}",
                source="coins"
            )

        coin_id = str(raw["id"])
        if coin_id in seen:
            raise ConfigurationError(f"Duplicate coin id: {coin_id}", source="coins")

        try:
            sector = Sector(raw["sector"])
        except ValueError:
            raise ConfigurationError(
                f"Unknown sector for {coin_id}: {raw['sector']}",
                source="coins"
            )

        seen.add(coin_id)
        coins.append(CoinDefinition(
            id=coin_id,
            symbol=str(raw["symbol"]),
            name=str(raw["name"]),
            sector=sector,
        ))

    if not coins:
        raise ConfigurationError("Coin universe must not be empty", source="coins")

    return tuple(coins)
