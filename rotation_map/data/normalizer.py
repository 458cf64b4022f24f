"""
Market snapshot builder for converting provider payloads to canonical records.

This module provides the MarketDataNormalizer class that maps a raw
``/coins/markets`` payload onto the configured coin universe, producing one
MarketSnapshot per coin with unknowns propagated explicitly.
"""

from typing import Any, Iterable, Optional

import structlog

from ..config.defaults import NormalizerParams
from ..errors import MalformedDataError, MissingDataError
from .models import CoinDefinition, MarketSnapshot, SnapshotBuildResult
from .parsers import parse_market_entry

logger = structlog.get_logger(__name__)


def derive_change_from_series(series: tuple[float, ...]) -> Optional[float]:
    """
    Percent change from the first to the last sample of a series.

    Returns:
        Percent change, or None with fewer than two samples or a
        non-positive first sample
    """
    if len(series) < 2:
        return None

    first = series[0]
    if first <= 0:
        return None

    return (series[-1] / first - 1.0) * 100.0


class MarketDataNormalizer:
    """
    Builds per-coin market snapshots from a provider payload.

    Coins outside the universe are ignored; coins the provider omitted get an
    all-unknown snapshot so every downstream consumer sees the full universe.
    """

    def __init__(self, params: Optional[NormalizerParams] = None):
        self.params = params or NormalizerParams()

    def build_snapshots(
        self,
        payload: Any,
        universe: Iterable[CoinDefinition]
    ) -> SnapshotBuildResult:
        """
        Normalize one provider payload.

        Args:
            payload: Decoded ``/coins/markets`` response (list of entries)
            universe: Configured coins, in display order

        Returns:
            SnapshotBuildResult with one snapshot per universe coin

        Raises:
            MissingDataError: If there is no payload at all
            MalformedDataError: If the payload is not a list
        """
        if payload is None:
            raise MissingDataError("No market payload received", data_type="markets")

        if not isinstance(payload, list):
            raise MalformedDataError(
                f"Market payload must be a list, got {type(payload).__name__}",
                raw_data=str(payload)[:100],
                expected_format="list"
            )

        coins = list(universe)
        known_ids = {coin.id for coin in coins}

        parsed: dict[str, dict[str, Any]] = {}
        skipped = []

        for entry in payload:
            try:
                fields = parse_market_entry(entry)
            except MalformedDataError as e:
                logger.warning(
                    "Skipping malformed market entry",
                    error=str(e),
                    raw_data=e.raw_data
                )
                continue

            coin_id = fields["id"]
            if coin_id not in known_ids:
                skipped.append(coin_id)
                logger.debug("Ignoring coin outside universe", coin_id=coin_id)
                continue

            # First occurrence wins
            parsed.setdefault(coin_id, fields)

        snapshots: dict[str, MarketSnapshot] = {}
        missing = []
        derived = []

        for coin in coins:
            fields = parsed.get(coin.id)
            if fields is None:
                missing.append(coin.id)
                snapshots[coin.id] = MarketSnapshot.unknown(coin.id)
                continue

            change_7d = fields["change_7d"]
            if change_7d is None and self.params.derive_change_7d_from_series:
                change_7d = derive_change_from_series(fields["price_series"])
                if change_7d is not None:
                    derived.append(coin.id)

            snapshots[coin.id] = MarketSnapshot(
                coin_id=coin.id,
                price=fields["price"],
                change_24h=fields["change_24h"],
                change_7d=change_7d,
                price_series=fields["price_series"],
            )

        if missing:
            logger.warning(
                "Provider returned no data for coins",
                missing_ids=missing
            )

        logger.debug(
            "Built market snapshots",
            coin_count=len(snapshots),
            skipped_count=len(skipped),
            derived_change_ids=derived
        )

        return SnapshotBuildResult(
            snapshots=snapshots,
            skipped_ids=tuple(skipped),
            missing_ids=tuple(missing),
            derived_change_ids=tuple(derived),
        )
