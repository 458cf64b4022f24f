"""Unit tests for the rotation engine."""

import pytest

from rotation_map.config.defaults import get_default_config
from rotation_map.data.models import Sector
from rotation_map.engine import RotationMapEngine
from rotation_map.models.scores import TrafficLightColor, TrendPhase


class TestRotationMapEngine:
    """Test suite for RotationMapEngine."""

    @pytest.fixture
    def engine(self, universe):
        """Engine over the default universe with default thresholds."""
        return RotationMapEngine(config=get_default_config(), universe=universe)

    def test_engine_initialization(self, engine, universe) -> None:
        """Test engine initializes with universe and calculator."""
        assert engine.coin_ids == [coin.id for coin in universe]
        assert engine.calculator is not None
        assert engine.normalizer is not None

    def test_engine_loads_config_dir(self, tmp_path) -> None:
        """Test engine reads thresholds and universe from a config directory."""
        (tmp_path / "settings.yaml").write_text(
            "settings:\n  traffic_light:\n    favorable_min: 8.0\n"
        )
        (tmp_path / "coins.yaml").write_text(
            "coins:\n  - {id: uniswap, symbol: UNI, name: Uniswap, sector: DeFi}\n"
        )

        engine = RotationMapEngine(config_dir=str(tmp_path))

        assert engine.config.traffic_light.favorable_min == 8.0
        assert engine.coin_ids == ["uniswap"]

    def test_evaluate_scores_every_coin(self, engine, sample_markets_payload) -> None:
        snapshot = engine.evaluate(sample_markets_payload, refresh_id=3)

        assert snapshot.refresh_id == 3
        assert list(snapshot.scores) == engine.coin_ids
        assert "dogecoin" not in snapshot.scores

        eth = snapshot.scores["ethereum"]
        assert eth.rotation_score == pytest.approx(11.6667, abs=1e-3)
        assert eth.traffic_light.color == TrafficLightColor.GREEN
        assert eth.trend_phase == TrendPhase.EXPANSION

        avax = snapshot.scores["avalanche-2"]
        assert avax.rotation_score == 0
        assert avax.traffic_light.color == TrafficLightColor.YELLOW

    def test_evaluate_leaderboard_and_signals(self, engine, sample_markets_payload) -> None:
        snapshot = engine.evaluate(sample_markets_payload)

        assert snapshot.leaderboard.coin_ids == [
            "ethereum", "bitcoin", "chainlink", "avalanche-2", "solana"
        ]
        assert [stat.sector for stat in snapshot.sector_stats] == [
            Sector.MACRO, Sector.L1, Sector.ORACLE
        ]
        assert snapshot.signals == (
            "Ethereum (ETH) accelerating hardest (rotation score 11.7).",
            "Solana (SOL) showing capitulation (rotation score -7.3).",
        )

    def test_evaluate_rejects_malformed_payload(self, engine) -> None:
        """Test a non-list payload yields no snapshot."""
        assert engine.evaluate({"status": "rate limited"}) is None

    def test_evaluate_empty_payload(self, engine) -> None:
        """Test every coin becomes unknown when the provider returns nothing."""
        snapshot = engine.evaluate([])

        assert all(score.rotation_score == 0 for score in snapshot.scores.values())
        assert snapshot.signals == ()

    def test_leaderboard_filters(self, engine, sample_markets_payload) -> None:
        snapshot = engine.evaluate(sample_markets_payload)

        visible = engine.leaderboard(snapshot, visible_ids=["solana", "bitcoin"])
        assert visible.coin_ids == ["bitcoin", "solana"]
        assert [entry.rank for entry in visible] == [1, 2]

        l1 = engine.leaderboard(snapshot, sector=Sector.L1)
        assert l1.coin_ids == ["ethereum", "avalanche-2", "solana"]

    def test_runtime_stats(self, engine) -> None:
        stats = engine.get_runtime_stats()

        assert stats["tracked_coins"] == 5
        assert stats["warmup_period"] == 50
        assert stats["sectors"] == ["L1", "Macro", "Oracle"]
