"""Rotation leaderboard construction."""

from typing import Iterable, Optional

from ..data.models import Sector
from ..models.scores import LeaderboardEntry, RotationLeaderboard, ScoreResult


def rank_rotation(
    scored: Iterable[ScoreResult],
    visible_ids: Optional[Iterable[str]] = None,
    sector: Optional[Sector] = None
) -> RotationLeaderboard:
    """
    Rank coins by rotation score, descending.

    The sort is stable, so equal scores keep their input (universe) order.

    Args:
        scored: Score results in universe order
        visible_ids: Optional subset of coin ids to keep
        sector: Optional sector filter

    Returns:
        RotationLeaderboard with 1-based ranks
    """
    visible = set(visible_ids) if visible_ids is not None else None

    candidates = [
        result for result in scored
        if (visible is None or result.coin.id in visible)
        and (sector is None or result.coin.sector == sector)
    ]

    ordered = sorted(candidates, key=lambda result: result.rotation_score, reverse=True)

    return RotationLeaderboard(
        entries=tuple(
            LeaderboardEntry(rank=index, coin=result.coin, rotation_score=result.rotation_score)
            for index, result in enumerate(ordered, start=1)
        ),
        sector=sector,
    )
