"""Console rendering of dashboard snapshots."""

import json
import sys
from typing import Iterable, Optional, Sequence, TextIO

from ..config.defaults import RenderParams
from ..models.scores import DashboardSnapshot, RotationLeaderboard, ScoreResult
from ..signals.ranking import rank_rotation
from ..signals.sectors import NO_SIGNALS_MESSAGE

UNKNOWN_PLACEHOLDER = "—"
SPARK_BLOCKS = "▁▂▃▄▅▆▇█"


def format_pct(value: Optional[float]) -> str:
    """Percent with two decimals, or a dash when unknown."""
    if value is None:
        return UNKNOWN_PLACEHOLDER
    return f"{value:.2f}%"


def format_price(value: Optional[float]) -> str:
    if value is None:
        return UNKNOWN_PLACEHOLDER
    return f"${value:.2f}"


def render_strength_bar(intensity: float, width: int = 20) -> str:
    """
    Text version of the 7d strength bar.

    Filled cells grow with |intensity| (at least 15% of the bar, like the
    card layout); '+' for positive, '-' for negative, '=' when flat.
    """
    filled = max(round(width * 0.15), round(abs(intensity) * width))
    filled = min(filled, width)

    if intensity > 0:
        mark = "+"
    elif intensity < 0:
        mark = "-"
    else:
        mark = "="

    return "[" + mark * filled + " " * (width - filled) + "]"


def render_sparkline(series: Sequence[float], width: int = 28) -> str:
    """
    Text version of the 7d price shape.

    Longer series are sampled down to ``width`` points, always ending on
    the last sample. Heights are scaled between the series low and
    high; a flat series sits on the bottom row.

    Returns:
        Block characters, or an empty string for an empty series
    """
    if not series:
        return ""

    count = len(series)
    if count <= width:
        samples = list(series)
    elif width == 1:
        samples = [series[-1]]
    else:
        samples = [series[round(i * (count - 1) / (width - 1))] for i in range(width)]

    low, high = min(series), max(series)
    span = (high - low) or 1.0
    top = len(SPARK_BLOCKS) - 1

    return "".join(SPARK_BLOCKS[round((value - low) / span * top)] for value in samples)


def describe_price_shape(series: Sequence[float], width: int = 28) -> str:
    """Sparkline followed by the series low, high and last price."""
    if not series:
        return UNKNOWN_PLACEHOLDER

    return (
        f"{render_sparkline(series, width)}  "
        f"low {format_price(min(series))}  "
        f"high {format_price(max(series))}  "
        f"last {format_price(series[-1])}"
    )


class ConsoleRenderer:
    """Writes dashboard snapshots to a text stream."""

    def __init__(self, params: Optional[RenderParams] = None, stream: Optional[TextIO] = None):
        self.params = params or RenderParams()
        self.stream = stream or sys.stdout

    def render(self, snapshot: DashboardSnapshot, visible_ids: Iterable[str]) -> str:
        """Format a snapshot for the visible coins."""
        if self.params.format == "json":
            data = snapshot.to_dict()
            visible = set(visible_ids)
            data["coins"] = [coin for coin in data["coins"] if coin["coin_id"] in visible]
            data["visible_ids"] = [coin["coin_id"] for coin in data["coins"]]
            return json.dumps(data)

        visible = set(visible_ids)
        lines = [
            "Crypto Rotation Map",
            f"refresh #{snapshot.refresh_id} at {snapshot.generated_at.isoformat()}",
            "",
        ]

        cards = [score for coin_id, score in snapshot.scores.items() if coin_id in visible]
        if not cards:
            lines.append("No coins selected.")
        for score in cards:
            lines.extend(self._render_card(snapshot, score))
            lines.append("")

        lines.extend(self._render_leaderboard(
            rank_rotation(snapshot.scores.values(), visible_ids=visible)
        ))
        lines.append("")

        lines.append("Rotation signals:")
        if snapshot.signals:
            lines.extend(f"  * {message}" for message in snapshot.signals)
        else:
            lines.append(f"  {NO_SIGNALS_MESSAGE}")

        return "\n".join(lines)

    def write(self, snapshot: DashboardSnapshot, visible_ids: Iterable[str]) -> None:
        """Render and print a snapshot."""
        print(self.render(snapshot, visible_ids), file=self.stream, flush=True)

    def _render_card(self, snapshot: DashboardSnapshot, score: ScoreResult) -> list[str]:
        market = snapshot.snapshots.get(score.coin.id)
        price = market.price if market else None
        change_24h = market.change_24h if market else None
        change_7d = market.change_7d if market else None
        series = market.price_series if market else ()

        return [
            f"{score.coin.name} ({score.coin.symbol}) [{score.coin.sector.value}]",
            f"  Price: {format_price(price)}",
            f"  24h: {format_pct(change_24h)}   7d: {format_pct(change_7d)}",
            f"  Trend: {score.trend_label.value}   Sentiment: {score.sentiment.value}",
            f"  Rotation score: {score.rotation_score:.1f}   {score.traffic_light.label}",
            f"  Trend phase: {score.trend_phase.value}",
            f"  Short-term move: {score.acceleration.value}",
            f"  7d price shape: {describe_price_shape(series, self.params.sparkline_width)}",
            f"  7d strength {render_strength_bar(score.strength_intensity, self.params.bar_width)}",
        ]

    def _render_leaderboard(self, leaderboard: RotationLeaderboard) -> list[str]:
        lines = ["Rotation leaderboard:"]
        for entry in leaderboard:
            lines.append(f"  {entry.rank}. {entry.coin.symbol:<6} {entry.rotation_score:6.1f}")
        return lines
