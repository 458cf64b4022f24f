"""
Sector aggregation and rotation signal emission.

Signals are always computed over the full coin universe. Visibility filters
are a display concern and never reach this module.
"""

from typing import Iterable, Optional

from ..config.defaults import SignalParams
from ..logging.config import get_signal_logger, log_signal_emitted
from ..models.scores import ScoreResult, SectorStat

signal_logger = get_signal_logger(__name__)

NO_SIGNALS_MESSAGE = "No strong rotation signals right now."


def aggregate_sectors(scored: Iterable[ScoreResult]) -> list[SectorStat]:
    """
    Average rotation score per sector, best sector first.

    Sectors appear only when they have members. Equal averages keep the order
    in which the sector first appears in the universe.
    """
    totals: dict = {}

    for result in scored:
        total, count = totals.get(result.coin.sector, (0.0, 0))
        totals[result.coin.sector] = (total + result.rotation_score, count + 1)

    stats = [
        SectorStat(sector=sector, average_score=total / count, member_count=count)
        for sector, (total, count) in totals.items()
    ]

    return sorted(stats, key=lambda stat: stat.average_score, reverse=True)


def emit_rotation_signals(
    scored: Iterable[ScoreResult],
    params: Optional[SignalParams] = None
) -> list[str]:
    """
    Emit natural-language rotation signals.

    Order: sector leading, sector abandoned, strongest coin, weakest coin.
    Sector messages need at least two sectors. Never raises; no qualifying
    condition means an empty list.

    Args:
        scored: Score results for the whole universe, in universe order
        params: Signal thresholds

    Returns:
        List of signal messages
    """
    params = params or SignalParams()
    results = list(scored)
    messages: list[str] = []

    if not results:
        return messages

    sectors = aggregate_sectors(results)

    if len(sectors) >= 2:
        leader, runner_up, last = sectors[0], sectors[1], sectors[-1]

        gap = leader.average_score - runner_up.average_score
        if leader.average_score >= params.sector_leader_min and gap >= params.sector_gap_min:
            message = (
                f"{leader.sector.value} sector clearly leading rotation "
                f"(avg score {leader.average_score:.1f} vs "
                f"{runner_up.sector.value} {runner_up.average_score:.1f})."
            )
            messages.append(message)
            log_signal_emitted(signal_logger, "sector_leading", message,
                               {"sector": leader.sector.value, "gap": round(gap, 4)})

        if last.average_score <= params.sector_abandon_max:
            message = (
                f"{last.sector.value} sector being abandoned "
                f"(avg score {last.average_score:.1f})."
            )
            messages.append(message)
            log_signal_emitted(signal_logger, "sector_abandoned", message,
                               {"sector": last.sector.value})

    # max/min return the earliest coin on ties
    strongest = max(results, key=lambda result: result.rotation_score)
    weakest = min(results, key=lambda result: result.rotation_score)

    if strongest.rotation_score >= params.coin_acceleration_min:
        message = (
            f"{strongest.coin.name} ({strongest.coin.symbol}) accelerating hardest "
            f"(rotation score {strongest.rotation_score:.1f})."
        )
        messages.append(message)
        log_signal_emitted(signal_logger, "coin_acceleration", message,
                           {"coin_id": strongest.coin.id})

    if weakest.rotation_score <= params.coin_capitulation_max:
        message = (
            f"{weakest.coin.name} ({weakest.coin.symbol}) showing capitulation "
            f"(rotation score {weakest.rotation_score:.1f})."
        )
        messages.append(message)
        log_signal_emitted(signal_logger, "coin_capitulation", message,
                           {"coin_id": weakest.coin.id})

    return messages
