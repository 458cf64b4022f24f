#!/usr/bin/env python3
"""Run the rotation dashboard in the terminal.

Polls the market-data provider on the configured interval, re-renders the
dashboard after every applied refresh, and keeps the previous dashboard on
screen when a refresh fails.

Usage:
    python scripts/run_dashboard.py            # poll until Ctrl+C
    python scripts/run_dashboard.py --once     # single refresh, then exit
    python scripts/run_dashboard.py --json     # JSON output
    python scripts/run_dashboard.py --toggle solana   # show/hide a coin, then run
"""

import argparse
import sys
import time
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rotation_map.delivery.console import ConsoleRenderer
from rotation_map.engine import RotationMapEngine
from rotation_map.logging.config import configure_logging
from rotation_map.persistence.preference_store import PreferenceStore, toggle_visibility
from rotation_map.provider.coingecko import CoinGeckoProvider
from rotation_map.state.refresh import RefreshCoordinator, RefreshScheduler


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Crypto rotation map dashboard")
    ap.add_argument("--once", action="store_true", help="single refresh, then exit")
    ap.add_argument("--json", action="store_true", help="emit JSON instead of text cards")
    ap.add_argument("--toggle", metavar="COIN_ID", default=None,
                    help="show/hide a coin and save the selection before running")
    ap.add_argument("--config-dir", default=str(project_root / "config"),
                    help="directory holding settings.yaml and coins.yaml")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    """Wire provider, engine, scheduler and renderer."""
    args = parse_args(argv)
    overrides = {"render": {"format": "json"}} if args.json else None

    configure_logging(level="WARNING")

    engine = RotationMapEngine(config_dir=args.config_dir, overrides=overrides)
    config = engine.config

    store = PreferenceStore(config.preferences.path)
    visible_ids = store.load(engine.universe)

    if args.toggle:
        if args.toggle not in engine.coin_ids:
            print(f"Unknown coin id: {args.toggle}", file=sys.stderr)
            return 2
        visible_ids = toggle_visibility(visible_ids, args.toggle, engine.universe)
        store.save(visible_ids, engine.universe)

    renderer = ConsoleRenderer(config.render)
    coordinator = RefreshCoordinator(
        engine,
        CoinGeckoProvider(config.provider),
        on_snapshot=lambda snapshot: renderer.write(snapshot, visible_ids),
    )

    if args.once:
        snapshot = coordinator.run_once()
        if snapshot is None:
            print("Market data unavailable, try again later.", file=sys.stderr)
            return 1
        return 0

    scheduler = RefreshScheduler(coordinator, config.refresh.interval_seconds)
    scheduler.start()

    try:
        while scheduler.is_running:
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        scheduler.stop(timeout=5)

    return 0


if __name__ == "__main__":
    sys.exit(main())
