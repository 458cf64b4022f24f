"""Visible-coin preference persistence."""

import json
import threading
from pathlib import Path
from typing import Iterable, Sequence

import structlog

from ..data.models import CoinDefinition
from ..errors import PersistenceError

STORAGE_KEY = "visible_ids"


def filter_known_ids(ids: Iterable[str], universe: Sequence[CoinDefinition]) -> list[str]:
    """Drop unknown and duplicate ids, returning the rest in universe order."""
    wanted = {coin_id for coin_id in ids if isinstance(coin_id, str)}
    return [coin.id for coin in universe if coin.id in wanted]


def toggle_visibility(current: Iterable[str], coin_id: str,
                      universe: Sequence[CoinDefinition]) -> list[str]:
    """
    Flip one coin's visibility.

    Args:
        current: Currently visible ids
        coin_id: Coin to show or hide
        universe: Configured coins

    Returns:
        New visible ids in universe order (may be empty)
    """
    visible = set(filter_known_ids(current, universe))

    if coin_id in visible:
        visible.discard(coin_id)
    else:
        visible.add(coin_id)

    return filter_known_ids(visible, universe)


class PreferenceStore:
    """JSON-file store for the set of visible coin ids."""

    def __init__(self, path: str):
        self.path = Path(path).expanduser()
        self.logger = structlog.get_logger("preferences.store")
        self._lock = threading.Lock()

    def load(self, universe: Sequence[CoinDefinition]) -> list[str]:
        """
        Load visible ids for the given universe.

        Unknown ids are dropped. A missing or unreadable file, or a stored set
        with no known ids, yields the full universe.
        """
        default = [coin.id for coin in universe]

        with self._lock:
            if not self.path.exists():
                return default

            try:
                with open(self.path, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                # ValueError covers JSONDecodeError and UnicodeDecodeError
                self.logger.warning(
                    "Unreadable preference file, using all coins",
                    path=str(self.path),
                    error=str(e)
                )
                return default

        raw_ids = data.get(STORAGE_KEY) if isinstance(data, dict) else data
        if not isinstance(raw_ids, list):
            self.logger.warning("Preference file has no id list", path=str(self.path))
            return default

        visible = filter_known_ids(raw_ids, universe)
        if not visible:
            return default

        dropped = len({i for i in raw_ids if isinstance(i, str)}) - len(visible)
        if dropped > 0:
            self.logger.info("Dropped unknown coin ids from preferences", dropped=dropped)

        return visible

    def save(self, ids: Iterable[str], universe: Sequence[CoinDefinition]) -> list[str]:
        """
        Persist visible ids.

        An empty selection is never stored; the file keeps its previous
        content so the next load restores a non-empty set.

        Returns:
            The ids that were written (empty if nothing was written)

        Raises:
            PersistenceError: If the file cannot be written
        """
        visible = filter_known_ids(ids, universe)
        if not visible:
            self.logger.info("Not persisting empty coin selection", path=str(self.path))
            return []

        with self._lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump({STORAGE_KEY: visible}, f)
                tmp_path.replace(self.path)
            except OSError as e:
                self.logger.error(
                    "Failed to write preference file",
                    path=str(self.path),
                    error=str(e)
                )
                raise PersistenceError(
                    f"Failed to write preferences: {e}",
                    operation="save",
                    target=str(self.path)
                )

        self.logger.debug("Saved coin selection", path=str(self.path), visible_ids=visible)
        return visible

    def clear(self) -> None:
        """Remove the stored preference."""
        with self._lock:
            try:
                self.path.unlink(missing_ok=True)
            except OSError as e:
                raise PersistenceError(
                    f"Failed to clear preferences: {e}",
                    operation="clear",
                    target=str(self.path)
                )

