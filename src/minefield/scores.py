"""
Best-time tracking.

The ScoreKeeper keeps one best (lowest) time per level in a key-value
store. Storage problems never interrupt a game: they are logged and
treated as "no best time known".
"""
import json
import logging
import math
from pathlib import Path
from typing import Dict, Optional, Protocol, Tuple, Union


logger = logging.getLogger(__name__)

# Failures a store may raise; none of them may interrupt a game
STORE_ERRORS = (OSError, ValueError, TypeError)


def elapsed(start: float, now: float) -> int:
    """Whole seconds between two clock readings, never negative."""
    return max(0, int(math.floor(now - start)))


# ============================================================================
# Stores
# ============================================================================

class ScoreStore(Protocol):
    """Key-value storage for best times, keyed by level name."""

    def get(self, level_name: str) -> Optional[int]:
        ...

    def set(self, level_name: str, seconds: int) -> None:
        ...

    def delete(self, level_name: str) -> None:
        ...


class MemoryScoreStore:
    """Store kept in a dict for the lifetime of the process."""

    def __init__(self, initial: Optional[Dict[str, int]] = None) -> None:
        self._scores: Dict[str, int] = dict(initial or {})

    def get(self, level_name: str) -> Optional[int]:
        return self._scores.get(level_name)

    def set(self, level_name: str, seconds: int) -> None:
        self._scores[level_name] = int(seconds)

    def delete(self, level_name: str) -> None:
        self._scores.pop(level_name, None)


class JsonScoreStore:
    """
    Store backed by a single JSON object file.

    The file is read on every access so that several processes sharing
    it see each other's records. A missing file is an empty store.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, int]:
        if not self.path.exists():
            return {}
        with open(self.path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _save(self, data: Dict[str, int]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2, sort_keys=True)

    def get(self, level_name: str) -> Optional[int]:
        value = self._load().get(level_name)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Best time for {level_name} is not a number: {value!r}")
        return int(value)

    def set(self, level_name: str, seconds: int) -> None:
        data = self._load()
        data[level_name] = int(seconds)
        self._save(data)

    def delete(self, level_name: str) -> None:
        data = self._load()
        if data.pop(level_name, None) is not None:
            self._save(data)


# ============================================================================
# Score Keeper
# ============================================================================

class ScoreKeeper:
    """Reads and updates best times through a ScoreStore."""

    def __init__(self, store: ScoreStore) -> None:
        self.store = store

    def _read(self, level_name: str) -> Tuple[bool, Optional[int]]:
        """Read the best time, reporting whether the read succeeded."""
        try:
            return True, self.store.get(level_name)
        except STORE_ERRORS as error:
            logger.warning("Could not read best time for %s: %s", level_name, error)
            return False, None

    def best(self, level_name: str) -> Optional[int]:
        """Get the best time for a level, or None if unknown."""
        return self._read(level_name)[1]

    def record_if_best(self, level_name: str, seconds: int) -> Optional[int]:
        """
        Store a time if it beats the current best.

        Args:
            level_name: Level the game was played on.
            seconds: Time taken to win.

        Returns:
            The best time after the update. A stored value is only ever
            replaced by a strictly lower one. None if the store failed
            and nothing is known. Nothing is written when the current
            best could not be read.
        """
        readable, current = self._read(level_name)
        if not readable:
            return None
        if current is not None and seconds >= current:
            return current
        try:
            self.store.set(level_name, seconds)
        except STORE_ERRORS as error:
            logger.warning("Could not save best time for %s: %s", level_name, error)
            return current
        logger.info("New best time for %s: %ds", level_name, seconds)
        return seconds

    def clear(self, level_name: str) -> None:
        """Forget the best time for a level."""
        try:
            self.store.delete(level_name)
        except STORE_ERRORS as error:
            logger.warning("Could not clear best time for %s: %s", level_name, error)
