"""
Difficulty levels.

A level fixes the board dimensions and mine count for a game. The three
presets are not user-editable.
"""
from dataclasses import dataclass
from typing import Dict, Union

from .geometry import Dims


# ============================================================================
# Level Data Class
# ============================================================================

@dataclass(frozen=True)
class Level:
    """
    Named board configuration.

    Attributes:
        name: Level name, also the key best times are stored under.
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Total mines to place.
    """

    name: str
    rows: int
    cols: int
    mine_count: int

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.mine_count > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def dims(self) -> Dims:
        """Board dimensions as (rows, cols)."""
        return self.rows, self.cols

    @property
    def cell_count(self) -> int:
        """Total number of cells."""
        return self.rows * self.cols


# Preset difficulty levels
BEGINNER = Level("beginner", 8, 8, 10)
INTERMEDIATE = Level("intermediate", 16, 16, 40)
EXPERT = Level("expert", 16, 30, 99)

LEVELS: Dict[str, Level] = {
    level.name: level for level in (BEGINNER, INTERMEDIATE, EXPERT)
}


def get_level(level: Union[Level, str]) -> Level:
    """
    Resolve a level given either as a Level or a preset name.

    Raises:
        ValueError: If the name is not a known preset.
    """
    if isinstance(level, Level):
        return level
    try:
        return LEVELS[level]
    except KeyError:
        known = ", ".join(LEVELS)
        raise ValueError(f"Unknown level {level!r} (expected one of {known})") from None
