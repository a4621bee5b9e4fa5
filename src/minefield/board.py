"""
Board module for Minesweeper.

Holds the immutable board (mines and adjacency counts) and the
generator that places mines at random and labels every safe cell.
"""
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Sequence

import numpy as np

from .geometry import Cell, Dims, all_cells, check_cell, neighbors


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Stored in place of an adjacency count for cells holding a mine.
MINE = -1

MINE_CHAR = "*"
SAFE_CHAR = "."


# ============================================================================
# Board Data Class
# ============================================================================

@dataclass(frozen=True, eq=False)
class Board:
    """
    Immutable Minesweeper board.

    Attributes:
        cells: int8 array of shape (rows, cols). MINE marks a mine,
            0-8 is the number of adjacent mines of a safe cell.
    """

    cells: np.ndarray
    _mines: FrozenSet[Cell] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Freeze the grid and index the mines."""
        cells = self.cells.view()
        cells.flags.writeable = False
        object.__setattr__(self, "cells", cells)
        mines = frozenset(
            (int(row), int(col)) for row, col in np.argwhere(self.cells == MINE)
        )
        object.__setattr__(self, "_mines", mines)

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def from_mines(cls, dims: Dims, mines: Iterable[Cell]) -> "Board":
        """
        Build a labelled board from a known set of mine positions.

        Args:
            dims: Board dimensions as (rows, cols).
            mines: Mine positions; duplicates are ignored.

        Returns:
            Board with every safe cell labelled.
        """
        mine_set = {check_cell(dims, mine) for mine in mines}
        return cls(_label(dims, mine_set))

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """
        Build a board from a text layout, one string per row.

        ``*`` marks a mine and ``.`` a safe cell, for example::

            Board.from_rows(["*..", "...", "..."])
        """
        if not rows or not rows[0]:
            raise ValueError("Layout must have at least one row and column")
        width = len(rows[0])
        mines = []
        for row, line in enumerate(rows):
            if len(line) != width:
                raise ValueError(f"Row {row} has {len(line)} cells, expected {width}")
            for col, char in enumerate(line):
                if char == MINE_CHAR:
                    mines.append((row, col))
                elif char != SAFE_CHAR:
                    raise ValueError(f"Unexpected character {char!r} in layout")
        return cls.from_mines((len(rows), width), mines)

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def dims(self) -> Dims:
        """Board dimensions as (rows, cols)."""
        rows, cols = self.cells.shape
        return int(rows), int(cols)

    @property
    def mines(self) -> FrozenSet[Cell]:
        """Positions of every mine."""
        return self._mines

    @property
    def mine_count(self) -> int:
        """Number of mines on the board."""
        return len(self._mines)

    def value(self, cell: Cell) -> int:
        """Get the stored value of a cell (MINE or 0-8)."""
        return int(self.cells[cell])

    def is_mine(self, cell: Cell) -> bool:
        """Check if a cell holds a mine."""
        return cell in self._mines

    def __str__(self) -> str:
        lines = []
        for row in self.cells:
            lines.append(
                "".join(MINE_CHAR if val == MINE else str(val) for val in row)
            )
        return "\n".join(lines)


# ============================================================================
# Generation
# ============================================================================

def generate(
    dims: Dims,
    mine_count: int,
    rng: Optional[np.random.Generator] = None,
) -> Board:
    """
    Generate a random board.

    Mines are placed by rejection sampling: a uniformly random cell is
    drawn until ``mine_count`` distinct cells have been picked, and draws
    landing on an existing mine are discarded.

    Args:
        dims: Board dimensions as (rows, cols).
        mine_count: Number of mines to place.
        rng: Random generator (default: a fresh unseeded one).

    Returns:
        Labelled board.

    Raises:
        ValueError: If the mine count does not leave a safe cell.
    """
    rows, cols = dims
    if rows < 1 or cols < 1:
        raise ValueError("Board dimensions must be positive")
    if mine_count < 0:
        raise ValueError("Number of mines cannot be negative")
    if mine_count >= rows * cols:
        raise ValueError(f"Too many mines (max {rows * cols - 1})")

    rng = rng if rng is not None else np.random.default_rng()
    mines = set()
    draws = 0
    while len(mines) < mine_count:
        draws += 1
        cell = (int(rng.integers(rows)), int(rng.integers(cols)))
        if cell in mines:
            continue
        mines.add(cell)

    logger.debug(
        "Placed %d mines on %dx%d board in %d draws", mine_count, rows, cols, draws
    )
    return Board(_label(dims, mines))


def _label(dims: Dims, mines: Iterable[Cell]) -> np.ndarray:
    """Place mines on a zeroed grid and count them into their neighbors."""
    grid = np.zeros(dims, dtype=np.int8)
    mine_list: List[Cell] = list(mines)
    for mine in mine_list:
        grid[mine] = MINE
    for mine in mine_list:
        for neighbor in neighbors(dims, mine):
            if grid[neighbor] != MINE:
                grid[neighbor] += 1
    return grid


def count_adjacent_mines(board: Board, cell: Cell) -> int:
    """Count mines around a cell directly from the mine positions."""
    return sum(1 for neighbor in neighbors(board.dims, cell) if board.is_mine(neighbor))


def is_consistent(board: Board) -> bool:
    """Check every safe cell's stored count against its true mine count."""
    return all(
        board.value(cell) == count_adjacent_mines(board, cell)
        for cell in all_cells(board.dims)
        if not board.is_mine(cell)
    )
