"""
Grid geometry for the Minesweeper board.

Cells are ``(row, col)`` tuples and board dimensions are ``(rows, cols)``
tuples. Everything here is a pure function of its arguments.
"""
from typing import Iterator, Set, Tuple

Cell = Tuple[int, int]
Dims = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

# The 8 compass directions, as (delta_row, delta_col).
DIRECTIONS: Tuple[Cell, ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


# ============================================================================
# Bounds
# ============================================================================

def in_bounds(dims: Dims, cell: Cell) -> bool:
    """Check if a cell lies on a board of the given dimensions."""
    rows, cols = dims
    row, col = cell
    return 0 <= row < rows and 0 <= col < cols


def check_cell(dims: Dims, cell: Cell) -> Cell:
    """
    Validate a coordinate coming from outside the engine.

    Args:
        dims: Board dimensions as (rows, cols).
        cell: Coordinate to validate.

    Returns:
        The cell as a tuple of ints.

    Raises:
        ValueError: If the cell is outside the board.
    """
    row, col = int(cell[0]), int(cell[1])
    if not in_bounds(dims, (row, col)):
        raise ValueError(
            f"Cell ({row}, {col}) is outside the {dims[0]}x{dims[1]} board"
        )
    return row, col


# ============================================================================
# Enumeration
# ============================================================================

def neighbors(dims: Dims, cell: Cell) -> Set[Cell]:
    """
    Get the neighbors of a cell, clipped to the board.

    Args:
        dims: Board dimensions as (rows, cols).
        cell: Center cell.

    Returns:
        Set of up to 8 neighboring cells. Edge and corner cells
        have fewer.
    """
    row, col = cell
    result = set()
    for delta_row, delta_col in DIRECTIONS:
        candidate = (row + delta_row, col + delta_col)
        if in_bounds(dims, candidate):
            result.add(candidate)
    return result


def all_cells(dims: Dims) -> Iterator[Cell]:
    """Iterate over every cell in row-major order."""
    rows, cols = dims
    for row in range(rows):
        for col in range(cols):
            yield row, col
