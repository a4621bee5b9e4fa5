"""
Region resolution.

Works out which cells a reveal uncovers: a single cell for a mine or a
numbered cell, or the whole connected zero region plus its numbered
border for a zero cell. Also decides when a chord ("spread-sweep") is
available on a revealed number.
"""
from typing import Iterable, Set

import numpy as np

from .board import Board
from .geometry import Cell, neighbors


# ============================================================================
# Reveal Regions
# ============================================================================

def reveal_region(board: Board, origin: Cell) -> Set[Cell]:
    """
    Get the cells uncovered by revealing ``origin``.

    A mine or a nonzero count yields only the origin. A zero cell is
    flood-filled: every neighbor is included, and the fill continues
    through neighbors that are zero themselves. Numbered cells form the
    border of the region and are never expanded.

    Args:
        board: Board to resolve against.
        origin: Cell being revealed.

    Returns:
        Set of cells to reveal, always containing ``origin``.
    """
    if board.value(origin) != 0:
        return {origin}

    region = {origin}
    worklist = [origin]
    while worklist:
        current = worklist.pop()
        for neighbor in neighbors(board.dims, current):
            if neighbor in region:
                continue
            region.add(neighbor)
            if board.value(neighbor) == 0:
                worklist.append(neighbor)
    return region


def reveal_multiple(board: Board, cells: Iterable[Cell]) -> Set[Cell]:
    """Union of the reveal regions of several cells."""
    region: Set[Cell] = set()
    for cell in cells:
        if cell not in region:
            region |= reveal_region(board, cell)
    return region


# ============================================================================
# Chording
# ============================================================================

def chord_targets(
    board: Board, mask: np.ndarray, flags: np.ndarray, cell: Cell
) -> Set[Cell]:
    """Get the hidden, unflagged neighbors of a cell."""
    return {
        neighbor
        for neighbor in neighbors(board.dims, cell)
        if not mask[neighbor] and not flags[neighbor]
    }


def can_chord(
    board: Board, mask: np.ndarray, flags: np.ndarray, cell: Cell
) -> bool:
    """
    Check if a chord on ``cell`` would reveal anything.

    True when the cell holds a positive count, exactly that many
    neighbors are flagged, and at least one neighbor is still hidden
    and unflagged.
    """
    value = board.value(cell)
    if value <= 0:
        return False
    flagged = sum(1 for neighbor in neighbors(board.dims, cell) if flags[neighbor])
    if flagged != value:
        return False
    return bool(chord_targets(board, mask, flags, cell))
