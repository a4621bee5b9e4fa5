"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, GameSession, Level, ManualClock, MemoryScoreStore


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def corner_mine_board() -> Board:
    """2x2 board with a single mine at (0, 0)."""
    return Board.from_rows(["*.", ".."])


@pytest.fixture
def open_board() -> Board:
    """3x3 board with a single mine at (2, 2); (0, 0) floods everything."""
    return Board.from_rows(["...", "...", "..*"])


@pytest.fixture
def chord_board() -> Board:
    """
    2x3 board with mines on the first two top cells.

    Counts::

        * * 1
        2 2 1
    """
    return Board.from_rows(["**.", "..."])


@pytest.fixture
def walled_board() -> Board:
    """
    3x5 board where a column of mines splits two zero regions.

    Counts::

        0 2 * 2 0
        0 3 * 3 0
        0 2 * 2 0
    """
    return Board.from_rows(["..*..", "..*..", "..*.."])


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def open_session(open_board: Board) -> GameSession:
    """Pending session on the open 3x3 board."""
    return GameSession.from_board(open_board)


@pytest.fixture
def chord_session(chord_board: Board) -> GameSession:
    """Pending session on the chord board."""
    return GameSession.from_board(chord_board)


# ============================================================================
# Collaborator Fixtures
# ============================================================================

@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at t=100."""
    return ManualClock(100.0)


@pytest.fixture
def store() -> MemoryScoreStore:
    """Empty in-memory score store."""
    return MemoryScoreStore()


@pytest.fixture
def tiny_level() -> Level:
    """3x3 level with one mine."""
    return Level("tiny", 3, 3, 1)
