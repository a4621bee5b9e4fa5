"""
Game session and state machine.

A GameSession is an immutable snapshot of one game: the board, which
cells are revealed and flagged, and the game phase. The transition
functions in this module take a session and return a new one, leaving
the input untouched. Actions that do not apply to the current phase or
cell are no-ops and return the session they were given.

Phases::

    PENDING --start/reveal/flag--> ALIVE --reveal/chord--> DEAD
                                         \\--reveal/chord--> VICTORIOUS
"""
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Set, Union

import numpy as np

from .board import MINE, Board, generate
from .geometry import Cell, Dims, check_cell
from .levels import Level, get_level
from .region import can_chord, chord_targets, reveal_multiple, reveal_region


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Possible phases of a game."""

    PENDING = "pending"
    ALIVE = "alive"
    DEAD = "dead"
    VICTORIOUS = "victorious"

    @property
    def is_terminal(self) -> bool:
        """Check if no further moves are accepted."""
        return self in (GamePhase.DEAD, GamePhase.VICTORIOUS)


PLAYABLE = (GamePhase.PENDING, GamePhase.ALIVE)

# Observation values besides the 0-8 counts
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9


# ============================================================================
# Session Data Class
# ============================================================================

@dataclass(frozen=True, eq=False)
class GameSession:
    """
    Snapshot of a single game.

    Attributes:
        level: Level the board was generated for.
        board: Mines and adjacency counts.
        mask: Bool array, True where a cell is revealed.
        flags: Bool array, True where a cell is flagged.
        phase: Current game phase.
        start_time: Clock time the game started, None while pending.
        tick_count: Clock ticks received while alive.
        best_time: Best recorded time for the level, if any.
        selected_level: Level the next reset will use.
    """

    level: Level
    board: Board
    mask: np.ndarray
    flags: np.ndarray
    phase: GamePhase = GamePhase.PENDING
    start_time: Optional[float] = None
    tick_count: int = 0
    best_time: Optional[int] = None
    selected_level: Optional[Level] = None

    def __post_init__(self) -> None:
        """Check the grids line up and freeze them."""
        if self.board.dims != self.level.dims:
            raise ValueError(
                f"Board is {self.board.dims}, level {self.level.name!r} "
                f"expects {self.level.dims}"
            )
        for name in ("mask", "flags"):
            grid = getattr(self, name)
            if grid.shape != self.level.dims:
                raise ValueError("Mask and flags must match the board shape")
            frozen = grid.view()
            frozen.flags.writeable = False
            object.__setattr__(self, name, frozen)
        if self.selected_level is None:
            object.__setattr__(self, "selected_level", self.level)

    @classmethod
    def from_board(
        cls, board: Board, name: str = "custom", **kwargs
    ) -> "GameSession":
        """Start a pending session on an existing board."""
        rows, cols = board.dims
        level = Level(name, rows, cols, board.mine_count)
        return cls(
            level=level,
            board=board,
            mask=np.zeros(board.dims, dtype=bool),
            flags=np.zeros(board.dims, dtype=bool),
            **kwargs,
        )

    # ========================================================================
    # Derived State
    # ========================================================================

    @property
    def dims(self) -> Dims:
        """Board dimensions as (rows, cols)."""
        return self.board.dims

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells."""
        return int(np.count_nonzero(self.mask))

    @property
    def hidden_count(self) -> int:
        """Number of hidden cells, flagged or not."""
        return int(self.mask.size) - self.revealed_count

    @property
    def flag_count(self) -> int:
        """Number of flagged cells."""
        return int(np.count_nonzero(self.flags))

    @property
    def remaining_mines(self) -> int:
        """Mines left to flag; negative when over-flagged."""
        return self.board.mine_count - self.flag_count

    @property
    def is_over(self) -> bool:
        """Check if the game has ended."""
        return self.phase.is_terminal

    def is_revealed(self, cell: Cell) -> bool:
        return bool(self.mask[check_cell(self.dims, cell)])

    def is_flagged(self, cell: Cell) -> bool:
        return bool(self.flags[check_cell(self.dims, cell)])

    def value(self, cell: Cell) -> int:
        return self.board.value(check_cell(self.dims, cell))

    def can_chord(self, cell: Cell) -> bool:
        """Check if a chord on a revealed cell would reveal anything."""
        cell = check_cell(self.dims, cell)
        if not self.mask[cell]:
            return False
        return can_chord(self.board, self.mask, self.flags, cell)

    def to_observation(self) -> np.ndarray:
        """
        Get the player's view of the board as an array.

        Returns:
            int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine, or any unflagged mine once the
                    game is lost
        """
        obs = np.full(self.dims, OBS_HIDDEN, dtype=np.int8)
        obs[self.flags] = OBS_FLAGGED
        shown = np.where(self.board.cells == MINE, OBS_MINE, self.board.cells)
        obs[self.mask] = shown[self.mask]
        if self.phase is GamePhase.DEAD:
            obs[(self.board.cells == MINE) & ~self.flags] = OBS_MINE
        return obs


# ============================================================================
# Construction
# ============================================================================

def new_session(
    level: Union[Level, str],
    rng: Optional[np.random.Generator] = None,
    best_time: Optional[int] = None,
) -> GameSession:
    """
    Generate a fresh board and wrap it in a pending session.

    Args:
        level: Level or preset name.
        rng: Random generator for mine placement.
        best_time: Best recorded time for the level, if known.
    """
    level = get_level(level)
    board = generate(level.dims, level.mine_count, rng)
    logger.debug("New %s game (%dx%d, %d mines)", level.name, level.rows, level.cols, level.mine_count)
    return GameSession(
        level=level,
        board=board,
        mask=np.zeros(level.dims, dtype=bool),
        flags=np.zeros(level.dims, dtype=bool),
        best_time=best_time,
    )


# ============================================================================
# Outcome
# ============================================================================

def evaluate_outcome(
    board: Board, mask: np.ndarray, outcome_cells: Iterable[Cell]
) -> GamePhase:
    """
    Derive the phase after cells have been revealed.

    Only the cells targeted by the action decide a loss; earlier reveals
    and flags never do. The game is won once the hidden cells are
    exactly as many as the mines.
    """
    if any(board.is_mine(cell) for cell in outcome_cells):
        return GamePhase.DEAD
    hidden = int(mask.size) - int(np.count_nonzero(mask))
    if hidden == board.mine_count:
        return GamePhase.VICTORIOUS
    return GamePhase.ALIVE


def flag_remaining(flags: np.ndarray, board: Board) -> np.ndarray:
    """Flag every mine."""
    flagged = flags.copy()
    flagged[board.cells == MINE] = True
    return flagged


def _sweep(
    session: GameSession, region: Set[Cell], outcome_cells: Iterable[Cell]
) -> GameSession:
    """Reveal a region, clear its flags and update the phase."""
    mask = session.mask.copy()
    flags = session.flags.copy()
    for cell in region:
        mask[cell] = True
        flags[cell] = False

    phase = evaluate_outcome(session.board, mask, outcome_cells)
    if phase is GamePhase.VICTORIOUS:
        flags = flag_remaining(flags, session.board)
    if phase is not session.phase:
        logger.info("Game %s -> %s", session.phase.value, phase.value)
    return replace(session, mask=mask, flags=flags, phase=phase)


# ============================================================================
# Transitions
# ============================================================================

def start(session: GameSession, now: float) -> GameSession:
    """Move a pending game to alive and record the start time."""
    if session.phase is not GamePhase.PENDING:
        return session
    logger.info("Game started at %.3f", now)
    return replace(session, phase=GamePhase.ALIVE, start_time=now)


def reveal(session: GameSession, cell: Cell, now: float) -> GameSession:
    """
    Reveal a cell, flood-filling zero regions.

    Starts a pending game. Revealing an already revealed cell changes
    nothing else.

    Raises:
        ValueError: If the cell is outside the board.
    """
    cell = check_cell(session.dims, cell)
    if session.phase not in PLAYABLE:
        return session
    session = start(session, now)
    if session.mask[cell]:
        return session

    region = reveal_region(session.board, cell)
    logger.debug("Reveal %s uncovers %d cells", cell, len(region))
    return _sweep(session, region, [cell])


def chord(session: GameSession, cell: Cell) -> GameSession:
    """
    Reveal every hidden, unflagged neighbor of a satisfied number.

    Only applies while alive, on a revealed cell whose flagged
    neighbors match its count. A mine among the chorded neighbors ends
    the game.

    Raises:
        ValueError: If the cell is outside the board.
    """
    cell = check_cell(session.dims, cell)
    if session.phase is not GamePhase.ALIVE:
        return session
    if not session.can_chord(cell):
        return session

    targets = chord_targets(session.board, session.mask, session.flags, cell)
    region = reveal_multiple(session.board, targets)
    logger.debug("Chord %s on %d neighbors uncovers %d cells", cell, len(targets), len(region))
    return _sweep(session, region, targets)


def flag(session: GameSession, cell: Cell, now: float) -> GameSession:
    """Flag a hidden cell, starting a pending game."""
    cell = check_cell(session.dims, cell)
    if session.phase not in PLAYABLE:
        return session
    session = start(session, now)
    if session.mask[cell] or session.flags[cell]:
        return session
    flags = session.flags.copy()
    flags[cell] = True
    return replace(session, flags=flags)


def unflag(session: GameSession, cell: Cell) -> GameSession:
    """Clear the flag on a hidden cell."""
    cell = check_cell(session.dims, cell)
    if session.phase not in PLAYABLE:
        return session
    if session.mask[cell] or not session.flags[cell]:
        return session
    flags = session.flags.copy()
    flags[cell] = False
    return replace(session, flags=flags)


def tick(session: GameSession) -> GameSession:
    """Count a clock tick; ignored unless the game is alive."""
    if session.phase is not GamePhase.ALIVE:
        return session
    return replace(session, tick_count=session.tick_count + 1)


def select_level(session: GameSession, level: Union[Level, str]) -> GameSession:
    """Choose the level for the next reset without touching the board."""
    return replace(session, selected_level=get_level(level))


def reset(
    session: GameSession,
    rng: Optional[np.random.Generator] = None,
) -> GameSession:
    """
    Replace the game with a fresh board for the selected level.

    The best time carries over only when the level is unchanged.
    """
    level = session.selected_level
    best_time = session.best_time if level == session.level else None
    return new_session(level, rng=rng, best_time=best_time)
