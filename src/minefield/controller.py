"""
Action surface for the view layer.

Game owns the current session and turns player actions into session
transitions. Every action returns the full updated snapshot. When a
game is won, the elapsed time is offered to the ScoreKeeper.
"""
import functools
import logging
from dataclasses import replace
from typing import Callable, Optional, TypeVar, Union

import numpy as np

from . import session as rules
from .clock import Clock, SystemClock
from .levels import INTERMEDIATE, Level, get_level
from .scores import MemoryScoreStore, ScoreKeeper, ScoreStore, elapsed
from .session import GamePhase, GameSession


logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


def _non_reentrant(method: F) -> F:
    """Reject calls made while another action is still running."""

    @functools.wraps(method)
    def wrapper(self: "Game", *args, **kwargs):
        if self._busy:
            raise RuntimeError(f"Game.{method.__name__} called re-entrantly")
        self._busy = True
        try:
            return method(self, *args, **kwargs)
        finally:
            self._busy = False

    return wrapper  # type: ignore[return-value]


# ============================================================================
# Game
# ============================================================================

class Game:
    """
    Single-player Minesweeper game driven by discrete actions.

    Example::

        game = Game(level="beginner")
        snapshot = game.reveal(3, 4)
        if snapshot.phase is GamePhase.DEAD:
            ...
    """

    def __init__(
        self,
        store: Optional[ScoreStore] = None,
        clock: Optional[Clock] = None,
        level: Union[Level, str] = INTERMEDIATE,
        rng: Optional[np.random.Generator] = None,
        session: Optional[GameSession] = None,
    ) -> None:
        """
        Initialize the game and deal the first board.

        Args:
            store: Where best times are kept (default: in memory).
            clock: Time source (default: wall clock).
            level: Level or preset name for the first game.
            rng: Random generator for mine placement.
            session: Existing session to continue instead of dealing
                a new board; ``level`` is then ignored.
        """
        self.scores = ScoreKeeper(store if store is not None else MemoryScoreStore())
        self.clock = clock or SystemClock()
        self.rng = rng
        self._busy = False
        self._session = session if session is not None else self._deal(get_level(level))

    def _deal(self, level: Level) -> GameSession:
        return rules.new_session(level, rng=self.rng, best_time=self.scores.best(level.name))

    @property
    def session(self) -> GameSession:
        """Current snapshot."""
        return self._session

    # ========================================================================
    # Actions
    # ========================================================================

    @_non_reentrant
    def new_game(self, level: Union[Level, str]) -> GameSession:
        """Start over on a fresh board for the given level."""
        self._session = self._deal(get_level(level))
        return self._session

    @_non_reentrant
    def tick(self) -> GameSession:
        self._session = rules.tick(self._session)
        return self._session

    @_non_reentrant
    def reveal(self, row: int, col: int) -> GameSession:
        return self._apply(rules.reveal(self._session, (row, col), self.clock.now()))

    @_non_reentrant
    def chord(self, row: int, col: int) -> GameSession:
        return self._apply(rules.chord(self._session, (row, col)))

    @_non_reentrant
    def flag(self, row: int, col: int) -> GameSession:
        self._session = rules.flag(self._session, (row, col), self.clock.now())
        return self._session

    @_non_reentrant
    def unflag(self, row: int, col: int) -> GameSession:
        self._session = rules.unflag(self._session, (row, col))
        return self._session

    @_non_reentrant
    def reset(self) -> GameSession:
        """Deal a fresh board for the selected level, in any phase."""
        self._session = self._deal(self._session.selected_level)
        return self._session

    @_non_reentrant
    def select_level(self, level: Union[Level, str]) -> GameSession:
        """Choose the level used by the next reset."""
        self._session = rules.select_level(self._session, level)
        return self._session

    def can_chord(self, row: int, col: int) -> bool:
        return self._session.can_chord((row, col))

    # ========================================================================
    # Scoring
    # ========================================================================

    def _apply(self, updated: GameSession) -> GameSession:
        """Adopt a new snapshot, recording the time on a fresh win."""
        won = (
            updated.phase is GamePhase.VICTORIOUS
            and self._session.phase is not GamePhase.VICTORIOUS
        )
        if won:
            seconds = elapsed(updated.start_time, self.clock.now())
            best = self.scores.record_if_best(updated.level.name, seconds)
            logger.info("Won %s in %ds (best %s)", updated.level.name, seconds, best)
            updated = replace(updated, best_time=best)
        self._session = updated
        return self._session

    def elapsed(self) -> int:
        """Seconds since the game started, 0 while pending."""
        if self._session.start_time is None:
            return 0
        return elapsed(self._session.start_time, self.clock.now())
