"""
Baseline agents for Minesweeper.

Both pick uniformly at random; the frontier agent narrows the choice to
cells bordering revealed numbers once there are any.
"""
from typing import Optional

import numpy as np

from minefield.levels import Level

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """Agent that reveals a uniformly random hidden cell."""

    def __init__(self, level: Level, seed: Optional[int] = None) -> None:
        """
        Initialize the random agent.

        Args:
            level: Level the agent will play.
            seed: Random seed for reproducibility.
        """
        super().__init__(level)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        if valid_actions is None:
            valid_actions = self.valid_actions_from_obs(observation)

        valid_indices = np.flatnonzero(valid_actions)
        if len(valid_indices) == 0:
            # Nothing left to reveal; any index is a no-op
            return 0
        return int(self.rng.choice(valid_indices))


# ============================================================================
# Frontier Agent
# ============================================================================

class FrontierAgent(RandomAgent):
    """
    Random agent restricted to the frontier.

    The frontier is the set of hidden cells adjacent to a revealed cell.
    On an untouched board every hidden cell is a candidate.
    """

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        if valid_actions is None:
            valid_actions = self.valid_actions_from_obs(observation)

        revealed = observation >= 0
        frontier = _dilate(revealed)
        candidates = valid_actions & frontier.ravel()
        if not candidates.any():
            candidates = valid_actions
        return super().select_action(observation, candidates)


def _dilate(grid: np.ndarray) -> np.ndarray:
    """Grow a bool grid by one cell in all 8 directions."""
    rows, cols = grid.shape
    padded = np.pad(grid, 1)
    grown = np.zeros_like(grid)
    for delta_row in range(3):
        for delta_col in range(3):
            grown |= padded[delta_row:delta_row + rows, delta_col:delta_col + cols]
    return grown
