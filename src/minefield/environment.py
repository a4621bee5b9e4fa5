"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface over the game engine.
"""
from typing import Any, Dict, Optional, SupportsFloat, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .clock import ManualClock
from .controller import Game
from .levels import BEGINNER, Level, get_level
from .session import OBS_FLAGGED, OBS_HIDDEN, OBS_MINE, GamePhase


# ============================================================================
# Rewards
# ============================================================================

REWARD_SAFE = 1.0
REWARD_WIN = 10.0
REWARD_MINE = -10.0
REWARD_INVALID = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size rows * cols.
        Action i reveals the cell at (i // cols, i % cols).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        level: Union[Level, str] = BEGINNER,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            level: Level or preset name (default: beginner).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.level = get_level(level)
        self.render_mode = render_mode
        self.clock = ManualClock()
        self.game: Optional[Game] = None

        self.observation_space = spaces.Box(
            low=OBS_FLAGGED,
            high=OBS_MINE,
            shape=self.level.dims,
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.level.cell_count)

        self._steps = 0
        self._total_safe_cells = self.level.cell_count - self.level.mine_count

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game = Game(clock=self.clock, level=self.level, rng=self.np_random)
        self._steps = 0
        return self.game.session.to_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal one cell.

        Args:
            action: Cell index to reveal (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self.game is None:
            raise RuntimeError("Call reset() before step()")

        row, col = self._action_to_position(action)
        self._steps += 1
        self.clock.advance(1.0)

        reward = self._calculate_reward(row, col)
        session = self.game.session
        terminated = session.is_over

        return session.to_observation(), reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.level.cols, int(action) % self.level.cols

    def _calculate_reward(self, row: int, col: int) -> float:
        """Perform the reveal and score the result."""
        if self.game.session.is_over or self.game.session.is_revealed((row, col)):
            return REWARD_INVALID

        session = self.game.reveal(row, col)
        if session.phase is GamePhase.VICTORIOUS:
            return REWARD_WIN
        if session.phase is GamePhase.DEAD:
            return REWARD_MINE
        return REWARD_SAFE

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        session = self.game.session
        return {
            "steps": self._steps,
            "revealed": session.revealed_count,
            "total_safe": self._total_safe_cells,
            "game_state": session.phase.name,
            "valid_actions": int(np.count_nonzero(self.get_action_mask())),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.game is None:
            return None
        if self.render_mode == "ansi":
            return render_ansi(self.game.session.to_observation())
        if self.render_mode == "human":
            print(render_ansi(self.game.session.to_observation()))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = cell still hidden.
        """
        return ~self.game.session.mask.ravel()


def render_ansi(obs: np.ndarray) -> str:
    """Render an observation as text, one line per row."""
    lines = []
    for row in obs:
        cells = []
        for val in row:
            if val == OBS_HIDDEN:
                cells.append(".")
            elif val == OBS_FLAGGED:
                cells.append("F")
            elif val == OBS_MINE:
                cells.append("*")
            elif val == 0:
                cells.append(" ")
            else:
                cells.append(str(val))
        lines.append(" ".join(cells))
    return "\n".join(lines)


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    level: Union[Level, str] = BEGINNER,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel rollouts.

    Args:
        n_envs: Number of parallel environments.
        level: Level or preset name.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(level=level)

    return gym.vector.SyncVectorEnv([make_env for _ in range(n_envs)])
