"""
Base agent interface for Minesweeper players.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from minefield.levels import Level
from minefield.session import OBS_HIDDEN


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minesweeper agents.

    Subclasses choose which cell to reveal from the current observation.
    """

    def __init__(self, level: Level) -> None:
        """
        Initialize the agent.

        Args:
            level: Level the agent will play; fixes the board shape.
        """
        self.rows = level.rows
        self.cols = level.cols

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index (row * cols + col).
        """

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return action // self.cols, action % self.cols

    def position_to_action(self, row: int, col: int) -> int:
        """Convert (row, col) position to flat action index."""
        return row * self.cols + col

    def valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """Mask of hidden, unflagged cells, flattened."""
        return observation.ravel() == OBS_HIDDEN

    def reset(self) -> None:
        """Reset agent state for a new episode."""
