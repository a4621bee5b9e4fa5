"""
Unit tests for the baseline agents.
"""
import numpy as np
from agents import FrontierAgent, RandomAgent
from minefield.levels import Level

LEVEL = Level("tiny", 3, 3, 1)


class TestRandomAgent:
    """Test the uniform random agent."""

    def test_picks_only_hidden_cells(self) -> None:
        """Revealed and flagged cells are never chosen."""
        obs = np.array([[1, -2, -1], [0, 0, 1], [0, 0, 1]], dtype=np.int8)
        agent = RandomAgent(LEVEL, seed=0)
        for _ in range(20):
            assert agent.select_action(obs) == 2

    def test_respects_given_mask(self) -> None:
        """An explicit mask overrides the observation."""
        obs = np.full((3, 3), -1, dtype=np.int8)
        valid = np.zeros(9, dtype=bool)
        valid[7] = True
        assert RandomAgent(LEVEL, seed=1).select_action(obs, valid) == 7

    def test_no_valid_action(self) -> None:
        """A fully revealed board falls back to action 0."""
        obs = np.zeros((3, 3), dtype=np.int8)
        assert RandomAgent(LEVEL).select_action(obs) == 0

    def test_position_conversion(self) -> None:
        """Flat indices map to (row, col)."""
        agent = RandomAgent(Level("wide", 2, 5, 1))
        assert agent.action_to_position(7) == (1, 2)
        assert agent.position_to_action(1, 2) == 7


class TestFrontierAgent:
    """Test the frontier agent."""

    def test_prefers_cells_next_to_revealed(self) -> None:
        """Only hidden neighbors of revealed cells are candidates."""
        obs = np.full((3, 3), -1, dtype=np.int8)
        obs[0, 0] = 1
        agent = FrontierAgent(LEVEL, seed=2)
        picks = {agent.action_to_position(agent.select_action(obs)) for _ in range(50)}
        assert picks <= {(0, 1), (1, 0), (1, 1)}

    def test_untouched_board_uses_all_cells(self) -> None:
        """With nothing revealed every hidden cell is a candidate."""
        obs = np.full((3, 3), -1, dtype=np.int8)
        agent = FrontierAgent(LEVEL, seed=3)
        picks = {agent.select_action(obs) for _ in range(200)}
        assert len(picks) > 1
