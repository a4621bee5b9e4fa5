"""
Unit tests for the Gymnasium environment.
"""
import numpy as np
import pytest
from minefield.environment import (
    REWARD_INVALID,
    MinesweeperEnv,
    make_vec_env,
    render_ansi,
)
from minefield.levels import Level


@pytest.fixture
def env() -> MinesweeperEnv:
    """Beginner environment."""
    return MinesweeperEnv(level="beginner", render_mode="ansi")


class TestSpaces:
    """Test observation and action spaces."""

    def test_spaces_match_level(self, env: MinesweeperEnv) -> None:
        """One action per cell, one observation value per cell."""
        assert env.action_space.n == 64
        assert env.observation_space.shape == (8, 8)

    def test_reset_observation_all_hidden(self, env: MinesweeperEnv) -> None:
        """A new episode shows only hidden cells."""
        obs, info = env.reset(seed=0)
        assert obs.shape == (8, 8)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert info["revealed"] == 0
        assert info["valid_actions"] == 64
        assert info["game_state"] == "PENDING"

    def test_observation_in_space(self, env: MinesweeperEnv) -> None:
        """Observations are valid members of the space."""
        obs, _ = env.reset(seed=1)
        obs, *_ = env.step(0)
        assert env.observation_space.contains(obs)


class TestStep:
    """Test stepping."""

    def test_step_before_reset_raises(self) -> None:
        """The board only exists after reset."""
        with pytest.raises(RuntimeError):
            MinesweeperEnv().step(0)

    def test_step_reveals_cell(self, env: MinesweeperEnv) -> None:
        """A step uncovers at least the chosen cell."""
        env.reset(seed=2)
        obs, reward, terminated, truncated, info = env.step(9)
        assert obs[1, 1] != -1
        assert info["steps"] == 1
        assert truncated is False
        assert reward in (1.0, 10.0, -10.0)

    def test_repeated_action_is_invalid(self, env: MinesweeperEnv) -> None:
        """Revealing a revealed cell is penalised."""
        env.reset(seed=3)
        env.step(0)
        _, reward, _, _, _ = env.step(0)
        assert reward == REWARD_INVALID

    def test_action_mask_tracks_hidden_cells(self, env: MinesweeperEnv) -> None:
        """Revealed cells drop out of the mask."""
        env.reset(seed=4)
        obs, *_ = env.step(0)
        mask = env.get_action_mask()
        assert mask.shape == (64,)
        assert np.array_equal(mask, (obs == -1).ravel() | (obs == -2).ravel())
        assert not mask[0]

    def test_seed_reproduces_board(self) -> None:
        """The same seed deals the same board."""
        first = MinesweeperEnv(level="beginner")
        second = MinesweeperEnv(level="beginner")
        first.reset(seed=11)
        second.reset(seed=11)
        assert first.game.session.board.mines == second.game.session.board.mines

    def test_episode_terminates(self) -> None:
        """Revealing every cell in order ends the game."""
        env = MinesweeperEnv(level=Level("small", 4, 4, 3))
        env.reset(seed=5)
        terminated = False
        for action in range(16):
            _, _, terminated, _, _ = env.step(action)
            if terminated:
                break
        assert terminated


class TestRender:
    """Test text rendering."""

    def test_render_ansi(self, env: MinesweeperEnv) -> None:
        """ANSI rendering gives one line per row."""
        env.reset(seed=6)
        text = env.render()
        assert len(text.splitlines()) == 8
        assert set(text.replace(" ", "").replace("\n", "")) == {"."}

    def test_render_symbols(self) -> None:
        """Each observation value has its own symbol."""
        obs = np.array([[-1, -2, 0], [3, 9, 8]], dtype=np.int8)
        assert render_ansi(obs) == ". F  \n3 * 8"


class TestVecEnv:
    """Test the vectorized factory."""

    def test_make_vec_env(self) -> None:
        """Several environments step together."""
        envs = make_vec_env(n_envs=2, level="beginner")
        obs, _ = envs.reset(seed=0)
        assert obs.shape == (2, 8, 8)
        envs.close()
