"""
Unit tests for the gymnasium environment and text rendering.
"""
import pytest
import numpy as np

from minesweeper import BoardConfig, MinesweeperEnv, render_text


@pytest.fixture
def env() -> MinesweeperEnv:
    """Easy environment reset with a fixed seed."""
    environment = MinesweeperEnv(render_mode="ansi")
    environment.reset(seed=0)
    return environment


def safe_action(env: MinesweeperEnv) -> int:
    board = env.game.board
    for cell in board:
        if not cell.is_mine and cell.is_hidden:
            return board.index_of(cell.x, cell.y)
    raise AssertionError("no safe hidden cell")


def mine_action(env: MinesweeperEnv) -> int:
    board = env.game.board
    cell = next(cell for cell in board if cell.is_mine)
    return board.index_of(cell.x, cell.y)


# ============================================================================
# Space and Reset Tests
# ============================================================================

class TestEnvironmentSetup:
    """Test spaces and reset."""

    def test_spaces_match_board(self) -> None:
        env = MinesweeperEnv(config=BoardConfig(7, 5, 6))
        assert env.observation_space.shape == (5, 7)
        assert env.action_space.n == 35

    def test_preset_name_accepted(self) -> None:
        env = MinesweeperEnv(config="medium")
        assert env.action_space.n == 256

    def test_reset_returns_hidden_board(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=1)
        assert obs.shape == (9, 9)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert info["game_state"] == "READY"
        assert info["total_safe"] == 71
        assert info["valid_actions"] == 81

    def test_observation_in_space(self, env: MinesweeperEnv) -> None:
        obs, _ = env.reset(seed=2)
        assert env.observation_space.contains(obs)

    def test_reset_seed_is_reproducible(self) -> None:
        first, second = MinesweeperEnv(), MinesweeperEnv()
        first.reset(seed=42)
        second.reset(seed=42)
        assert [c.is_mine for c in first.game.board] == [
            c.is_mine for c in second.game.board
        ]


# ============================================================================
# Step Tests
# ============================================================================

class TestEnvironmentStep:
    """Test rewards and termination."""

    def test_safe_step(self, env: MinesweeperEnv) -> None:
        obs, reward, terminated, truncated, info = env.step(safe_action(env))
        assert reward in (1.0, 10.0)
        assert truncated is False
        assert info["steps"] == 1
        assert info["revealed"] >= 1
        assert np.any(obs >= 0)

    def test_mine_step_terminates(self, env: MinesweeperEnv) -> None:
        obs, reward, terminated, _, info = env.step(mine_action(env))
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"
        assert np.count_nonzero(obs == 9) == 10

    def test_repeated_action_is_invalid(self, env: MinesweeperEnv) -> None:
        action = safe_action(env)
        env.step(action)
        _, reward, _, _, _ = env.step(action)
        assert reward == pytest.approx(-0.1)

    def test_action_maps_to_x_then_y(self) -> None:
        env = MinesweeperEnv(config=BoardConfig(4, 3, 1))
        env.reset(seed=0)
        assert env._action_to_position(6) == (2, 1)

    def test_action_mask_tracks_reveals(self, env: MinesweeperEnv) -> None:
        assert env.get_action_mask().sum() == 81
        env.step(safe_action(env))
        mask = env.get_action_mask()
        assert mask.dtype == bool
        assert mask.sum() == 81 - env.game.board.revealed_count

    def test_random_play_terminates(self, env: MinesweeperEnv) -> None:
        rng = np.random.default_rng(0)
        done = False
        steps = 0
        while not done:
            action = int(rng.choice(np.flatnonzero(env.get_action_mask())))
            _, _, done, _, info = env.step(action)
            steps += 1
        assert info["game_state"] in ("WON", "LOST")
        assert steps <= 71


# ============================================================================
# Rendering Tests
# ============================================================================

class TestRender:
    """Test text rendering."""

    def test_render_hidden_board(self, env: MinesweeperEnv) -> None:
        text = env.render()
        lines = text.split("\n")
        assert len(lines) == 9
        assert lines[0] == " ".join(["."] * 9)

    def test_render_symbols(self) -> None:
        obs = np.array([[-1, -2, 9], [0, 3, 8]], dtype=np.int8)
        assert render_text(obs) == ". F *\n  3 8"

    def test_render_coordinates(self) -> None:
        obs = np.full((2, 3), -1, dtype=np.int8)
        assert render_text(obs, coordinates=True) == (
            "  0 1 2\n"
            "0 . . .\n"
            "1 . . ."
        )


# ============================================================================
# Invalid Action Tests
# ============================================================================

class TestInvalidActions:
    """Actions the game cannot take score as invalid and change nothing."""

    def test_out_of_range_action(self, env: MinesweeperEnv) -> None:
        _, reward, terminated, _, info = env.step(env.action_space.n + 4)
        assert reward == pytest.approx(-0.1)
        assert terminated is False
        assert info["game_state"] == "READY"

    def test_flagged_cell_action(self, env: MinesweeperEnv) -> None:
        env.game.toggle_flag(0, 0)
        _, reward, _, _, info = env.step(0)
        assert reward == pytest.approx(-0.1)
        assert info["game_state"] == "READY"
        assert env.game.get_board().cell(0, 0).flagged is True

    def test_action_after_game_over(self, env: MinesweeperEnv) -> None:
        env.step(mine_action(env))
        _, reward, terminated, _, _ = env.step(safe_action(env))
        assert reward == pytest.approx(-0.1)
        assert terminated is True
