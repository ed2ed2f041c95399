"""
Gymnasium environment wrapper for the Minesweeper engine.

Drives a Game through its public API only, so it doubles as an example
consumer of the read-only board view.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, ConfigLike, EASY
from .cell import FLAGGED_VALUE, MINE_VALUE
from .display import render_text
from .game import Game


# ============================================================================
# Rewards
# ============================================================================

SAFE_REWARD = 1.0
WIN_REWARD = 10.0
MINE_REWARD = -10.0
INVALID_REWARD = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array of shape (height, width) where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = mine (after the game is over)

    Actions:
        Discrete action space of size width * height.
        Action i reveals cell (x, y) = (i % width, i // width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[ConfigLike] = None,
        render_mode: Optional[str] = None,
        safe_first_click: bool = False,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration or preset name (default: easy).
            render_mode: How to render the environment.
            safe_first_click: Never lose on the first reveal.
        """
        super().__init__()

        self.game = Game(
            config if config is not None else EASY,
            rng=self.np_random,
            safe_first_click=safe_first_click,
        )
        self.config: BoardConfig = self.game.config
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=FLAGGED_VALUE,
            high=MINE_VALUE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0
        self._total_safe_cells = self.config.total_cells - self.config.num_mines

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game.initialize(rng=self.np_random)
        self._steps = 0

        return self.game.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(x, y)
        observation = self.game.get_observation()
        terminated = self.game.get_status().is_over

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        action = int(action)
        return action % self.config.width, action // self.config.width

    def _calculate_reward(self, x: int, y: int) -> float:
        """Reveal (x, y) and score the outcome."""
        if not self.game.is_playing:
            return INVALID_REWARD
        if not (0 <= x < self.config.width and 0 <= y < self.config.height):
            return INVALID_REWARD
        view = self.game.get_board().cell(x, y)
        if view.revealed or view.flagged:
            return INVALID_REWARD

        self.game.reveal(x, y)

        if self.game.is_won:
            return WIN_REWARD
        if self.game.is_lost:
            return MINE_REWARD
        return SAFE_REWARD

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.game.get_board()
        revealed = sum(1 for view in board if view.revealed and not view.mine)
        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self._total_safe_cells,
            "game_state": self.game.get_status().name,
            "valid_actions": len(self.game.get_valid_actions()),
            **self.game.get_stats().to_dict(),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        text = render_text(self.game.get_observation())
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in self.game.get_valid_actions():
            mask[y * self.config.width + x] = True
        return mask
