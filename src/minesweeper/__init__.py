"""
Minesweeper game engine.

Provides the board, cell state, game controller and a gymnasium
environment built on top of them.
"""
from .errors import ConfigurationError
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    BoardView,
    EASY,
    MEDIUM,
    HARD,
    PRESETS,
    resolve_config,
)
from .game import Game, GameStats, GameStatus
from .display import render_text
from .environment import MinesweeperEnv

__all__ = [
    "ConfigurationError",
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "BoardView",
    "EASY",
    "MEDIUM",
    "HARD",
    "PRESETS",
    "resolve_config",
    "Game",
    "GameStats",
    "GameStatus",
    "render_text",
    "MinesweeperEnv",
]
