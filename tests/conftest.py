"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

import numpy as np

# Add src and the project root (main.py) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, Game


# ============================================================================
# Deterministic Helpers
# ============================================================================

class FixedPermutation:
    """Random source whose shuffle always puts the given indices first."""

    def __init__(self, order: Sequence[int]) -> None:
        self.order = np.array(order)

    def permutation(self, candidates) -> np.ndarray:
        return self.order


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def layout_rng(
    width: int, height: int, mines: Sequence[Tuple[int, int]]
) -> FixedPermutation:
    """Random source that places mines exactly at the given (x, y)."""
    mine_indices = [y * width + x for x, y in mines]
    rest = [i for i in range(width * height) if i not in mine_indices]
    return FixedPermutation(mine_indices + rest)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    """Controllable clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def make_game(clock: FakeClock) -> Callable[..., Game]:
    """
    Factory for games with mines at fixed (x, y) positions.

    Usage: make_game(width, height, [(x, y), ...])
    """
    def factory(
        width: int,
        height: int,
        mines: List[Tuple[int, int]],
    ) -> Game:
        return Game(
            BoardConfig(width, height, len(mines)),
            rng=layout_rng(width, height, mines),
            clock=clock,
        )

    return factory


@pytest.fixture
def column_game(make_game) -> Game:
    """
    9x9 game with mines down column x=5 plus one at (8, 8).

    Columns 0-3 are all zero-count cells, column 4 is all numbered.
    """
    mines = [(5, y) for y in range(9)] + [(8, 8)]
    return make_game(9, 9, mines)


@pytest.fixture
def seeded_game(clock: FakeClock) -> Game:
    """Easy game with a fixed seed."""
    return Game("easy", rng=7, clock=clock)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def empty_board() -> Board:
    """5x5 board with no mines placed yet."""
    return Board(5, 5)


@pytest.fixture
def seeded_board() -> Board:
    """9x9 board with 10 mines from a fixed seed and counts computed."""
    board = Board(9, 9)
    board.place_mines(10, rng=123)
    board.calculate_neighbor_mines()
    return board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(x=0, y=0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(x=1, y=1, is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(x=2, y=2, neighbor_mines=3)
    cell.reveal()
    return cell
