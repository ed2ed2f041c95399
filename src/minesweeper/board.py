"""
Board module for the Minesweeper engine.

Implements the fixed-size grid of cells, random mine placement,
neighbor mine counting and the cascading reveal.

Cells are stored in a flat list indexed by ``y * width + x``; the
neighbor indices of every cell are computed once when the board is built.
"""
import logging
from collections import deque
from dataclasses import dataclass
from numbers import Integral
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import numpy as np

from .cell import Cell, CellState, CellView
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# None (fresh entropy), an int seed, or a Generator
RandomSource = Union[None, int, np.random.Generator]


# ============================================================================
# Constants
# ============================================================================

NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (delta_x, delta_y)
    for delta_y in (-1, 0, 1)
    for delta_x in (-1, 0, 1)
    if (delta_x, delta_y) != (0, 0)
)


def _is_int(value: Any) -> bool:
    """Check for an integer, rejecting bools."""
    return isinstance(value, Integral) and not isinstance(value, bool)


def make_rng(rng: RandomSource) -> np.random.Generator:
    """
    Return a random source exposing ``permutation``.

    Seeds and None become a fresh numpy Generator; anything else is
    used as given.
    """
    if rng is None or _is_int(rng):
        return np.random.default_rng(rng)
    return rng


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        values = (self.width, self.height, self.num_mines)
        if not all(_is_int(value) for value in values):
            raise ConfigurationError("Board settings must be integers")
        if self.width < 1 or self.height < 1:
            raise ConfigurationError("Board dimensions must be positive")
        if self.num_mines < 1:
            raise ConfigurationError("Board needs at least one mine")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ConfigurationError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height


# Preset difficulty levels
EASY = BoardConfig(9, 9, 10)
MEDIUM = BoardConfig(16, 16, 40)
HARD = BoardConfig(30, 16, 99)

PRESETS: Dict[str, BoardConfig] = {
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
}

ConfigLike = Union[BoardConfig, str]


def resolve_config(config: ConfigLike) -> BoardConfig:
    """
    Turn a configuration or preset name into a BoardConfig.

    Raises:
        ConfigurationError: If the preset name is unknown.
    """
    if isinstance(config, BoardConfig):
        return config
    if isinstance(config, str):
        try:
            return PRESETS[config.lower()]
        except KeyError:
            raise ConfigurationError(
                f"Unknown difficulty preset: {config!r}"
            ) from None
    raise ConfigurationError(
        f"Expected a BoardConfig or preset name, got {type(config).__name__}"
    )


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Fixed ``width x height`` grid of cells.

    The board knows nothing about game status; the game controller decides
    when to place mines, reveal and flag.
    """

    def __init__(self, width: int, height: int) -> None:
        """
        Create a board of hidden, mine-free cells.

        Args:
            width: Number of columns (positive).
            height: Number of rows (positive).

        Raises:
            ConfigurationError: If a dimension is not a positive integer.
        """
        if not (_is_int(width) and _is_int(height)):
            raise ConfigurationError("Board dimensions must be integers")
        if width < 1 or height < 1:
            raise ConfigurationError("Board dimensions must be positive")

        self.width = int(width)
        self.height = int(height)
        self.mine_count = 0
        self.revealed_count = 0
        self._cells: List[Cell] = [
            Cell(x=index % self.width, y=index // self.width)
            for index in range(self.total_cells)
        ]
        self._neighbors: List[Tuple[int, ...]] = [
            self._compute_neighbors(cell.x, cell.y) for cell in self._cells
        ]

    def _compute_neighbors(self, x: int, y: int) -> Tuple[int, ...]:
        """Flat indices of the up to 8 cells around (x, y)."""
        return tuple(
            self.index_of(x + delta_x, y + delta_y)
            for delta_x, delta_y in NEIGHBOR_OFFSETS
            if self.in_bounds(x + delta_x, y + delta_y)
        )

    # ========================================================================
    # Addressing
    # ========================================================================

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height

    def in_bounds(self, x: Any, y: Any) -> bool:
        """Check that (x, y) are integers within the board."""
        if not (_is_int(x) and _is_int(y)):
            return False
        return 0 <= x < self.width and 0 <= y < self.height

    def index_of(self, x: int, y: int) -> int:
        """Flat index of position (x, y)."""
        return y * self.width + x

    def position_of(self, index: int) -> Tuple[int, int]:
        """(x, y) position of a flat index."""
        return index % self.width, index // self.width

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.in_bounds(x, y):
            return None
        return self._cells[self.index_of(x, y)]

    def cell_at(self, index: int) -> Cell:
        """Get cell by flat index."""
        return self._cells[index]

    def neighbors(self, index: int) -> Tuple[int, ...]:
        """Flat indices of the cells around a flat index."""
        return self._neighbors[index]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    # ========================================================================
    # Setup: Mine Placement and Neighbor Counts
    # ========================================================================

    def place_mines(
        self,
        num_mines: int,
        rng: RandomSource = None,
        exclude: Optional[int] = None,
    ) -> List[int]:
        """
        Place mines on distinct random cells.

        Shuffles the candidate indices and takes the first ``num_mines``,
        so placement finishes in bounded time however dense the board is.

        Args:
            num_mines: Number of mines, 0 < num_mines < total cells.
            rng: Random source (seed, Generator, or None).
            exclude: Flat index that must stay mine-free.

        Returns:
            Flat indices of the placed mines.

        Raises:
            ConfigurationError: If the mine count is out of range.
            RuntimeError: If mines were already placed on this board.
        """
        if self.mine_count:
            raise RuntimeError("Mines have already been placed on this board")
        if not _is_int(num_mines):
            raise ConfigurationError("Mine count must be an integer")
        if not 0 < num_mines < self.total_cells:
            raise ConfigurationError(
                f"Mine count must be between 1 and {self.total_cells - 1}"
            )

        candidates = np.arange(self.total_cells)
        if exclude is not None:
            candidates = np.delete(candidates, exclude)

        order = make_rng(rng).permutation(candidates)
        mine_indices = [int(index) for index in order[:num_mines]]
        for index in mine_indices:
            self._cells[index].is_mine = True
        self.mine_count = len(mine_indices)

        logger.debug(
            "Placed %d mines on %dx%d board",
            self.mine_count, self.width, self.height,
        )
        return mine_indices

    def calculate_neighbor_mines(self) -> None:
        """Count adjacent mines for every non-mine cell."""
        for index, cell in enumerate(self._cells):
            if cell.is_mine:
                continue
            cell.neighbor_mines = sum(
                1 for neighbor in self._neighbors[index]
                if self._cells[neighbor].is_mine
            )

    # ========================================================================
    # Revealing
    # ========================================================================

    def flood_reveal(self, index: int) -> List[int]:
        """
        Reveal a hidden cell, cascading through zero-count regions.

        Uses an explicit queue rather than recursion. A neighbor is marked
        revealed when it is queued, so no cell is visited twice. Flagged
        cells stop the cascade and are left untouched; numbered cells are
        revealed but do not propagate.

        Args:
            index: Flat index of the cell to reveal.

        Returns:
            Flat indices revealed by this call, the target first. Empty if
            the target was not hidden.
        """
        start = self._cells[index]
        if not start.reveal():
            return []
        self.revealed_count += 1
        revealed = [index]

        if start.is_mine or start.neighbor_mines > 0:
            return revealed

        queue = deque([index])
        while queue:
            current = queue.popleft()
            for neighbor in self._neighbors[current]:
                cell = self._cells[neighbor]
                if not cell.reveal():
                    continue
                self.revealed_count += 1
                revealed.append(neighbor)
                if cell.neighbor_mines == 0:
                    queue.append(neighbor)

        return revealed

    def reveal_mines(self) -> int:
        """
        Reveal every mine, clearing flags that sit on mines.

        Returns:
            Number of flags cleared.
        """
        cleared = 0
        for cell in self._cells:
            if cell.is_mine and not cell.is_revealed:
                if cell.expose():
                    cleared += 1
                self.revealed_count += 1
        return cleared

    def count_adjacent_flags(self, index: int) -> int:
        """Count flagged cells adjacent to a flat index."""
        return sum(
            1 for neighbor in self._neighbors[index]
            if self._cells[neighbor].is_flagged
        )

    # ========================================================================
    # Views
    # ========================================================================

    def hidden_positions(self) -> List[Tuple[int, int]]:
        """(x, y) positions of hidden, unflagged cells."""
        return [
            (cell.x, cell.y) for cell in self._cells
            if cell.state == CellState.HIDDEN
        ]

    def view(self, show_mines: bool = False) -> "BoardView":
        """
        Build a read-only snapshot of the board.

        Args:
            show_mines: Report hidden mines as mines (game over).
        """
        rows = tuple(
            tuple(
                self._cells[self.index_of(x, y)].to_view(show_mines)
                for x in range(self.width)
            )
            for y in range(self.height)
        )
        return BoardView(width=self.width, height=self.height, rows=rows)


# ============================================================================
# Read-only Board View
# ============================================================================

@dataclass(frozen=True)
class BoardView:
    """
    Immutable ``width x height`` matrix of cell views.

    ``rows[y][x]`` is the view of cell (x, y).
    """

    width: int
    height: int
    rows: Tuple[Tuple[CellView, ...], ...]

    def cell(self, x: int, y: int) -> CellView:
        """Get the view of cell (x, y)."""
        return self.rows[y][x]

    def __iter__(self) -> Iterator[CellView]:
        for row in self.rows:
            yield from row

    def to_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array of shape (height, width), indexed [y, x], where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for view in self:
            obs[view.y, view.x] = view.to_observation()
        return obs
