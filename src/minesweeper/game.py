"""
Game controller for the Minesweeper engine.

Owns the board, the status state machine and the timer, and exposes the
public API: initialize, reveal, toggle_flag, chord and the read-only
accessors.
"""
import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

import numpy as np

from .board import (
    EASY,
    Board,
    BoardConfig,
    BoardView,
    ConfigLike,
    RandomSource,
    make_rng,
    resolve_config,
)
from .cell import CellState

logger = logging.getLogger(__name__)


# ============================================================================
# Status
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    READY = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_over(self) -> bool:
        """Won and Lost are terminal."""
        return self in (GameStatus.WON, GameStatus.LOST)


# Any status not listed as a target is unreachable from that state.
_TRANSITIONS: Dict[GameStatus, FrozenSet[GameStatus]] = {
    GameStatus.READY: frozenset({GameStatus.PLAYING}),
    GameStatus.PLAYING: frozenset({GameStatus.WON, GameStatus.LOST}),
    GameStatus.WON: frozenset(),
    GameStatus.LOST: frozenset(),
}


@dataclass
class GameStats:
    """Summary of the current game."""

    duration: int = 0
    flags_used: int = 0
    mines_remaining: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "duration": self.duration,
            "flags_used": self.flags_used,
            "mines_remaining": self.mines_remaining,
        }


# ============================================================================
# Game Controller
# ============================================================================

class Game:
    """
    Minesweeper game controller.

    A game is built on construction and rebuilt by every ``initialize``
    call. All board mutation goes through ``reveal``, ``toggle_flag`` and
    ``chord``; none of them raise, invalid input is ignored.

    Example:
        >>> game = Game("easy", rng=42)
        >>> game.reveal(0, 0)
        >>> game.get_stats().to_dict()["flags_used"]
        0
    """

    def __init__(
        self,
        config: ConfigLike = EASY,
        rng: RandomSource = None,
        clock: Optional[Callable[[], float]] = None,
        safe_first_click: bool = False,
    ) -> None:
        """
        Initialize the controller and build the first game.

        Args:
            config: Board configuration or preset name.
            rng: Random source for mine placement (seed, Generator, None).
            clock: Callable returning seconds; defaults to time.monotonic.
            safe_first_click: Place mines on the first reveal, never on the
                revealed cell.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        self._rng = make_rng(rng)
        self._clock = clock or time.monotonic
        self.safe_first_click = safe_first_click
        self.config: BoardConfig = resolve_config(config)
        self.initialize()

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def initialize(
        self,
        config: Optional[ConfigLike] = None,
        rng: RandomSource = None,
    ) -> None:
        """
        Discard the current game and start a new one.

        Args:
            config: Board configuration or preset name; None keeps the
                current configuration.
            rng: Replacement random source; None keeps the current one.

        Raises:
            ConfigurationError: If the configuration is invalid. The
                previous game is left untouched.
        """
        resolved = self.config if config is None else resolve_config(config)
        if rng is not None:
            self._rng = make_rng(rng)

        board = Board(resolved.width, resolved.height)
        if not self.safe_first_click:
            board.place_mines(resolved.num_mines, self._rng)
            board.calculate_neighbor_mines()

        self.config = resolved
        self._board = board
        self._status = GameStatus.READY
        self.flag_count = 0
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

        logger.debug(
            "New game: %dx%d with %d mines",
            resolved.width, resolved.height, resolved.num_mines,
        )

    def _transition(self, status: GameStatus) -> None:
        """Move to a new status, rejecting transitions the game never makes."""
        if status not in _TRANSITIONS[self._status]:
            raise RuntimeError(
                f"Illegal status transition {self._status.name} -> {status.name}"
            )
        self._status = status
        if status is GameStatus.PLAYING:
            self.start_time = self._clock()
        elif status.is_over:
            self.end_time = self._clock()
            logger.info(
                "Game %s after %ds", status.name.lower(), self.get_duration()
            )

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, x: int, y: int) -> None:
        """
        Reveal the cell at (x, y).

        Does nothing if the game is over, the position is out of bounds,
        or the cell is already revealed or flagged. Revealing a zero-count
        cell cascades through its connected zero region.
        """
        if self._status.is_over or not self._board.in_bounds(x, y):
            return
        index = self._board.index_of(x, y)
        if self._board.cell_at(index).state != CellState.HIDDEN:
            return

        if self._status is GameStatus.READY:
            self._start(index)
        if self._reveal_index(index):
            self._check_win()

    def _start(self, index: int) -> None:
        """Handle the first reveal: place deferred mines and start timer."""
        if self.safe_first_click:
            self._board.place_mines(
                self.config.num_mines, self._rng, exclude=index
            )
            self._board.calculate_neighbor_mines()
        self._transition(GameStatus.PLAYING)

    def _reveal_index(self, index: int) -> bool:
        """
        Reveal one hidden cell with cascade.

        Returns:
            False if a mine was hit and the game is lost.
        """
        self._board.flood_reveal(index)
        if not self._board.cell_at(index).is_mine:
            return True

        cleared = self._board.reveal_mines()
        self.flag_count -= cleared
        self._transition(GameStatus.LOST)
        return False

    def _check_win(self) -> None:
        """Win once every non-mine cell is revealed, flags notwithstanding."""
        hidden = self._board.total_cells - self._board.revealed_count
        if hidden == self.config.num_mines:
            self._transition(GameStatus.WON)

    def toggle_flag(self, x: int, y: int) -> None:
        """
        Toggle the flag on the cell at (x, y).

        Does nothing once the game is over, for out of bounds positions,
        or for revealed cells. The flag count is never checked against
        the mine count.
        """
        if self._status.is_over:
            return
        cell = self._board.get_cell(x, y)
        if cell is None or not cell.toggle_flag():
            return
        self.flag_count += 1 if cell.is_flagged else -1

    def chord(self, x: int, y: int) -> None:
        """
        Reveal all unflagged neighbors of a satisfied number.

        Applies only while playing, to a revealed cell whose count of
        flagged neighbors equals its neighbor mine count. A wrongly placed
        flag can make this reveal a mine.
        """
        if self._status is not GameStatus.PLAYING:
            return
        if not self._board.in_bounds(x, y):
            return
        index = self._board.index_of(x, y)
        cell = self._board.cell_at(index)
        if not cell.is_revealed or cell.neighbor_mines == 0:
            return
        if self._board.count_adjacent_flags(index) != cell.neighbor_mines:
            return

        for neighbor in self._board.neighbors(index):
            if self._board.cell_at(neighbor).state != CellState.HIDDEN:
                continue
            if not self._reveal_index(neighbor):
                return
        self._check_win()

    # ========================================================================
    # State Accessors
    # ========================================================================

    def get_status(self) -> GameStatus:
        """Current status of the game."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if the game accepts moves (ready or playing)."""
        return not self._status.is_over

    @property
    def is_won(self) -> bool:
        """Check if the game was won."""
        return self._status is GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if the game was lost."""
        return self._status is GameStatus.LOST

    @property
    def mine_count(self) -> int:
        """Configured number of mines."""
        return self.config.num_mines

    @property
    def board(self) -> Board:
        """Underlying board, for inspection only."""
        return self._board

    def get_board(self) -> BoardView:
        """Read-only view of the board; mines are shown once the game ends."""
        return self._board.view(show_mines=self._status.is_over)

    def get_observation(self) -> np.ndarray:
        """Board view as an int8 array of shape (height, width)."""
        return self.get_board().to_observation()

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """(x, y) positions that can still be revealed."""
        if self._status.is_over:
            return []
        return self._board.hidden_positions()

    def get_duration(self) -> int:
        """Whole seconds since the first reveal, frozen once the game ends."""
        if self.start_time is None:
            return 0
        end = self.end_time if self.end_time is not None else self._clock()
        return int(end - self.start_time)

    def get_stats(self) -> GameStats:
        """Duration, flags used and mines remaining (mines minus flags)."""
        return GameStats(
            duration=self.get_duration(),
            flags_used=self.flag_count,
            mines_remaining=self.config.num_mines - self.flag_count,
        )
