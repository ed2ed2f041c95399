"""
Cell module for the Minesweeper engine.

Represents individual cells on the game board with their position,
visual state (hidden/revealed/flagged) and content (mine/number).
"""
from dataclasses import dataclass
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_VALUE = -1
FLAGGED_VALUE = -2
MINE_VALUE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        x: Column of the cell, read-only once set.
        y: Row of the cell, read-only once set.
        is_mine: Whether this cell contains a mine.
        neighbor_mines: Count of mines in neighboring cells (0-8).
            Left at 0 for mine cells.
        state: Current visual state (hidden, revealed, or flagged).
    """

    x: int
    y: int
    is_mine: bool = False
    neighbor_mines: int = 0
    state: CellState = CellState.HIDDEN

    def __setattr__(self, name: str, value) -> None:
        # Position is fixed once set by __init__
        if name in ("x", "y") and name in self.__dict__:
            raise AttributeError(f"Cell position '{name}' is read-only")
        super().__setattr__(name, value)

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def expose(self) -> bool:
        """
        Reveal this cell even if it carries a flag.

        Returns:
            True if a flag was cleared by the reveal.
        """
        was_flagged = self.state == CellState.FLAGGED
        self.state = CellState.REVEALED
        return was_flagged

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_view(self, show_mine: bool = False) -> "CellView":
        """
        Build the read-only view of this cell.

        Args:
            show_mine: Report a hidden mine as a mine (game over).
        """
        return CellView(
            x=self.x,
            y=self.y,
            revealed=self.is_revealed,
            flagged=self.is_flagged,
            mine=self.is_mine and (self.is_revealed or show_mine),
            neighbor_count=self.neighbor_mines,
        )


# ============================================================================
# Read-only View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Snapshot of a cell handed to rendering code.

    ``mine`` is only true for a revealed mine, or for any mine once the
    game is over.
    """

    x: int
    y: int
    revealed: bool
    flagged: bool
    mine: bool
    neighbor_count: int

    def to_observation(self) -> int:
        """
        Convert the view to an observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Mine (revealed, or shown at game over)
        """
        if self.flagged:
            return FLAGGED_VALUE
        if self.mine:
            return MINE_VALUE
        if not self.revealed:
            return HIDDEN_VALUE
        return self.neighbor_count
