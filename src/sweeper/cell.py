"""
Cell module for the sweeper engine.

A cell holds its content (mine or neighbor count) and its visual state.
Keeping a single state field means a cell can never be revealed and
flagged at the same time.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

HIDDEN_CODE = -1
FLAGGED_CODE = -2
WRONG_FLAG_CODE = -3
MINE_CODE = 9
DETONATED_CODE = 10


class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single grid position.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Mines in the clamped 8-neighborhood (0-8).
            Unused for mine cells.
        state: Hidden, revealed or flagged.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell changed, False if it was already revealed
            or is flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle the flag on this cell.

        Returns:
            True if the flag was toggled, False if the cell is revealed.
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

    def to_code(self, show_mines: bool = False) -> int:
        """
        Convert the cell to its display code.

        Args:
            show_mines: Expose mines and misplaced flags (after a loss).

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Flagged cell without a mine (only with show_mines)
            0-8: Revealed cell with adjacent mine count
            9: Mine (only with show_mines)
        """
        if show_mines:
            if self.is_mine:
                return MINE_CODE
            if self.state == CellState.FLAGGED:
                return WRONG_FLAG_CODE
        if self.state == CellState.HIDDEN:
            return HIDDEN_CODE
        if self.state == CellState.FLAGGED:
            return FLAGGED_CODE
        return self.adjacent_mines
