"""
Cell module for Minesweeper game.

Represents individual squares on the game board with their position,
visual state (hidden/revealed/flagged) and content (mine/number).
"""
from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Tuple


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = "hidden"
    REVEALED = "revealed"
    FLAGGED = "flagged"


MAX_ADJACENT_MINES = 8


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        row: Row index on the board (fixed at creation).
        col: Column index on the board (fixed at creation).
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
    """

    row: int = 0
    col: int = 0
    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def set_mine(self) -> None:
        """Mark this cell as a mine."""
        self.is_mine = True

    def set_adjacent_mines(self, count: int) -> None:
        """
        Store the number of mines around this cell.

        Args:
            count: Neighbor mine count, 0-8.

        Raises:
            ValueError: If count is outside 0-8.
        """
        if not 0 <= count <= MAX_ADJACENT_MINES:
            raise ValueError(
                f"Adjacent mine count must be between 0 and "
                f"{MAX_ADJACENT_MINES}, got {count}"
            )
        self.adjacent_mines = count

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

    def reset(self) -> None:
        """Return the cell to its freshly created state."""
        self.is_mine = False
        self.adjacent_mines = 0
        self.state = CellState.HIDDEN

    @property
    def position(self) -> Tuple[int, int]:
        """(row, col) of this cell."""
        return self.row, self.col

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

    def to_observation(self) -> int:
        """
        Convert cell to observation value for the Gymnasium wrapper.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data snapshot for renderers."""
        return {
            "row": self.row,
            "col": self.col,
            "is_mine": self.is_mine,
            "state": self.state.value,
            "adjacent_mines": self.adjacent_mines,
        }
