"""
Board module for Minesweeper game.

Implements the game board with deferred mine placement, flood reveal,
flag bookkeeping and the victory check.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell


logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 10
    cols: int = 10
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols


class Difficulty(Enum):
    """Preset difficulty levels."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"

    @property
    def config(self) -> BoardConfig:
        """Board configuration for this difficulty."""
        return DIFFICULTY_PRESETS[self]


DIFFICULTY_PRESETS: Dict[Difficulty, BoardConfig] = {
    Difficulty.EASY: BoardConfig(rows=10, cols=10, num_mines=10),
    Difficulty.NORMAL: BoardConfig(rows=14, cols=16, num_mines=30),
    Difficulty.HARD: BoardConfig(rows=18, cols=22, num_mines=70),
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns the grid of cells and the mine layout. Mines are placed once
    per round, after the first clicked coordinate is known, so that
    coordinate is always safe.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _mine_positions: Set[Tuple[int, int]] = field(
        default_factory=set, repr=False
    )
    _mines_placed: bool = False

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self.initialize()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def initialize(self) -> None:
        """Create a grid of hidden, mine-free cells."""
        self._grid = [
            [Cell(row, col) for col in range(self.config.cols)]
            for row in range(self.config.rows)
        ]
        self._mine_positions = set()
        self._mines_placed = False

    def place_mines(self, exclude_row: int, exclude_col: int) -> None:
        """
        Place mines randomly, keeping one position mine-free.

        Does nothing if mines were already placed this round or the
        excluded position is off the board.

        Args:
            exclude_row: Row of the first clicked cell.
            exclude_col: Column of the first clicked cell.
        """
        if self._mines_placed:
            return
        if not self._is_valid_position(exclude_row, exclude_col):
            return

        positions = self._get_valid_mine_positions((exclude_row, exclude_col))
        mine_positions = self.rng.sample(positions, self.config.num_mines)
        for row, col in mine_positions:
            self._grid[row][col].set_mine()
        self._mine_positions = set(mine_positions)
        self._mines_placed = True

        self._calculate_adjacent_mines()
        logger.debug(
            "Placed %d mines on %dx%d board, safe cell (%d, %d)",
            self.config.num_mines,
            self.config.rows,
            self.config.cols,
            exclude_row,
            exclude_col,
        )

    def _get_valid_mine_positions(
        self, exclude: Tuple[int, int]
    ) -> List[Tuple[int, int]]:
        """Get all valid positions for mine placement."""
        positions = []
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if (row, col) != exclude:
                    positions.append((row, col))
        return positions

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                cell = self._grid[row][col]
                if not cell.is_mine:
                    cell.set_adjacent_mines(
                        self._count_adjacent_mines(row, col)
                    )

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(
        self, row: int, col: int
    ) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    # ========================================================================
    # Board Actions (Mid-level)
    # ========================================================================

    def reveal_region(self, row: int, col: int) -> List[Cell]:
        """
        Reveal a cell and flood out through empty neighbors.

        Out-of-bounds, revealed and flagged targets are left alone. A
        revealed mine stops expansion; a cell with no adjacent mines
        expands to all eight neighbors. Uses an explicit stack so large
        boards do not hit the recursion limit.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            Cells that went from hidden to revealed during this call.
        """
        revealed: List[Cell] = []
        pending = [(row, col)]

        while pending:
            current_row, current_col = pending.pop()
            cell = self.get_cell(current_row, current_col)
            if cell is None or not cell.reveal():
                continue

            revealed.append(cell)
            if cell.is_mine or cell.adjacent_mines > 0:
                continue

            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                if self._grid[neighbor_row][neighbor_col].is_hidden:
                    pending.append((neighbor_row, neighbor_col))

        return revealed

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Returns:
            True if flag was toggled, False for a revealed cell or an
            invalid position.
        """
        cell = self.get_cell(row, col)
        if cell is None:
            return False
        return cell.toggle_flag()

    def reveal_all_mines(self) -> List[Cell]:
        """
        Reveal every mine that is not flagged.

        Flagged mines keep their flag so a lost board still shows
        which mines the player had found.

        Returns:
            Mine cells revealed by this call.
        """
        revealed = []
        for row, col in sorted(self._mine_positions):
            cell = self._grid[row][col]
            if not cell.is_flagged and cell.reveal():
                revealed.append(cell)
        return revealed

    def reset(self) -> None:
        """Clear mines and cell states, keeping the dimensions."""
        for cell in self.cells():
            cell.reset()
        self._mine_positions.clear()
        self._mines_placed = False

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def num_mines(self) -> int:
        return self.config.num_mines

    @property
    def total_cells(self) -> int:
        return self.config.total_cells

    @property
    def mines_placed(self) -> bool:
        """Whether mines have been laid for the current round."""
        return self._mines_placed

    @property
    def mine_positions(self) -> FrozenSet[Tuple[int, int]]:
        return frozenset(self._mine_positions)

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for grid_row in self._grid:
            yield from grid_row

    def flagged_count(self) -> int:
        """Number of flagged cells."""
        return sum(1 for cell in self.cells() if cell.is_flagged)

    def remaining_flag_count(self) -> int:
        """
        Mines left to flag.

        Goes negative when the player places more flags than there are
        mines; displays show the absolute value.
        """
        return self.config.num_mines - self.flagged_count()

    def check_victory(self) -> bool:
        """
        Check both win conditions.

        The round is won when every mine is flagged, or when every
        non-mine cell is revealed. Either is enough on its own.
        """
        if not self._mines_placed:
            return False

        all_mines_flagged = bool(self._mine_positions) and all(
            self._grid[row][col].is_flagged
            for row, col in self._mine_positions
        )
        if all_mines_flagged:
            return True

        return all(
            cell.is_revealed for cell in self.cells() if not cell.is_mine
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for cell in self.cells():
            obs[cell.row, cell.col] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of hidden cells.

        Returns:
            List of (row, col) positions that can still be revealed.
        """
        return [cell.position for cell in self.cells() if cell.is_hidden]
