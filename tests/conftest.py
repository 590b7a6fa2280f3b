"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import (
    Board,
    BoardConfig,
    Cell,
    Difficulty,
    Game,
    ManualClock,
    MemoryRecordStore,
)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible mine layouts."""
    return random.Random(1234)


@pytest.fixture
def default_board(rng: random.Random) -> Board:
    """Create a default 10x10 board with 10 mines."""
    return Board(rng=rng)


@pytest.fixture
def small_board(rng: random.Random) -> Board:
    """Create a small 3x3 board with 1 mine for testing."""
    return Board(BoardConfig(3, 3, 1), rng=rng)


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def full_board(rng: random.Random) -> Board:
    """Create a 3x3 board where every cell but one is a mine."""
    return Board(BoardConfig(3, 3, 8), rng=rng)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(2, 3)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def clock() -> ManualClock:
    """Host-driven clock."""
    return ManualClock()


@pytest.fixture
def record_store() -> MemoryRecordStore:
    """In-memory best-time store."""
    return MemoryRecordStore()


@pytest.fixture
def game(
    clock: ManualClock,
    record_store: MemoryRecordStore,
    rng: random.Random,
) -> Game:
    """Easy game wired to a manual clock and in-memory records."""
    return Game(
        Difficulty.EASY, clock=clock, record_store=record_store, rng=rng
    )


@pytest.fixture
def playing_game(game: Game) -> Game:
    """Easy game after the first click in the middle of the board."""
    game.first_click(5, 5)
    return game
