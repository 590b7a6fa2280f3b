"""
Game module for Minesweeper.

Drives one Board, one Clock and a record store through the round
state machine:

    IDLE -> PLAYING -> WON | LOST

start(), restart() and change_difficulty() return to IDLE. Player
actions that do not fit the current state are ignored.
"""
import logging
import random
from enum import Enum
from typing import Callable, List, Optional

from .board import Board, Difficulty
from .clock import Clock, ThreadedClock, TickListener
from .records import MemoryRecordStore, RecordStore, Records, default_records


logger = logging.getLogger(__name__)

StatusListener = Callable[["GameStatus"], None]
BoardListener = Callable[[], None]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of a round."""

    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    Minesweeper round controller.

    Translates player actions into board mutations and status changes,
    and notifies listeners after each of them.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.EASY,
        clock: Optional[Clock] = None,
        record_store: Optional[RecordStore] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the game.

        Args:
            difficulty: Starting difficulty preset.
            clock: Elapsed-time source (default: real-time ThreadedClock).
            record_store: Best-time persistence (default: in memory).
            rng: Random source for mine placement.
        """
        self._difficulty = difficulty
        self._status = GameStatus.IDLE
        self._rng = rng or random.Random()
        self._clock = clock or ThreadedClock()
        self._record_store = record_store or MemoryRecordStore()
        self._records = default_records()
        self._records.update(self._load_records())

        self._status_listeners: List[StatusListener] = []
        self._tick_listeners: List[TickListener] = []
        self._board_listeners: List[BoardListener] = []

        self._board = Board(difficulty.config, rng=self._rng)
        self._clock.add_tick_listener(self._on_clock_tick)

    # ========================================================================
    # Listener Registration
    # ========================================================================

    def add_status_listener(self, listener: StatusListener) -> None:
        self._status_listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        if listener in self._status_listeners:
            self._status_listeners.remove(listener)

    def add_tick_listener(self, listener: TickListener) -> None:
        self._tick_listeners.append(listener)

    def remove_tick_listener(self, listener: TickListener) -> None:
        if listener in self._tick_listeners:
            self._tick_listeners.remove(listener)

    def add_board_listener(self, listener: BoardListener) -> None:
        self._board_listeners.append(listener)

    def remove_board_listener(self, listener: BoardListener) -> None:
        if listener in self._board_listeners:
            self._board_listeners.remove(listener)

    def _notify_status(self) -> None:
        for listener in list(self._status_listeners):
            listener(self._status)

    def _notify_board(self) -> None:
        for listener in list(self._board_listeners):
            listener()

    def _on_clock_tick(self, seconds: int) -> None:
        for listener in list(self._tick_listeners):
            listener(seconds)

    # ========================================================================
    # Round Control
    # ========================================================================

    def start(self) -> None:
        """
        Arm a fresh round on the current board.

        Mines are not placed and the clock does not run until
        first_click().
        """
        self._board.reset()
        self._clock.reset()
        self._status = GameStatus.IDLE
        logger.debug("New %s round", self._difficulty.value)

        self._notify_status()
        self._notify_board()

    def restart(self) -> None:
        """Start again on the current difficulty."""
        self.start()

    def change_difficulty(self, difficulty: Difficulty) -> None:
        """Switch to another preset and start a fresh round."""
        self._difficulty = difficulty
        self._board = Board(difficulty.config, rng=self._rng)
        self.start()

    def seed(self, seed: Optional[int] = None) -> None:
        """Reseed the random source used for mine placement."""
        self._rng.seed(seed)

    # ========================================================================
    # Player Actions
    # ========================================================================

    def first_click(self, row: int, col: int) -> None:
        """
        Open the round at (row, col).

        Lays the mines around the clicked cell, starts the clock and
        reveals the cell. While already playing this is a normal click.
        """
        if self._status == GameStatus.PLAYING:
            self.click_cell(row, col)
            return
        if self._status != GameStatus.IDLE:
            return
        if self._board.get_cell(row, col) is None:
            return

        self._board.place_mines(row, col)
        self._clock.start()
        self._status = GameStatus.PLAYING
        self._notify_status()

        self.click_cell(row, col)

    def click_cell(self, row: int, col: int) -> None:
        """Reveal a cell, flooding out from empty ones."""
        if self._status != GameStatus.PLAYING:
            return

        cell = self._board.get_cell(row, col)
        if cell is None or cell.is_revealed or cell.is_flagged:
            return

        if cell.is_mine:
            self._lose()
            return

        self._board.reveal_region(row, col)
        self._notify_board()

        if self._board.check_victory():
            self._win()

    def toggle_flag(self, row: int, col: int) -> None:
        """Flag or unflag a hidden cell. Flagging every mine wins."""
        if self._status != GameStatus.PLAYING:
            return
        if not self._board.toggle_flag(row, col):
            return

        self._notify_board()

        if self._board.check_victory():
            self._win()

    # ========================================================================
    # Round Outcomes
    # ========================================================================

    def _lose(self) -> None:
        self._clock.stop()
        self._board.reveal_all_mines()
        self._status = GameStatus.LOST
        logger.debug("Round lost after %d seconds", self._clock.seconds)

        self._notify_status()
        self._notify_board()

    def _win(self) -> None:
        self._clock.stop()

        elapsed = self._clock.seconds
        if elapsed < self._records[self._difficulty]:
            logger.info(
                "New %s record: %d seconds", self._difficulty.value, elapsed
            )
            self._records[self._difficulty] = elapsed
            self._save_records()

        self._status = GameStatus.WON
        self._notify_status()

    # ========================================================================
    # Record Persistence
    # ========================================================================

    def _load_records(self) -> Records:
        """Stored best times, or nothing if the store fails."""
        try:
            return self._record_store.load()
        except Exception as e:
            logger.warning("Failed to load records: %s", e)
            return {}

    def _save_records(self) -> None:
        """Persist best times; failures keep the in-memory copy."""
        try:
            self._record_store.save(dict(self._records))
        except Exception as e:
            logger.warning("Failed to save records: %s", e)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        return self._board

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def records(self) -> Records:
        """Copy of the best times per difficulty."""
        return dict(self._records)

    @property
    def current_record(self) -> int:
        """Best time for the active difficulty."""
        return self._records[self._difficulty]

    @property
    def elapsed_seconds(self) -> int:
        return self._clock.seconds

    @property
    def remaining_flags(self) -> int:
        return self._board.remaining_flag_count()

    @property
    def is_playing(self) -> bool:
        return self._status == GameStatus.PLAYING

    @property
    def is_won(self) -> bool:
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        return self._status == GameStatus.LOST

    @property
    def is_game_over(self) -> bool:
        return self._status in (GameStatus.WON, GameStatus.LOST)
