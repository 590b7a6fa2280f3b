"""
Minesweeper game module.

Provides the game engine: cells, board, clocks, best-time records,
the round controller and a Gymnasium environment around it.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, Difficulty, DIFFICULTY_PRESETS
from .clock import Clock, ManualClock, ThreadedClock
from .records import (
    RecordStore,
    MemoryRecordStore,
    JsonRecordStore,
    UNSET_TIME,
    default_records,
)
from .game import Game, GameStatus
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "Difficulty",
    "DIFFICULTY_PRESETS",
    "Clock",
    "ManualClock",
    "ThreadedClock",
    "RecordStore",
    "MemoryRecordStore",
    "JsonRecordStore",
    "UNSET_TIME",
    "default_records",
    "Game",
    "GameStatus",
    "MinesweeperEnv",
]
