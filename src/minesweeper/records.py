"""
Best-time records for Minesweeper.

A record store keeps the fastest winning time per difficulty. Stores
never raise into the game: read failures fall back to defaults and
write failures are logged.
"""
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from .board import Difficulty


logger = logging.getLogger(__name__)

# Stored time meaning "no record yet"; slower than any real win
UNSET_TIME = 999

DEFAULT_RECORDS_PATH = Path.home() / ".minesweeper" / "records.json"

Records = Dict[Difficulty, int]


def default_records() -> Records:
    """Fresh mapping with no record for any difficulty."""
    return {difficulty: UNSET_TIME for difficulty in Difficulty}


# ============================================================================
# Record Store Interface
# ============================================================================

class RecordStore(ABC):
    """
    Abstract persistence for best times.

    Implementations must not raise from `load` or `save`.
    """

    @abstractmethod
    def load(self) -> Records:
        """
        Load best times.

        Returns:
            Mapping of every difficulty to its best time, UNSET_TIME
            where there is none.
        """

    @abstractmethod
    def save(self, records: Records) -> None:
        """Persist best times, best effort."""


# ============================================================================
# In-memory Store
# ============================================================================

class MemoryRecordStore(RecordStore):
    """Record store that lives only as long as the process."""

    def __init__(self, records: Optional[Records] = None) -> None:
        self._records = default_records()
        if records:
            self._records.update(records)
        self.save_count = 0

    def load(self) -> Records:
        return dict(self._records)

    def save(self, records: Records) -> None:
        self._records = dict(records)
        self.save_count += 1


# ============================================================================
# JSON File Store
# ============================================================================

class JsonRecordStore(RecordStore):
    """
    Record store backed by a JSON file.

    File layout: {"easy": 42, "normal": 999, "hard": 999}
    """

    def __init__(self, path: Union[str, Path] = DEFAULT_RECORDS_PATH) -> None:
        self.path = Path(path)

    def load(self) -> Records:
        records = default_records()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return records
        except (OSError, ValueError, RecursionError) as e:
            logger.warning("Failed to load records from %s: %s", self.path, e)
            return records

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed records file %s", self.path)
            return records

        for difficulty in Difficulty:
            value = data.get(difficulty.value)
            if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                records[difficulty] = value
        return records

    def save(self, records: Records) -> None:
        data = {difficulty.value: int(time) for difficulty, time in records.items()}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning("Failed to save records to %s: %s", self.path, e)
            return
        logger.debug("Saved records to %s", self.path)
