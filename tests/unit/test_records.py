"""
Unit tests for best-time record stores.

Tests defaults, JSON persistence and failure handling.
"""
import json
from pathlib import Path

from minesweeper import (
    Difficulty,
    JsonRecordStore,
    MemoryRecordStore,
    UNSET_TIME,
    default_records,
)


# ============================================================================
# Default Records Tests
# ============================================================================

class TestDefaultRecords:
    """Test the no-record mapping."""

    def test_every_difficulty_unset(self) -> None:
        """Each difficulty starts at the unset sentinel."""
        assert default_records() == {
            Difficulty.EASY: UNSET_TIME,
            Difficulty.NORMAL: UNSET_TIME,
            Difficulty.HARD: UNSET_TIME,
        }

    def test_returns_new_mapping(self) -> None:
        """Callers can mutate their copy freely."""
        records = default_records()
        records[Difficulty.EASY] = 5
        assert default_records()[Difficulty.EASY] == UNSET_TIME


# ============================================================================
# Memory Store Tests
# ============================================================================

class TestMemoryRecordStore:
    """Test the in-memory store."""

    def test_load_defaults(self) -> None:
        """Empty store loads defaults."""
        assert MemoryRecordStore().load() == default_records()

    def test_initial_records_merge_over_defaults(self) -> None:
        """Seeded records fill in the given difficulties only."""
        store = MemoryRecordStore({Difficulty.HARD: 120})
        records = store.load()
        assert records[Difficulty.HARD] == 120
        assert records[Difficulty.EASY] == UNSET_TIME

    def test_save_then_load(self) -> None:
        """Saved records are returned by the next load."""
        store = MemoryRecordStore()
        records = default_records()
        records[Difficulty.NORMAL] = 61
        store.save(records)

        assert store.load()[Difficulty.NORMAL] == 61
        assert store.save_count == 1

    def test_load_returns_copy(self) -> None:
        """Mutating a loaded mapping does not change the store."""
        store = MemoryRecordStore()
        store.load()[Difficulty.EASY] = 1
        assert store.load()[Difficulty.EASY] == UNSET_TIME


# ============================================================================
# JSON Store Tests
# ============================================================================

class TestJsonRecordStore:
    """Test the file-backed store."""

    def test_missing_file_loads_defaults(self, tmp_path: Path) -> None:
        """No file yet means no records."""
        store = JsonRecordStore(tmp_path / "records.json")
        assert store.load() == default_records()

    def test_save_writes_json_by_difficulty_value(
        self, tmp_path: Path
    ) -> None:
        """Records are stored under the difficulty names."""
        path = tmp_path / "nested" / "records.json"
        store = JsonRecordStore(path)
        records = default_records()
        records[Difficulty.EASY] = 42
        store.save(records)

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        assert data == {"easy": 42, "normal": UNSET_TIME, "hard": UNSET_TIME}

    def test_save_then_load(self, tmp_path: Path) -> None:
        """A new store instance reads back what was saved."""
        path = tmp_path / "records.json"
        records = default_records()
        records[Difficulty.HARD] = 250
        JsonRecordStore(path).save(records)

        assert JsonRecordStore(path).load() == records

    def test_corrupt_file_loads_defaults(self, tmp_path: Path) -> None:
        """Unparseable JSON falls back to defaults."""
        path = tmp_path / "records.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonRecordStore(path).load() == default_records()

    def test_deeply_nested_file_loads_defaults(self, tmp_path: Path) -> None:
        """JSON too deep to decode is treated like any corrupt file."""
        path = tmp_path / "records.json"
        path.write_text("[" * 200000, encoding="utf-8")
        assert JsonRecordStore(path).load() == default_records()

    def test_wrong_shape_loads_defaults(self, tmp_path: Path) -> None:
        """A JSON list is not a records mapping."""
        path = tmp_path / "records.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert JsonRecordStore(path).load() == default_records()

    def test_bad_entries_fall_back_per_key(self, tmp_path: Path) -> None:
        """Valid entries are kept, invalid ones use the default."""
        path = tmp_path / "records.json"
        path.write_text(
            json.dumps({"easy": 30, "normal": "fast", "hard": -4, "extra": 1}),
            encoding="utf-8",
        )
        records = JsonRecordStore(path).load()
        assert records == {
            Difficulty.EASY: 30,
            Difficulty.NORMAL: UNSET_TIME,
            Difficulty.HARD: UNSET_TIME,
        }

    def test_unreadable_path_loads_defaults(self, tmp_path: Path) -> None:
        """A directory in place of the file is treated as unreadable."""
        path = tmp_path / "records.json"
        path.mkdir()
        assert JsonRecordStore(path).load() == default_records()

    def test_unwritable_path_does_not_raise(self, tmp_path: Path) -> None:
        """Save failures are logged, not raised."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonRecordStore(blocker / "records.json")

        store.save(default_records())

        assert not (blocker / "records.json").exists()
