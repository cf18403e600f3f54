import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from smartorganizer.errors import OrganizerError
from smartorganizer.history import (
    History,
    HistoryManager,
    MovedFile,
    moved_file_from_dict,
)


def _move(n, micro=0):
    return MovedFile(
        Path(f"src/file{n}.txt"),
        Path(f"dst/txt/file{n}.txt"),
        datetime(2024, 5, 17, 10, 30, n, micro, tzinfo=timezone.utc),
    )


@pytest.fixture
def manager(tmp_path):
    return HistoryManager(tmp_path / "history.json")


def test_missing_file_loads_empty(manager):
    assert manager.load() == History()
    assert not manager.path.exists()


def test_push_then_load_round_trip(manager):
    first, second = _move(1, 250000), _move(2, 123456)
    manager.push(first)
    manager.push(second)
    assert manager.load().moves == [first, second]


def test_pop_last_returns_newest(manager):
    for n in (1, 2, 3):
        manager.push(_move(n))
    assert manager.pop_last() == _move(3)
    assert manager.load().moves == [_move(1), _move(2)]


def test_pop_last_on_empty_saves_empty_history(manager):
    assert manager.pop_last() is None
    assert manager.path.exists()
    assert manager.load().moves == []


def test_take_all_empties_history(manager):
    for n in (1, 2):
        manager.push(_move(n))
    assert manager.take_all() == [_move(1), _move(2)]
    assert manager.load().moves == []


def test_saved_document_shape(manager):
    manager.push(_move(4))
    text = manager.path.read_text(encoding="utf-8")
    assert text.startswith('{\n  "moves": [')
    entry = json.loads(text)["moves"][0]
    assert set(entry) == {"from", "to", "time"}
    assert entry["from"] == str(Path("src/file4.txt"))
    assert entry["time"].endswith("Z")


@pytest.mark.parametrize("micro", [0, 1000, 654321])
def test_to_dict_round_trip(micro):
    moved = _move(7, micro)
    assert moved_file_from_dict(moved.to_dict()) == moved


def test_parses_nanosecond_timestamp():
    moved = moved_file_from_dict(
        {"from": "a", "to": "b", "time": "2024-01-02T03:04:05.123456789Z"}
    )
    assert moved.time.microsecond == 123456
    assert moved.time.tzinfo == timezone.utc
    assert moved.source == Path("a")


def test_offset_timestamp_is_converted_to_utc():
    moved = moved_file_from_dict(
        {"from": "a", "to": "b", "time": "2024-01-02T05:00:00+02:00"}
    )
    assert moved.time == datetime(2024, 1, 2, 3, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "data",
    [
        {"from": "a", "to": "b"},
        {"from": "a", "time": "2024-01-02T03:04:05Z"},
        {"from": "a", "to": "b", "time": "not a time"},
        {"from": "a", "to": "b", "time": "2024-01-02T03:04:05"},
        ["a", "b"],
    ],
)
def test_invalid_entries_raise(data):
    with pytest.raises(OrganizerError):
        moved_file_from_dict(data)


@pytest.mark.parametrize("content", ["{not json", "{}", '{"moves": 3}', "[]"])
def test_corrupt_history_file_raises(manager, content):
    manager.path.write_text(content, encoding="utf-8")
    with pytest.raises(OrganizerError):
        manager.load()