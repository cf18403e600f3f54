"""Persistent record of moved files, stored as JSON."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from smartorganizer.errors import OrganizerError

_FRACTION = re.compile(r"\.(\d+)")


def _format_time(moment: datetime) -> str:
    moment = moment.astimezone(timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    micro = moment.microsecond
    if micro:
        text += f".{micro // 1000:03d}" if micro % 1000 == 0 else f".{micro:06d}"
    return text + "Z"


def _parse_time(text: Any) -> datetime:
    if not isinstance(text, str):
        raise OrganizerError(f"Serde error: expected a timestamp string, got {text!r}")
    value = text.strip()
    if value[-1:] in ("Z", "z"):
        value = value[:-1] + "+00:00"
    value = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], value, count=1)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise OrganizerError(f"Serde error: invalid timestamp {text!r}") from exc
    if parsed.tzinfo is None:
        raise OrganizerError(f"Serde error: timestamp without offset {text!r}")
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class MovedFile:
    """One completed move: where a file came from, where it went, and when."""

    source: Path
    target: Path
    time: datetime

    def to_dict(self) -> dict[str, str]:
        """Return the JSON-ready form of this record."""
        return {
            "from": os.fspath(self.source),
            "to": os.fspath(self.target),
            "time": _format_time(self.time),
        }


def moved_file_from_dict(data: Any) -> MovedFile:
    """Build a MovedFile from its JSON form."""
    if not isinstance(data, dict):
        raise OrganizerError(f"Serde error: expected an object, got {data!r}")
    try:
        source, target, time = data["from"], data["to"], data["time"]
    except KeyError as exc:
        raise OrganizerError(f"Serde error: missing field {exc.args[0]!r}") from None
    if not isinstance(source, str) or not isinstance(target, str):
        raise OrganizerError("Serde error: paths must be strings")
    return MovedFile(Path(source), Path(target), _parse_time(time))


@dataclass
class History:
    """All recorded moves, oldest first."""

    moves: list[MovedFile] = field(default_factory=list)


def _history_from_json(data: Any) -> History:
    if not isinstance(data, dict):
        raise OrganizerError("Serde error: history must be an object")
    if "moves" not in data:
        raise OrganizerError("Serde error: missing field 'moves'")
    moves = data["moves"]
    if not isinstance(moves, list):
        raise OrganizerError("Serde error: 'moves' must be a list")
    return History([moved_file_from_dict(item) for item in moves])


class HistoryManager:
    """Loads and saves the move history at a fixed path."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def load(self) -> History:
        """Read the history; a missing file means an empty history."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return History()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise OrganizerError(f"Serde error: {exc}") from exc
        return _history_from_json(data)

    def save(self, history: History) -> None:
        """Write the history as indented JSON."""
        document = {"moves": [move.to_dict() for move in history.moves]}
        self.path.write_text(
            json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8"
        )

    def push(self, moved: MovedFile) -> None:
        """Append one move to the stored history."""
        history = self.load()
        history.moves.append(moved)
        self.save(history)

    def pop_last(self) -> MovedFile | None:
        """Remove and return the newest move, or None if there is none."""
        history = self.load()
        last = history.moves.pop() if history.moves else None
        self.save(history)
        return last

    def take_all(self) -> list[MovedFile]:
        """Remove and return every stored move, oldest first."""
        history = self.load()
        moves, history.moves = history.moves, []
        self.save(history)
        return moves