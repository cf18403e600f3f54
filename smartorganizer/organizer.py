"""Moves files from a source tree into classified destination folders."""

from __future__ import annotations

import errno
import itertools
import logging
import os
import shutil
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from smartorganizer.errors import OrganizerError
from smartorganizer.history import HistoryManager, MovedFile
from smartorganizer.rules import RuleEngine

log = logging.getLogger(__name__)


@dataclass
class OrganizerConfig:
    """Where to read from, where to write to, and how."""

    src_dir: Path
    dst_dir: Path
    dry_run: bool = False
    overwrite: bool = False

    def __post_init__(self) -> None:
        self.src_dir = Path(self.src_dir)
        self.dst_dir = Path(self.dst_dir)


def _walk_files(root: Path) -> Iterator[Path]:
    if not root.is_dir():
        if root.exists() or root.is_symlink():
            yield root
        return
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath, name)


def _split_name(name: str) -> tuple[str, str]:
    """Split a file name into stem and extension ('' when there is none)."""
    if name == "..":
        return name, ""
    before, dot, after = name.rpartition(".")
    if not dot or not before:
        return name, ""
    return before, after


def move_file(source: str | os.PathLike[str], target: str | os.PathLike[str]) -> None:
    """Rename ``source`` to ``target``, copying when they are on different devices."""
    try:
        os.replace(source, target)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        shutil.copy(source, target)
        os.remove(source)


class Organizer:
    """Sorts files by a rule engine and records each move for undo."""

    def __init__(
        self, config: OrganizerConfig, rules: RuleEngine, history: HistoryManager
    ) -> None:
        self.config = config
        self.rules = rules
        self.history = history
        self._cancelled = threading.Event()
        self._error_lock = threading.Lock()
        self._last_error: Exception | None = None

    def cancel(self) -> None:
        """Ask a running (or future) organize pass to stop."""
        self._cancelled.set()

    def last_error(self) -> str | None:
        """Message of the most recent per-file failure, if any."""
        with self._error_lock:
            return None if self._last_error is None else str(self._last_error)

    def organize(self) -> None:
        """Move every file under the source into its classified folder."""
        if self.config.src_dir == self.config.dst_dir:
            log.warning(
                "Source and destination folders are the same, using nested subfolders."
            )
        for path in _walk_files(self.config.src_dir):
            if self._cancelled.is_set():
                log.warning("Operation cancelled by user")
                break
            try:
                self._process_file(path)
            except (OSError, OrganizerError) as exc:
                log.error("Failed to process %s: %s", path, exc)
                with self._error_lock:
                    self._last_error = exc

    def _process_file(self, path: Path) -> None:
        try:
            relative = path.relative_to(self.config.src_dir)
        except ValueError:
            relative = path
        target_dir = self.config.dst_dir / self.rules.classify(path)
        target_dir.mkdir(parents=True, exist_ok=True)

        name = relative.name
        if not name:
            raise OrganizerError(f"Cannot extract filename from {relative}")

        target = target_dir / name
        if target.exists() and not self.config.overwrite:
            target = self._resolve_conflict(target)

        log.info("Move: %s -> %s", path, target)

        if not self.config.dry_run:
            move_file(path, target)
            self.history.push(MovedFile(path, target, datetime.now(timezone.utc)))

    @staticmethod
    def _resolve_conflict(target: Path) -> Path:
        stem, ext = _split_name(target.name)
        stem = stem or "file"
        for i in itertools.count(1):
            name = f"{stem}_({i}).{ext}" if ext else f"{stem}_({i})"
            candidate = target.with_name(name)
            if not candidate.exists():
                return candidate
        raise OrganizerError("Unable to resolve name conflict")

    @staticmethod
    def _revert(move: MovedFile) -> None:
        log.info("Undo: %s -> %s", move.target, move.source)
        if move.target.exists():
            move_file(move.target, move.source)
        else:
            log.warning("Destination file missing: %s", move.target)

    def undo_last(self) -> None:
        """Move the most recently organized file back."""
        move = self.history.pop_last()
        if move is None:
            log.warning("Nothing to undo")
            return
        self._revert(move)

    def undo_all(self) -> None:
        """Move every recorded file back, newest first."""
        for move in reversed(self.history.take_all()):
            self._revert(move)