"""Desktop window for organizing a folder, with the work done off the UI thread."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from smartorganizer.errors import OrganizerError
from smartorganizer.history import HistoryManager
from smartorganizer.organizer import Organizer, OrganizerConfig
from smartorganizer.rules import ExtensionRuleEngine

if TYPE_CHECKING:
    import tkinter

DEFAULT_HISTORY_PATH = Path(".smart_organizer/history.json")
_POLL_MS = 200

log = logging.getLogger(__name__)


class OrganizeJob:
    """One organize pass by extension, run in a background thread."""

    def __init__(
        self,
        src: str | os.PathLike[str],
        dst: str | os.PathLike[str] | None = None,
        dry_run: bool = False,
        overwrite: bool = False,
        history_path: str | os.PathLike[str] = DEFAULT_HISTORY_PATH,
    ) -> None:
        self.src = Path(src)
        self.dst = self.src if dst is None else Path(dst)
        self.history_path = Path(history_path)
        self._organizer = Organizer(
            OrganizerConfig(self.src, self.dst, dry_run, overwrite),
            ExtensionRuleEngine(),
            HistoryManager(self.history_path),
        )
        self._thread: threading.Thread | None = None
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._error: str | None = None

    def start(self) -> None:
        """Begin organizing in a background thread."""
        if self._thread is not None:
            raise RuntimeError("job already started")
        self._thread = threading.Thread(target=self._run, name="organize", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        try:
            try:
                self.history_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError:
                pass
            try:
                self._organizer.organize()
            except (OSError, OrganizerError) as exc:
                log.error("Organize error: %s", exc)
                with self._lock:
                    self._error = str(exc)
        finally:
            self._done.set()

    def cancel(self) -> None:
        """Ask the organize pass to stop before its next file."""
        self._organizer.cancel()

    def is_running(self) -> bool:
        """True while the background pass has started and not yet finished."""
        return self._thread is not None and not self._done.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the pass ends; False if ``timeout`` ran out first."""
        if self._thread is None:
            return True
        return self._done.wait(timeout)

    def last_error(self) -> str | None:
        """The failure of the whole pass, else the latest per-file failure."""
        with self._lock:
            if self._error is not None:
                return self._error
        return self._organizer.last_error()


class GuiApp:
    """Window with folder pickers, options, a start/cancel button and status."""

    def __init__(self, root: tkinter.Misc) -> None:
        import tkinter as tk

        self.root = root
        self.src: Path | None = None
        self.dst: Path | None = None
        self.job: OrganizeJob | None = None
        self.dry_run = tk.BooleanVar(master=root, value=False)
        self.overwrite = tk.BooleanVar(master=root, value=False)

        if isinstance(root, (tk.Tk, tk.Toplevel)):
            root.title("Smart File Organizer")

        frame = tk.Frame(root, padx=12, pady=12)
        frame.pack(fill="both", expand=True)

        tk.Label(
            frame, text="Smart File Organizer", font=("TkDefaultFont", 14, "bold")
        ).grid(row=0, column=0, columnspan=2, sticky="w", pady=(0, 8))

        tk.Button(frame, text="Select source…", command=self._pick_source).grid(
            row=1, column=0, sticky="w"
        )
        self._src_label = tk.Label(frame, text="—")
        self._src_label.grid(row=1, column=1, sticky="w", padx=8)

        tk.Button(frame, text="Select destination…", command=self._pick_destination).grid(
            row=2, column=0, sticky="w"
        )
        self._dst_label = tk.Label(frame, text="—")
        self._dst_label.grid(row=2, column=1, sticky="w", padx=8)

        tk.Checkbutton(frame, text="Dry-run mode", variable=self.dry_run).grid(
            row=3, column=0, columnspan=2, sticky="w"
        )
        tk.Checkbutton(
            frame, text="Overwrite conflicting files", variable=self.overwrite
        ).grid(row=4, column=0, columnspan=2, sticky="w")

        self._action = tk.Button(frame, text="Start", command=self._toggle)
        self._action.grid(row=5, column=0, sticky="w", pady=(8, 0))

        self._status = tk.Label(frame, text="")
        self._status.grid(row=6, column=0, columnspan=2, sticky="w")

        self._error_label = tk.Label(frame, text="", fg="red")
        self._error_label.grid(row=7, column=0, columnspan=2, sticky="w")

        self.root.after(_POLL_MS, self._poll)

    def _ask_folder(self) -> Path | None:
        from tkinter import filedialog

        chosen = filedialog.askdirectory(parent=self.root, mustexist=True)
        return Path(chosen) if chosen else None

    def _pick_source(self) -> None:
        path = self._ask_folder()
        if path is not None:
            self.src = path
            self._src_label.configure(text=str(path))

    def _pick_destination(self) -> None:
        path = self._ask_folder()
        if path is not None:
            self.dst = path
            self._dst_label.configure(text=str(path))

    def _toggle(self) -> None:
        if self.job is not None and self.job.is_running():
            self.job.cancel()
            return
        if self.src is None:
            return
        self.job = OrganizeJob(
            self.src,
            self.dst,
            dry_run=self.dry_run.get(),
            overwrite=self.overwrite.get(),
        )
        self.job.start()
        self._refresh()

    def _refresh(self) -> None:
        job = self.job
        if job is None:
            self._action.configure(text="Start")
            self._status.configure(text="")
            return
        if job.is_running():
            self._action.configure(text="Cancel")
            self._status.configure(text="Working…", font=("TkDefaultFont", 10, "italic"))
        else:
            self._action.configure(text="Start")
            self._status.configure(text="Done", font=("TkDefaultFont", 10, "bold"))
        error = job.last_error()
        self._error_label.configure(text=f"Last error: {error}" if error else "")

    def _poll(self) -> None:
        self._refresh()
        self.root.after(_POLL_MS, self._poll)


def run_gui() -> None:
    """Open the organizer window and run until it is closed."""
    import tkinter as tk

    try:
        root = tk.Tk()
    except tk.TclError as exc:
        raise OrganizerError(f"Other error: cannot open window: {exc}") from exc
    GuiApp(root)
    root.mainloop()