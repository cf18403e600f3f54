"""Command-line entry point: organize a folder or undo earlier moves."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from smartorganizer.errors import OrganizerError
from smartorganizer.gui import run_gui
from smartorganizer.history import HistoryManager
from smartorganizer.logger import setup_logging
from smartorganizer.organizer import Organizer, OrganizerConfig
from smartorganizer.rules import ExtensionRuleEngine, RuleEngine, load_custom_rules

_VERSION = "0.1.0"
STATE_DIR = Path(".smart_organizer")
HISTORY_PATH = STATE_DIR / "history.json"
LOG_PATH = STATE_DIR / "organizer.log"

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the organizer command."""
    parser = argparse.ArgumentParser(
        prog="smartorganizer",
        description="Automatically sorts files into subfolders (CLI/GUI)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    parser.add_argument("--gui", action="store_true", help="Launch GUI instead of CLI")
    commands = parser.add_subparsers(dest="command")

    organize = commands.add_parser("organize", help="Organize files")
    organize.add_argument("-s", "--src", type=Path)
    organize.add_argument("-d", "--dst", type=Path)
    organize.add_argument("--dry-run", action="store_true")
    organize.add_argument("--overwrite", action="store_true")
    organize.add_argument("--rules", type=Path)

    for name, text in (("undo-last", "Undo last move"), ("undo-all", "Undo all moves")):
        undo = commands.add_parser(name, help=text)
        undo.add_argument("--history", type=Path, default=HISTORY_PATH)
    return parser


def select_folder_interactive(
    current: str | os.PathLike[str] | None = None,
    prompt: Callable[[str], str] | None = None,
) -> Path:
    """Offer the current folder and its subfolders; return the one chosen."""
    ask = input if prompt is None else prompt
    if current is None:
        try:
            base = Path.cwd()
        except OSError:
            base = Path(".")
    else:
        base = Path(current)

    choices = [base]
    try:
        choices.extend(sorted(entry for entry in base.iterdir() if entry.is_dir()))
    except OSError:
        pass

    print("Select a folder to organize", file=sys.stderr)
    for number, folder in enumerate(choices):
        print(f"  {number}) {folder}", file=sys.stderr)
    try:
        answer = ask("Choice [0]: ").strip()
    except (EOFError, KeyboardInterrupt):
        return choices[0]
    try:
        index = int(answer) if answer else 0
    except ValueError:
        return choices[0]
    return choices[index] if 0 <= index < len(choices) else choices[0]


def _undo_organizer(history: Path) -> Organizer:
    here = Path.cwd()
    return Organizer(
        OrganizerConfig(here, here), ExtensionRuleEngine(), HistoryManager(history)
    )


def _organize(
    src: Path | None,
    dst: Path | None,
    dry_run: bool,
    overwrite: bool,
    rules: Path | None,
) -> None:
    source = src if src is not None else select_folder_interactive()
    destination = dst if dst is not None else source

    STATE_DIR.mkdir(parents=True, exist_ok=True)
    setup_logging(LOG_PATH)

    engine: RuleEngine
    if rules is not None:
        engine = load_custom_rules(rules.read_text(encoding="utf-8"))
    else:
        engine = ExtensionRuleEngine()

    log.info("Source:      %s", source)
    log.info("Destination: %s", destination)
    log.info("Dry-run:     %s", dry_run)
    log.info("Overwrite:   %s", overwrite)

    organizer = Organizer(
        OrganizerConfig(source, destination, dry_run, overwrite),
        engine,
        HistoryManager(HISTORY_PATH),
    )
    organizer.organize()


def run_cli(args: argparse.Namespace) -> None:
    """Carry out the parsed command; organize is the default."""
    if getattr(args, "gui", False):
        return
    command = getattr(args, "command", None) or "organize"
    if command == "organize":
        _organize(
            getattr(args, "src", None),
            getattr(args, "dst", None),
            getattr(args, "dry_run", False),
            getattr(args, "overwrite", False),
            getattr(args, "rules", None),
        )
    elif command == "undo-last":
        _undo_organizer(args.history).undo_last()
    elif command == "undo-all":
        _undo_organizer(args.history).undo_all()
    else:
        raise OrganizerError(f"Other error: unknown command {command!r}")


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv`` and run the CLI or the GUI; return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        if args.gui:
            run_gui()
        else:
            run_cli(args)
    except (OrganizerError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())