# smartorganizer

Sort the files in a folder into subfolders, one per file type, and undo
the moves later if you change your mind.

Every file found under the source folder (subfolders included) is moved
into `<destination>/<category>/`. By default the category is the file's
lower-cased extension (`photo.JPG` goes to `jpg/`, files without an
extension go to `no_extension/`). When a file of that name already
exists at the destination, the incoming one is renamed `name_(1).ext`,
`name_(2).ext` and so on, unless `--overwrite` is given.

A file that cannot be moved is logged and skipped; the rest of the folder
is still processed.

Each real move is recorded in `.smart_organizer/history.json` under the
current directory, and the `organize` command writes its log both to
standard output and to `.smart_organizer/organizer.log`.

## Installation

```
pip install .
```

No third-party packages are needed. The optional window uses tkinter from
the standard library.

## Usage

Organize a folder in place:

```
smartorganizer organize --src ~/Downloads
```

Organize into another folder, previewing only (moves are logged but not
made, and nothing is added to the history):

```
smartorganizer organize --src ~/Downloads --dst ~/Sorted --dry-run
```

Running `smartorganizer` with no command is the same as `organize`.
Without `--src` (`-s`) you are offered a numbered menu of the current
directory and its subfolders; pressing Enter picks the current directory.
`--dst` (`-d`) defaults to the source folder. `--overwrite` replaces files
that already exist at the destination.

Organizing in place and then running again will pick up the already
sorted files and move them once more (renamed `_(1)` etc. if they land on
themselves), so point `--dst` elsewhere if you plan to run it repeatedly.

Undo the most recent move, or every recorded move (newest first):

```
smartorganizer undo-last
smartorganizer undo-all
```

Both accept `--history PATH` to use another history file. A recorded file
that is no longer at its destination is skipped with a warning; its record
is removed all the same.

Open the graphical window instead:

```
smartorganizer --gui
```

The window lets you pick a source and destination folder, tick
"Dry-run mode" and "Overwrite conflicting files", and start or cancel a
run. It always sorts by extension; custom rules are a command-line option
only.

`smartorganizer --version` prints the version. On an error the command
prints `Error: ...` to standard error and exits with status 1.

## Custom rules

Pass `--rules rules.json` to group several extensions under one folder:

```json
{
  "rules": [
    {"pattern": "jpg|jpeg|png", "target_dir": "Images"},
    {"pattern": "mp3|flac", "target_dir": "Music"}
  ],
  "fallback": "Other"
}
```

Extensions are matched case-insensitively; the first matching rule wins and
anything unmatched goes to the `fallback` folder. Both keys are required.

## Using it from Python

```python
from pathlib import Path
from smartorganizer.history import HistoryManager
from smartorganizer.organizer import Organizer, OrganizerConfig
from smartorganizer.rules import ExtensionRuleEngine, load_custom_rules

organizer = Organizer(
    OrganizerConfig(src_dir=Path("inbox"), dst_dir=Path("sorted"),
                    dry_run=False, overwrite=False),
    ExtensionRuleEngine(),
    HistoryManager(Path("history.json")),
)
organizer.organize()
print(organizer.last_error())   # message of the latest per-file failure, or None
organizer.undo_all()
```

`load_custom_rules(text)` turns a rules document like the one above into a
`CustomRuleEngine`; any subclass of `smartorganizer.rules.RuleEngine` with
a `classify(file)` method can be used instead. `Organizer.cancel()` stops a
run before its next file, and `smartorganizer.gui.OrganizeJob` runs an
extension-based pass in a background thread (`start`, `cancel`,
`is_running`, `wait`, `last_error`).

Errors raised by the package derive from
`smartorganizer.errors.OrganizerError`.