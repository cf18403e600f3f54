"""Sort files into subfolders by type, with an undoable move history, a CLI and a tkinter window."""

__version__ = "0.1.0"