"""Errors raised while organizing files."""

from __future__ import annotations

import os
from pathlib import Path


class OrganizerError(Exception):
    """Base class for every error the organizer reports."""


class PermissionDeniedError(OrganizerError):
    """Access to a path was refused."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        super().__init__(f"Permission denied for path: {self.path}")


class DestinationExistsError(OrganizerError):
    """A file already occupies the destination path."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        super().__init__(f"File already exists at destination: {self.path}")