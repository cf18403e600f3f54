"""Classifiers that choose a destination subfolder for a file."""

from __future__ import annotations

import json
import os
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any

from smartorganizer.errors import OrganizerError

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _extension(file: str | os.PathLike[str]) -> str | None:
    """Text after the last dot of the file name, or None if there is none."""
    name = PurePath(file).name
    if name == "..":
        return None
    before, dot, after = name.rpartition(".")
    if not dot or not before:
        return None
    return after


class RuleEngine(ABC):
    """Maps a file to the name of the subfolder it belongs in."""

    @abstractmethod
    def classify(self, file: str | os.PathLike[str]) -> str:
        """Return the subfolder name for ``file``."""


class ExtensionRuleEngine(RuleEngine):
    """Sorts files into folders named after their lower-cased extension."""

    def classify(self, file: str | os.PathLike[str]) -> str:
        ext = _extension(file)
        return "no_extension" if ext is None else _ascii_lower(ext)


@dataclass
class CustomRule:
    """Extensions separated by ``|`` (e.g. ``jpg|jpeg|png``) and their folder."""

    pattern: str
    target_dir: str


@dataclass
class CustomRuleEngine(RuleEngine):
    """First matching rule wins; unmatched files go to ``fallback``."""

    rules: list[CustomRule] = field(default_factory=list)
    fallback: str = ""

    def classify(self, file: str | os.PathLike[str]) -> str:
        ext = _ascii_lower(_extension(file) or "")
        for rule in self.rules:
            if any(
                _ascii_lower(token.strip()) == ext for token in rule.pattern.split("|")
            ):
                return rule.target_dir
        return self.fallback


def _rule_from(item: Any) -> CustomRule:
    if not isinstance(item, dict):
        raise OrganizerError(f"Serde error: rule must be an object, got {item!r}")
    try:
        pattern, target_dir = item["pattern"], item["target_dir"]
    except KeyError as exc:
        raise OrganizerError(f"Serde error: missing field {exc.args[0]!r}") from None
    if not isinstance(pattern, str) or not isinstance(target_dir, str):
        raise OrganizerError("Serde error: rule fields must be strings")
    return CustomRule(pattern, target_dir)


def load_custom_rules(text: str) -> CustomRuleEngine:
    """Parse a JSON document with ``rules`` and ``fallback`` into an engine."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise OrganizerError(f"Serde error: {exc}") from exc
    if not isinstance(data, dict):
        raise OrganizerError("Serde error: rules document must be an object")
    try:
        raw_rules, fallback = data["rules"], data["fallback"]
    except KeyError as exc:
        raise OrganizerError(f"Serde error: missing field {exc.args[0]!r}") from None
    if not isinstance(raw_rules, list):
        raise OrganizerError("Serde error: 'rules' must be a list")
    if not isinstance(fallback, str):
        raise OrganizerError("Serde error: 'fallback' must be a string")
    return CustomRuleEngine([_rule_from(item) for item in raw_rules], fallback)