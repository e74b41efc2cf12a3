#!/usr/bin/env python3
"""
Eclipse Workspace Locator

Finds candidate Eclipse workspaces from the recent-workspaces record that
Eclipse keeps in its per-user configuration, plus the conventional default
workspace directories in the home folder.
"""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from common.decorators import handle_errors
from .config import DEFAULT_WORKSPACE_NAMES, METADATA_DIR

logger = logging.getLogger(__name__)

IDE_PREFS_NAME = "org.eclipse.ui.ide.prefs"

RECENT_WORKSPACES_PATTERN = re.compile(r"^\s*RECENT_WORKSPACES\s*=(.*)$", re.MULTILINE)



@dataclass
class Workspace:
    """A candidate Eclipse workspace."""
    path: Path

    @property
    def has_metadata(self) -> bool:
        """True if Eclipse has opened this directory as a workspace."""
        return (self.path / METADATA_DIR).is_dir()

    @property
    def name(self) -> str:
        return self.path.name


def split_record_value(value: str) -> List[str]:
    """
    Split a RECENT_WORKSPACES value into entries.

    Entries are separated by commas or by the escaped newline ("\\n" as two
    characters) that Eclipse writes. Other property escapes such as "\\:"
    and "\\\\" are undone.
    """
    entries = []
    current = []
    chars = iter(value)
    for ch in chars:
        if ch == "\\":
            escaped = next(chars, "")
            if escaped == "n":
                entries.append("".join(current))
                current = []
            else:
                current.append(escaped)
        elif ch == ",":
            entries.append("".join(current))
            current = []
        else:
            current.append(ch)
    entries.append("".join(current))
    return [e.strip() for e in entries if e.strip()]


def parse_recent_workspaces(text: str) -> List[str]:
    """
    Extract workspace paths from the contents of ``org.eclipse.ui.ide.prefs``.

    Returns:
        Paths in record order, unescaped, without duplicates.
    """
    paths: List[str] = []
    for match in RECENT_WORKSPACES_PATTERN.finditer(text):
        for entry in split_record_value(match.group(1).strip()):
            if entry not in paths:
                paths.append(entry)
    return paths


class WorkspaceLocator:
    """
    Discovers Eclipse workspaces for the current user.

    Search order:
    1. RECENT_WORKSPACES entries from every per-user IDE configuration
    2. Default workspace directories in the home folder
    """

    # Relative to the home directory
    CONFIG_GLOBS = [
        ".eclipse/*/configuration/.settings",
        "eclipse/*/eclipse/configuration/.settings",
    ]
    MACOS_CONFIG_GLOBS = [
        "eclipse/*/Eclipse.app/Contents/Eclipse/configuration/.settings",
    ]

    def __init__(
        self,
        home: Optional[Path] = None,
        default_workspace_names: Iterable[str] = DEFAULT_WORKSPACE_NAMES,
    ):
        self.home = Path(home) if home else Path.home()
        self.default_workspace_names = list(default_workspace_names)

    def discover(self) -> List[Path]:
        """
        Find existing workspace directories.

        Returns:
            Existing directories, deduplicated. Empty if none were found.
        """
        candidates: List[Path] = []
        for record in self.find_recent_records():
            candidates.extend(Path(p) for p in self.read_recent_record(record))
        candidates.extend(self.home / name for name in self.default_workspace_names)

        found: List[Path] = []
        seen = set()
        for candidate in candidates:
            candidate = candidate.expanduser()
            if not candidate.is_dir():
                logger.debug(f"Skipping missing workspace: {candidate}")
                continue
            key = candidate.resolve()
            if key in seen:
                continue
            seen.add(key)
            found.append(candidate)

        logger.info(f"Found {len(found)} Eclipse workspace(s)")
        return found

    def find_recent_records(self) -> List[Path]:
        """List IDE preference files that may hold recent workspaces."""
        patterns = list(self.CONFIG_GLOBS)
        if sys.platform == "darwin":
            patterns.extend(self.MACOS_CONFIG_GLOBS)

        records = []
        for pattern in patterns:
            for settings_dir in sorted(self.home.glob(pattern)):
                record = settings_dir / IDE_PREFS_NAME
                if record.is_file():
                    records.append(record)
        return records

    @handle_errors(OSError, UnicodeDecodeError, default=[], log_level=logging.WARNING,
                   message="Could not read recent workspaces")
    def read_recent_record(self, record: Path) -> List[str]:
        """Read one ``org.eclipse.ui.ide.prefs`` file."""
        paths = parse_recent_workspaces(record.read_text(encoding="utf-8"))
        logger.debug(f"{record}: {len(paths)} recent workspace(s)")
        return paths
