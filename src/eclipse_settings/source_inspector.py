"""
Settings Source Inspector

Decides whether a team settings directory ships one combined preference
export (.epf) or a set of individual per-plugin preference files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional

from .config import EPF_SUFFIX, PREFS_SUFFIXES

logger = logging.getLogger(__name__)


class SourceFormat(Enum):
    """Layout of a settings source."""
    NONE = "none"
    EPF = "epf"
    PREFS = "prefs"


@dataclass
class SourceInspection:
    """What a settings source directory contains."""
    source_dir: Path
    format: SourceFormat
    epf_file: Optional[Path] = None
    prefs_files: List[Path] = field(default_factory=list)

    @property
    def files(self) -> List[Path]:
        """Files that an import would read."""
        if self.format == SourceFormat.EPF:
            return [self.epf_file]
        return list(self.prefs_files)

    @property
    def description(self) -> str:
        if self.format == SourceFormat.EPF:
            return f"combined export {self.epf_file.name}"
        if self.format == SourceFormat.PREFS:
            return f"{len(self.prefs_files)} preference file(s)"
        return "no importable settings"


def has_suffix(path: Path, suffixes: Iterable[str]) -> bool:
    """Case-insensitive suffix check."""
    name = path.name.lower()
    return any(name.endswith(s.lower()) for s in suffixes)


def list_files(source_dir: Path, suffixes: Iterable[str]) -> List[Path]:
    """Regular files directly in ``source_dir`` with a matching suffix, by name."""
    suffixes = tuple(suffixes)
    return sorted(
        (p for p in Path(source_dir).iterdir() if p.is_file() and has_suffix(p, suffixes)),
        key=lambda p: p.name,
    )


def inspect_source(
    source_dir: Path,
    epf_suffix: str = EPF_SUFFIX,
    prefs_suffixes: Iterable[str] = PREFS_SUFFIXES,
) -> SourceInspection:
    """
    Detect the format of a settings source.

    A combined export wins over preference files. With several exports the
    first by file name is used.
    """
    source_dir = Path(source_dir)

    epf_files = list_files(source_dir, [epf_suffix])
    if epf_files:
        if len(epf_files) > 1:
            logger.warning(
                f"{len(epf_files)} exports in {source_dir}, using {epf_files[0].name}"
            )
        return SourceInspection(source_dir, SourceFormat.EPF, epf_file=epf_files[0])

    prefs_files = list_files(source_dir, prefs_suffixes)
    if prefs_files:
        return SourceInspection(source_dir, SourceFormat.PREFS, prefs_files=prefs_files)

    return SourceInspection(source_dir, SourceFormat.NONE)
