#!/usr/bin/env python3
"""
Eclipse Preference Export Converter

Turns a combined preference export (.epf, as written by File > Export >
Preferences) into the per-plugin preference files Eclipse keeps in a
workspace's settings directory.

Export entries look like:

    /instance/org.eclipse.jdt.core/org.eclipse.jdt.core.formatter.tabulation.size=4

and become the line ``org.eclipse.jdt.core.formatter.tabulation.size=4`` in
``org.eclipse.jdt.core.preferences``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from common.decorators import timed
from common.exceptions import ConversionInputMissingError, InvalidEncodingError
from utils.atomic_write import atomic_write_text
from .config import PREFS_SUFFIX

logger = logging.getLogger(__name__)

PREFERENCES_VERSION_HEADER = "eclipse.preferences.version=1"

# Component runs to the first "/", key to the last "="
EPF_ENTRY_PATTERN = re.compile(r"^/instance/([^/]+)/(.*)=(.*)$")

# Lines every Eclipse export carries that are not preferences
EXPORT_METADATA_PATTERN = re.compile(r"^(file_export_version=.*|\\!/=.*)$")

REASON_METADATA = "export metadata"
REASON_MALFORMED = "not an /instance/<component>/<key>=<value> entry"


@dataclass
class SkippedLine:
    """An export line that produced no preference."""
    line_number: int
    text: str
    reason: str

    def __str__(self):
        return f"line {self.line_number}: {self.text!r} ({self.reason})"


@dataclass
class ParsedExport:
    """Preferences grouped by component, in order of first appearance."""
    components: Dict[str, List[Tuple[str, str]]] = field(default_factory=dict)
    skipped: List[SkippedLine] = field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return sum(len(entries) for entries in self.components.values())

    @property
    def warnings(self) -> List[SkippedLine]:
        """Skipped lines that were not known export metadata."""
        return [s for s in self.skipped if s.reason != REASON_METADATA]


@dataclass
class ConversionResult:
    """Outcome of converting one export."""
    source: Path
    files_written: List[Path] = field(default_factory=list)
    entry_count: int = 0
    skipped: List[SkippedLine] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.files_written)


def parse_epf(text: str) -> ParsedExport:
    """
    Parse the text of a combined preference export.

    Blank lines and ``#`` comments are ignored. Any other line that is not an
    ``/instance/`` entry is reported in ``skipped`` instead of failing.
    """
    parsed = ParsedExport()

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        match = EPF_ENTRY_PATTERN.match(line)
        if match is None:
            if EXPORT_METADATA_PATTERN.match(line):
                logger.debug(f"Ignoring export metadata on line {line_number}: {line}")
                parsed.skipped.append(SkippedLine(line_number, line, REASON_METADATA))
            else:
                logger.warning(f"Skipping line {line_number}: {line}")
                parsed.skipped.append(SkippedLine(line_number, line, REASON_MALFORMED))
            continue

        component, key, value = match.groups()
        parsed.components.setdefault(component, []).append((key, value))

    return parsed


def read_settings_text(path: Path) -> str:
    """
    Read an export or preference file as UTF-8.

    Raises:
        InvalidEncodingError: The file holds bytes that are not UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncodingError(str(path), e.start, cause=e) from e


def render_preferences(entries: List[Tuple[str, str]]) -> str:
    """Render one component's preference file."""
    lines = [PREFERENCES_VERSION_HEADER]
    lines.extend(f"{key}={value}" for key, value in entries)
    return "\n".join(lines) + "\n"


@timed
def convert(epf_path: Path, dest_settings_dir: Path) -> ConversionResult:
    """
    Convert a combined export into per-component preference files.

    Existing files of the same name are overwritten. Components missing from
    the export are left alone.

    Raises:
        ConversionInputMissingError: The export file does not exist.
        InvalidEncodingError: The export is not UTF-8.
    """
    epf_path = Path(epf_path)
    dest_settings_dir = Path(dest_settings_dir)

    try:
        text = read_settings_text(epf_path)
    except FileNotFoundError as e:
        raise ConversionInputMissingError(str(epf_path)) from e

    parsed = parse_epf(text)
    result = ConversionResult(
        source=epf_path,
        entry_count=parsed.entry_count,
        skipped=parsed.skipped,
    )

    dest_settings_dir.mkdir(parents=True, exist_ok=True)
    for component, entries in parsed.components.items():
        target = dest_settings_dir / f"{component}{PREFS_SUFFIX}"
        atomic_write_text(target, render_preferences(entries))
        logger.debug(f"Wrote {len(entries)} preference(s) to {target.name}")
        result.files_written.append(target)

    if parsed.warnings:
        logger.warning(
            f"{len(parsed.warnings)} line(s) in {epf_path.name} were not converted"
        )
    logger.info(
        f"Converted {result.entry_count} preference(s) into {result.file_count} file(s)"
    )
    return result


def read_preferences_file(path: Path) -> List[Tuple[str, str]]:
    """
    Read the key=value entries of a preference file.

    The leading version header and comment lines are not entries.
    """
    lines = read_settings_text(Path(path)).splitlines()
    if lines and lines[0].strip() == PREFERENCES_VERSION_HEADER:
        lines = lines[1:]

    entries = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.rpartition("=")
        if sep:
            entries.append((key, value))
    return entries
