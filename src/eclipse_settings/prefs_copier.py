"""
Verbatim copy of individual preference files into a settings directory.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, List

from common.exceptions import PreferenceFilesNotFoundError
from .config import PREFS_SUFFIXES
from .source_inspector import list_files

logger = logging.getLogger(__name__)


def copy_preference_files(
    source_dir: Path,
    dest_settings_dir: Path,
    suffixes: Iterable[str] = PREFS_SUFFIXES,
) -> List[Path]:
    """
    Copy every preference file in ``source_dir`` into the settings directory.

    Files are overwritten by name; other files in the destination are kept.

    Returns:
        Paths written, in file name order.

    Raises:
        PreferenceFilesNotFoundError: ``source_dir`` has no preference files.
    """
    source_dir = Path(source_dir)
    dest_settings_dir = Path(dest_settings_dir)

    files = list_files(source_dir, suffixes) if source_dir.is_dir() else []
    if not files:
        raise PreferenceFilesNotFoundError(str(source_dir))

    dest_settings_dir.mkdir(parents=True, exist_ok=True)

    copied = []
    for source in files:
        target = dest_settings_dir / source.name
        shutil.copy2(source, target)
        logger.debug(f"Copied {source.name}")
        copied.append(target)

    logger.info(f"Copied {len(copied)} preference file(s) to {dest_settings_dir}")
    return copied
