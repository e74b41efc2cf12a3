#!/usr/bin/env python3
"""
Settings Backup Manager

Takes timestamped copies of a workspace's settings directory before an
import overwrites it. Backups sit next to the settings directory and are
never pruned automatically.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from common.exceptions import BackupError

logger = logging.getLogger(__name__)

BACKUP_MARKER = ".backup-"
TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


@dataclass
class Backup:
    """A snapshot of a settings directory."""
    path: Path
    timestamp: datetime

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def age_str(self) -> str:
        """Get human-readable age."""
        delta = datetime.now() - self.timestamp
        if delta.days > 0:
            return f"{delta.days} days ago"
        elif delta.seconds > 3600:
            return f"{delta.seconds // 3600} hours ago"
        elif delta.seconds > 60:
            return f"{delta.seconds // 60} minutes ago"
        else:
            return "Just now"


class BackupManager:
    """
    Creates and lists settings backups.

    A backup of ``.../.settings`` is written to
    ``.../.settings.backup-YYYYMMDD-HHMMSS``. Two backups within the same
    second collide and the second one fails.
    """

    def __init__(self, clock=datetime.now):
        self._clock = clock

    def backup_path(self, settings_dir: Path, timestamp: datetime) -> Path:
        return settings_dir.with_name(
            f"{settings_dir.name}{BACKUP_MARKER}{timestamp.strftime(TIMESTAMP_FORMAT)}"
        )

    def snapshot(self, settings_dir: Path, workspace_root: Path) -> Optional[Backup]:
        """
        Copy the settings directory to a timestamped sibling.

        Args:
            settings_dir: Directory to back up.
            workspace_root: Workspace the directory belongs to (for reporting).

        Returns:
            The backup, or None if there was nothing to back up.

        Raises:
            BackupError: The copy failed or the backup already exists.
        """
        settings_dir = Path(settings_dir)
        if not settings_dir.is_dir():
            logger.info("No existing settings to back up")
            return None

        timestamp = self._clock().replace(microsecond=0)
        target = self.backup_path(settings_dir, timestamp)
        if target.exists():
            raise BackupError(str(target), "backup already exists")

        try:
            shutil.copytree(settings_dir, target)
        except (OSError, shutil.Error) as e:
            raise BackupError(str(target), str(e), cause=e) from e

        try:
            shown = target.relative_to(workspace_root)
        except ValueError:
            shown = target
        logger.info(f"Backed up settings to {shown}")
        return Backup(path=target, timestamp=timestamp)

    def list_backups(self, settings_dir: Path) -> List[Backup]:
        """
        List backups of a settings directory.

        Returns:
            Backups sorted by timestamp, newest first.
        """
        settings_dir = Path(settings_dir)
        parent = settings_dir.parent
        if not parent.is_dir():
            return []

        prefix = f"{settings_dir.name}{BACKUP_MARKER}"
        backups = []
        for entry in parent.iterdir():
            if not entry.is_dir() or not entry.name.startswith(prefix):
                continue
            try:
                timestamp = datetime.strptime(entry.name[len(prefix):], TIMESTAMP_FORMAT)
            except ValueError:
                logger.debug(f"Not a backup directory: {entry.name}")
                continue
            backups.append(Backup(path=entry, timestamp=timestamp))

        backups.sort(key=lambda b: b.timestamp, reverse=True)
        return backups
