"""
Eclipse Team Settings Importer

Copies a team's exported Eclipse preferences into a local workspace:
- Workspace discovery
- Combined export (.epf) conversion to per-plugin preference files
- Verbatim preference file copy
- Settings backups
"""

from .config import ImporterConfig, load_config, save_config
from .workspace_locator import WorkspaceLocator, Workspace
from .source_inspector import SourceFormat, SourceInspection, inspect_source
from .epf_converter import (
    ConversionResult,
    SkippedLine,
    convert,
    parse_epf,
    read_preferences_file,
)
from .prefs_copier import copy_preference_files
from .backup import Backup, BackupManager
from .importer import (
    ImportPlan,
    ImportResult,
    ImportStatus,
    SettingsImporter,
    SourceDescription,
    ValidationReport,
    WorkspaceSummary,
)

__version__ = "1.0.0"

__all__ = [
    "ImporterConfig",
    "load_config",
    "save_config",
    "WorkspaceLocator",
    "Workspace",
    "SourceFormat",
    "SourceInspection",
    "inspect_source",
    "ConversionResult",
    "SkippedLine",
    "convert",
    "parse_epf",
    "read_preferences_file",
    "copy_preference_files",
    "Backup",
    "BackupManager",
    "ImportPlan",
    "ImportResult",
    "ImportStatus",
    "SettingsImporter",
    "SourceDescription",
    "ValidationReport",
    "WorkspaceSummary",
]
