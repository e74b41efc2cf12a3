#!/usr/bin/env python3
"""
Eclipse Settings Importer

Applies a team's settings source to a local Eclipse workspace:

    resolve workspace -> resolve source -> detect format -> confirm
    -> backup (optional) -> apply -> report

The importer never prompts. Workspace choice and confirmation come in as
callbacks so the interactive shell stays in the CLI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from common.decorators import timed
from common.exceptions import (
    InvalidFormatError,
    NoWorkspaceError,
    SourceNotFoundError,
    WorkspaceNotFoundError,
    WorkspaceSelectionError,
)
from common.logging_config import LogContext
from .backup import Backup, BackupManager
from .config import ImporterConfig
from .epf_converter import (
    SkippedLine, convert, parse_epf, read_preferences_file, read_settings_text,
)
from .prefs_copier import copy_preference_files
from .source_inspector import SourceFormat, SourceInspection, has_suffix, inspect_source
from .workspace_locator import Workspace, WorkspaceLocator

logger = logging.getLogger(__name__)

WorkspaceSelector = Callable[[List[Path]], int]
Confirmation = Callable[["ImportPlan"], bool]


class ImportStatus(Enum):
    """How an import ended when it did not fail."""
    APPLIED = "applied"
    DECLINED = "declined"


@dataclass
class ImportPlan:
    """Everything resolved before anything is written."""
    workspace: Path
    settings_dir: Path
    source: SourceInspection
    backup: bool = False


@dataclass
class ImportResult:
    """Outcome of an import."""
    status: ImportStatus
    plan: ImportPlan
    files_applied: List[Path] = field(default_factory=list)
    backup: Optional[Backup] = None
    skipped_lines: List[SkippedLine] = field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.status == ImportStatus.APPLIED

    @property
    def file_count(self) -> int:
        return len(self.files_applied)


@dataclass
class ValidationReport:
    """Which expected components have a preference file."""
    workspace: Path
    present: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def present_count(self) -> int:
        return len(self.present)

    @property
    def total_expected(self) -> int:
        return len(self.present) + len(self.missing)

    @property
    def complete(self) -> bool:
        return not self.missing


@dataclass
class PreferenceFileInfo:
    path: Path
    component: str
    entry_count: int


@dataclass
class WorkspaceSummary:
    """Current settings state of a workspace."""
    workspace: Path
    settings_dir: Path
    has_metadata: bool
    files: List[PreferenceFileInfo] = field(default_factory=list)
    backups: List[Backup] = field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return sum(f.entry_count for f in self.files)


@dataclass
class SourceDescription:
    """What a settings source would apply."""
    inspection: SourceInspection
    components: Dict[str, int] = field(default_factory=dict)
    skipped_lines: List[SkippedLine] = field(default_factory=list)

    @property
    def format(self) -> SourceFormat:
        return self.inspection.format


class SettingsImporter:
    """
    Imports team Eclipse settings into a workspace.

    Args:
        config: Importer configuration, including the default source path.
        locator: Workspace discovery (defaults to the current user's home).
        backups: Backup manager.
    """

    def __init__(
        self,
        config: Optional[ImporterConfig] = None,
        locator: Optional[WorkspaceLocator] = None,
        backups: Optional[BackupManager] = None,
    ):
        self.config = config or ImporterConfig()
        self.locator = locator or WorkspaceLocator(
            default_workspace_names=self.config.default_workspace_names
        )
        self.backups = backups or BackupManager()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def locate_workspaces(self) -> List[Path]:
        """Discover candidate workspaces."""
        return self.locator.discover()

    def resolve_workspace(
        self,
        workspace_path: Optional[Path] = None,
        select_workspace: Optional[WorkspaceSelector] = None,
    ) -> Path:
        """
        Pick the workspace to import into.

        Raises:
            WorkspaceNotFoundError: Explicit path does not exist.
            NoWorkspaceError: Nothing supplied and nothing discovered.
            WorkspaceSelectionError: Several candidates and no valid choice.
        """
        if workspace_path is not None:
            workspace_path = Path(workspace_path).expanduser()
            if not workspace_path.is_dir():
                raise WorkspaceNotFoundError(str(workspace_path))
            return workspace_path

        candidates = self.locate_workspaces()
        if not candidates:
            raise NoWorkspaceError()
        if len(candidates) == 1:
            logger.info(f"Using workspace {candidates[0]}")
            return candidates[0]

        if select_workspace is None:
            raise WorkspaceSelectionError(None, len(candidates))
        index = select_workspace(candidates)
        # bool is an int subclass but never a selection
        valid = isinstance(index, int) and not isinstance(index, bool)
        if not valid or not 0 <= index < len(candidates):
            raise WorkspaceSelectionError(index, len(candidates))
        return candidates[index]

    def resolve_source(self, source_path: Optional[Path] = None) -> SourceInspection:
        """
        Check the settings source and detect its format.

        Raises:
            SourceNotFoundError: Source directory does not exist.
            InvalidFormatError: Source has no export and no preference files.
        """
        source_path = source_path or self.config.source_path
        if source_path is None:
            raise SourceNotFoundError("<not configured>")

        source_path = Path(source_path).expanduser()
        if not source_path.is_dir():
            raise SourceNotFoundError(str(source_path))

        inspection = inspect_source(
            source_path,
            epf_suffix=self.config.epf_suffix,
            prefs_suffixes=self.config.prefs_suffixes,
        )
        if inspection.format == SourceFormat.NONE:
            raise InvalidFormatError(str(source_path))
        logger.debug(f"Source {source_path}: {inspection.description}")
        return inspection

    def plan(
        self,
        workspace_path: Optional[Path] = None,
        source_path: Optional[Path] = None,
        backup: bool = False,
        select_workspace: Optional[WorkspaceSelector] = None,
    ) -> ImportPlan:
        """Resolve workspace and source without writing anything."""
        workspace = self.resolve_workspace(workspace_path, select_workspace)
        source = self.resolve_source(source_path)
        return ImportPlan(
            workspace=workspace,
            settings_dir=self.config.settings_dir(workspace),
            source=source,
            backup=backup,
        )

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    @timed
    def import_settings(
        self,
        workspace_path: Optional[Path] = None,
        source_path: Optional[Path] = None,
        backup: bool = False,
        force: bool = False,
        select_workspace: Optional[WorkspaceSelector] = None,
        confirm: Optional[Confirmation] = None,
    ) -> ImportResult:
        """
        Import settings into a workspace.

        Args:
            workspace_path: Target workspace; discovered when omitted.
            source_path: Settings source; defaults to ``config.source_path``.
            backup: Snapshot the settings directory before writing.
            force: Skip confirmation.
            select_workspace: Picks an index when several workspaces are found.
            confirm: Asked before writing unless ``force``. Without it the
                import is declined.

        Returns:
            ImportResult with status APPLIED or DECLINED.

        Raises:
            SettingsError: Any resolution, backup or conversion failure.
        """
        plan = self.plan(workspace_path, source_path, backup, select_workspace)

        with LogContext(workspace=str(plan.workspace), source=str(plan.source.source_dir)):
            if not force:
                if confirm is None or not confirm(plan):
                    logger.info("Import declined, no changes made")
                    return ImportResult(status=ImportStatus.DECLINED, plan=plan)

            result = ImportResult(status=ImportStatus.APPLIED, plan=plan)

            if plan.backup:
                result.backup = self.backups.snapshot(plan.settings_dir, plan.workspace)

            # No rollback: a failure here leaves earlier files written
            if plan.source.format == SourceFormat.EPF:
                conversion = convert(plan.source.epf_file, plan.settings_dir)
                result.files_applied = conversion.files_written
                result.skipped_lines = conversion.skipped
            else:
                result.files_applied = copy_preference_files(
                    plan.source.source_dir,
                    plan.settings_dir,
                    self.config.prefs_suffixes,
                )

            logger.info(
                f"Applied {result.file_count} preference file(s) to {plan.workspace}"
            )
            return result

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _existing_workspace(self, workspace_path: Path) -> Path:
        workspace_path = Path(workspace_path).expanduser()
        if not workspace_path.is_dir():
            raise WorkspaceNotFoundError(str(workspace_path))
        return workspace_path

    def _component_name(self, path: Path) -> str:
        name = path.name
        for suffix in self.config.prefs_suffixes:
            if name.lower().endswith(suffix.lower()):
                return name[: -len(suffix)]
        return path.stem

    def _preference_files(self, settings_dir: Path) -> List[Path]:
        if not settings_dir.is_dir():
            return []
        return sorted(
            (p for p in settings_dir.iterdir()
             if p.is_file() and has_suffix(p, self.config.prefs_suffixes)),
            key=lambda p: p.name,
        )

    def validate_applied(self, workspace_path: Path) -> ValidationReport:
        """
        Check the workspace against the expected component checklist.

        Raises:
            WorkspaceNotFoundError: Workspace does not exist.
        """
        workspace = self._existing_workspace(workspace_path)
        settings_dir = self.config.settings_dir(workspace)
        components = {self._component_name(p) for p in self._preference_files(settings_dir)}

        report = ValidationReport(workspace=workspace)
        for component in self.config.expected_components:
            if component in components:
                report.present.append(component)
            else:
                report.missing.append(component)

        logger.info(
            f"{report.present_count}/{report.total_expected} expected components present"
        )
        return report

    def summarize(self, workspace_path: Path) -> WorkspaceSummary:
        """
        Describe the preference files and backups of a workspace.

        Raises:
            WorkspaceNotFoundError: Workspace does not exist.
        """
        workspace = self._existing_workspace(workspace_path)
        settings_dir = self.config.settings_dir(workspace)

        summary = WorkspaceSummary(
            workspace=workspace,
            settings_dir=settings_dir,
            has_metadata=Workspace(workspace).has_metadata,
            backups=self.backups.list_backups(settings_dir),
        )
        for path in self._preference_files(settings_dir):
            summary.files.append(PreferenceFileInfo(
                path=path,
                component=self._component_name(path),
                entry_count=len(read_preferences_file(path)),
            ))
        return summary

    def describe_source(self, source_path: Optional[Path] = None) -> SourceDescription:
        """
        Describe what a settings source contains.

        Raises:
            SourceNotFoundError: Source directory does not exist.
            InvalidFormatError: Source has nothing importable.
        """
        inspection = self.resolve_source(source_path)
        description = SourceDescription(inspection=inspection)

        if inspection.format == SourceFormat.EPF:
            parsed = parse_epf(read_settings_text(inspection.epf_file))
            description.components = {
                component: len(entries) for component, entries in parsed.components.items()
            }
            description.skipped_lines = parsed.skipped
        else:
            for path in inspection.prefs_files:
                description.components[self._component_name(path)] = len(
                    read_preferences_file(path)
                )
        return description
