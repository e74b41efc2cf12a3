"""
Eclipse Settings Exception Hierarchy

Provides clear, actionable error messages with structured information
for logging, user feedback, and programmatic error handling.
"""

from typing import Optional, Dict, Any


class SettingsError(Exception):
    """
    Base exception for all settings import errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context as key-value pairs
        cause: Original exception that caused this error
        recoverable: Whether the error is recoverable
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        self.recoverable = recoverable

    def __str__(self):
        s = f"[{self.code}] {self.message}"
        if self.details:
            s += f" (details: {self.details})"
        if self.cause:
            s += f" caused by: {self.cause}"
        return s

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# Workspace errors
# =============================================================================

class WorkspaceError(SettingsError):
    """Base for workspace resolution errors."""
    pass


class NoWorkspaceError(WorkspaceError):
    """No workspace was supplied and none could be discovered."""
    def __init__(self):
        super().__init__(
            "No Eclipse workspace found. Pass the workspace path explicitly.",
            code="NO_WORKSPACE",
        )


class WorkspaceNotFoundError(WorkspaceError):
    """Explicitly supplied workspace does not exist."""
    def __init__(self, path: str):
        super().__init__(
            f"Workspace not found: {path}",
            code="WORKSPACE_NOT_FOUND",
            details={"path": path},
        )


class WorkspaceSelectionError(WorkspaceError):
    """Workspace choice is missing or out of range."""
    def __init__(self, selection: Optional[int], candidates: int):
        if selection is None:
            message = f"{candidates} workspaces found, a selection is required"
        else:
            message = f"Invalid workspace selection {selection}, expected 0-{candidates - 1}"
        super().__init__(
            message,
            code="INVALID_WORKSPACE_SELECTION",
            details={"selection": selection, "candidates": candidates},
        )


# =============================================================================
# Settings source errors
# =============================================================================

class SourceError(SettingsError):
    """Base for settings source errors."""
    pass


class SourceNotFoundError(SourceError):
    """Settings source directory does not exist."""
    def __init__(self, path: str):
        super().__init__(
            f"Settings source not found: {path}",
            code="SOURCE_NOT_FOUND",
            details={"path": path},
        )


class InvalidFormatError(SourceError):
    """Source holds neither a combined export nor preference files."""
    def __init__(self, path: str):
        super().__init__(
            f"No .epf export or preference files found in {path}",
            code="INVALID_FORMAT",
            details={"path": path},
        )


class ConversionInputMissingError(SourceError):
    """Combined export file is missing at read time."""
    def __init__(self, path: str):
        super().__init__(
            f"Preference export not found: {path}",
            code="CONVERSION_INPUT_MISSING",
            details={"path": path},
        )


class InvalidEncodingError(SourceError):
    """Settings file is not valid UTF-8."""
    def __init__(self, path: str, position: int, cause: Optional[Exception] = None):
        super().__init__(
            f"{path} is not valid UTF-8 (byte {position}); save it as UTF-8 and retry",
            code="INVALID_ENCODING",
            details={"path": path, "position": position},
            cause=cause,
        )


class PreferenceFilesNotFoundError(SourceError):
    """Source directory has no individual preference files."""
    def __init__(self, path: str):
        super().__init__(
            f"No preference files to copy in {path}",
            code="PREFERENCE_FILES_NOT_FOUND",
            details={"path": path},
        )


# =============================================================================
# Backup errors
# =============================================================================

class BackupError(SettingsError):
    """Snapshot of the settings directory failed."""
    def __init__(self, path: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Failed to back up settings to {path}: {reason}",
            code="BACKUP_FAILED",
            details={"path": path, "reason": reason},
            cause=cause,
        )


# =============================================================================
# Configuration errors
# =============================================================================

class ConfigError(SettingsError):
    """Base for configuration errors."""
    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration."""
    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration: {field}={value}: {reason}",
            code="INVALID_CONFIG",
            details={"field": field, "value": str(value), "reason": reason},
        )
