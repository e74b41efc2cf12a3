"""
Common utilities for the Eclipse settings importer.

Exception hierarchy, logging setup and error-handling decorators.
"""

from .exceptions import (
    SettingsError, WorkspaceError, NoWorkspaceError, WorkspaceNotFoundError,
    WorkspaceSelectionError, SourceError, SourceNotFoundError, InvalidFormatError,
    ConversionInputMissingError, InvalidEncodingError, PreferenceFilesNotFoundError, BackupError,
    ConfigError, InvalidConfigError,
)
from .decorators import handle_errors, timed
from .logging_config import setup_logging, LogContext, JSONFormatter, ColoredFormatter

__all__ = [
    # Exceptions
    "SettingsError", "WorkspaceError", "NoWorkspaceError", "WorkspaceNotFoundError",
    "WorkspaceSelectionError", "SourceError", "SourceNotFoundError", "InvalidFormatError",
    "ConversionInputMissingError", "InvalidEncodingError", "PreferenceFilesNotFoundError", "BackupError",
    "ConfigError", "InvalidConfigError",
    # Decorators
    "handle_errors", "timed",
    # Logging
    "setup_logging", "LogContext", "JSONFormatter", "ColoredFormatter",
]
