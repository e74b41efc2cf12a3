"""
Importer configuration - where settings come from and where they go.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from common.exceptions import InvalidConfigError
from utils.atomic_write import atomic_write_json

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "eclipse-settings" / "config.json"

# Relative to the workspace root
SETTINGS_SUBPATH = ".metadata/.plugins/org.eclipse.core.runtime/.settings"
METADATA_DIR = ".metadata"

EPF_SUFFIX = ".epf"
PREFS_SUFFIX = ".preferences"
# Eclipse itself writes ".prefs"; both are accepted as copy input
PREFS_SUFFIXES = (PREFS_SUFFIX, ".prefs")

DEFAULT_EXPECTED_COMPONENTS = (
    "org.eclipse.core.resources",
    "org.eclipse.core.runtime",
    "org.eclipse.jdt.core",
    "org.eclipse.jdt.ui",
    "org.eclipse.jdt.launching",
    "org.eclipse.ui.editors",
    "org.eclipse.ui.workbench",
)

DEFAULT_WORKSPACE_NAMES = ("eclipse-workspace", "workspace")


@dataclass
class ImporterConfig:
    """Configuration passed to the importer at construction."""
    source_path: Optional[Path] = None
    settings_subpath: str = SETTINGS_SUBPATH
    epf_suffix: str = EPF_SUFFIX
    prefs_suffixes: Tuple[str, ...] = PREFS_SUFFIXES
    expected_components: List[str] = field(
        default_factory=lambda: list(DEFAULT_EXPECTED_COMPONENTS)
    )
    default_workspace_names: List[str] = field(
        default_factory=lambda: list(DEFAULT_WORKSPACE_NAMES)
    )

    def settings_dir(self, workspace: Path) -> Path:
        """Settings directory inside a workspace."""
        return Path(workspace) / self.settings_subpath

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "source_path": str(self.source_path) if self.source_path else None,
            "settings_subpath": self.settings_subpath,
            "epf_suffix": self.epf_suffix,
            "prefs_suffixes": list(self.prefs_suffixes),
            "expected_components": list(self.expected_components),
            "default_workspace_names": list(self.default_workspace_names),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ImporterConfig":
        """Create ImporterConfig from dictionary."""
        if not isinstance(data, dict):
            raise InvalidConfigError("config", data, "expected a JSON object")

        known = set(cls().to_dict())
        for key in data:
            if key not in known:
                raise InvalidConfigError(key, data[key], "unknown setting")

        config = cls()

        if data.get("source_path"):
            config.source_path = Path(data["source_path"]).expanduser()
        if "settings_subpath" in data:
            subpath = data["settings_subpath"]
            if not subpath or Path(subpath).is_absolute():
                raise InvalidConfigError(
                    "settings_subpath", subpath, "must be a relative path"
                )
            config.settings_subpath = subpath
        if "epf_suffix" in data:
            config.epf_suffix = _check_suffix("epf_suffix", data["epf_suffix"])
        if "prefs_suffixes" in data:
            suffixes = data["prefs_suffixes"]
            if not isinstance(suffixes, list) or not suffixes:
                raise InvalidConfigError(
                    "prefs_suffixes", suffixes, "must be a non-empty list"
                )
            config.prefs_suffixes = tuple(
                _check_suffix("prefs_suffixes", s) for s in suffixes
            )
        if "expected_components" in data:
            config.expected_components = _check_names(
                "expected_components", data["expected_components"]
            )
        if "default_workspace_names" in data:
            config.default_workspace_names = _check_names(
                "default_workspace_names", data["default_workspace_names"]
            )

        return config


def _check_names(field_name: str, value) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise InvalidConfigError(field_name, value, "must be a list of names")
    return list(value)


def _check_suffix(field_name: str, value) -> str:
    if not isinstance(value, str) or not value.startswith("."):
        raise InvalidConfigError(field_name, value, "suffix must start with '.'")
    return value


def load_config(path: Optional[Path] = None) -> ImporterConfig:
    """
    Load configuration from a JSON file.

    A missing file yields the defaults.

    Raises:
        InvalidConfigError: File is not valid JSON or has bad values.
    """
    path = path or DEFAULT_CONFIG_PATH
    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return ImporterConfig()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfigError(str(path), "", f"not valid JSON: {e}") from e

    logger.debug(f"Loaded config from {path}")
    return ImporterConfig.from_dict(data)


def save_config(config: ImporterConfig, path: Optional[Path] = None) -> Path:
    """Write configuration atomically and return the path written."""
    path = path or DEFAULT_CONFIG_PATH
    atomic_write_json(path, config.to_dict())
    logger.info(f"Saved config to {path}")
    return path
