"""
Pytest configuration and shared fixtures for the settings importer tests.

Workspaces, settings sources and home directories are built under tmp_path.
"""

import os
import pytest
from pathlib import Path
from typing import Generator
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


SAMPLE_EPF = """\
#Fri Oct 17 09:12:44 CEST 2026
\\!/=
/instance/org.eclipse.jdt.core/org.eclipse.jdt.core.formatter.tabulation.char=space
/instance/org.eclipse.jdt.core/org.eclipse.jdt.core.formatter.tabulation.size=4

# UI settings
/instance/org.eclipse.jdt.ui/formatter_profile=_Team
/instance/org.eclipse.ui.editors/lineNumberRuler=true
/instance/org.eclipse.jdt.core/org.eclipse.jdt.core.compiler.source=17
file_export_version=3.0
"""


# ============ Environment Fixtures ============

@pytest.fixture
def temp_home(tmp_path: Path) -> Generator[Path, None, None]:
    """Provide a temporary home directory for tests."""
    home = tmp_path / "home"
    home.mkdir()

    old_home = os.environ.get('HOME')
    os.environ['HOME'] = str(home)

    yield home

    if old_home:
        os.environ['HOME'] = old_home
    else:
        os.environ.pop('HOME', None)


# ============ Workspace Fixtures ============

@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An Eclipse workspace that has been opened once."""
    ws = tmp_path / "eclipse-workspace"
    (ws / ".metadata/.plugins/org.eclipse.core.runtime/.settings").mkdir(parents=True)
    return ws


@pytest.fixture
def settings_dir(workspace: Path) -> Path:
    return workspace / ".metadata/.plugins/org.eclipse.core.runtime/.settings"


@pytest.fixture
def empty_home(tmp_path: Path) -> Path:
    """A home directory with no Eclipse installs or workspaces."""
    home = tmp_path / "nobody"
    home.mkdir()
    return home


# ============ Settings Source Fixtures ============

@pytest.fixture
def epf_source(tmp_path: Path) -> Path:
    """A settings source holding one combined export."""
    source = tmp_path / "team-epf"
    source.mkdir()
    (source / "team.epf").write_text(SAMPLE_EPF, encoding="utf-8")
    return source


@pytest.fixture
def prefs_source(tmp_path: Path) -> Path:
    """A settings source holding individual preference files."""
    source = tmp_path / "team-prefs"
    source.mkdir()
    (source / "org.eclipse.jdt.core.prefs").write_text(
        "eclipse.preferences.version=1\norg.eclipse.jdt.core.compiler.source=17\n",
        encoding="utf-8",
    )
    (source / "org.eclipse.jdt.ui.preferences").write_text(
        "eclipse.preferences.version=1\nformatter_profile=_Team\nsp_cleanup.format_source_code=true\n",
        encoding="utf-8",
    )
    (source / "README.txt").write_text("not a preference file\n")
    return source


@pytest.fixture
def make_importer(empty_home: Path):
    """Build a SettingsImporter whose discovery looks only at a given home."""
    from eclipse_settings.config import ImporterConfig
    from eclipse_settings.importer import SettingsImporter
    from eclipse_settings.workspace_locator import WorkspaceLocator

    def factory(home: Path = empty_home, **config_kwargs) -> SettingsImporter:
        config = ImporterConfig(**config_kwargs)
        locator = WorkspaceLocator(home=home, default_workspace_names=config.default_workspace_names)
        return SettingsImporter(config, locator=locator)

    return factory


@pytest.fixture
def snapshot_tree():
    """Returns a function mapping relative path -> bytes for every file under a root."""
    def snapshot(root: Path) -> dict:
        if not root.exists():
            return {}
        return {
            str(p.relative_to(root)): p.read_bytes()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }
    return snapshot


# ============ Marker Configuration ============

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "unit: fast unit tests with no external deps"
    )
    config.addinivalue_line(
        "markers", "integration: end-to-end tests against a temporary filesystem"
    )
