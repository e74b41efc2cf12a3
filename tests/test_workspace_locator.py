"""
Tests for Eclipse workspace discovery.
"""

import pytest
from pathlib import Path
from unittest.mock import patch

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def _write_ide_prefs(home: Path, install: str, value: str) -> Path:
    settings = home / ".eclipse" / install / "configuration" / ".settings"
    settings.mkdir(parents=True)
    record = settings / "org.eclipse.ui.ide.prefs"
    record.write_text(
        "MAX_RECENT_WORKSPACES=10\n"
        f"RECENT_WORKSPACES={value}\n"
        "RECENT_WORKSPACES_PROTOCOL=3\n"
        "eclipse.preferences.version=1\n",
        encoding="utf-8",
    )
    return record


class TestParseRecentWorkspaces:
    """Extracting paths from org.eclipse.ui.ide.prefs."""

    @pytest.mark.unit
    def test_comma_separated(self):
        from eclipse_settings.workspace_locator import parse_recent_workspaces

        text = "RECENT_WORKSPACES=/home/dev/ws1,/home/dev/ws2\n"
        assert parse_recent_workspaces(text) == ["/home/dev/ws1", "/home/dev/ws2"]

    @pytest.mark.unit
    def test_eclipse_newline_separator_and_escapes(self):
        from eclipse_settings.workspace_locator import parse_recent_workspaces

        text = "RECENT_WORKSPACES=C\\:\\\\Users\\\\dev\\\\ws\\nC\\:\\\\Users\\\\dev\\\\new\n"
        assert parse_recent_workspaces(text) == [
            "C:\\Users\\dev\\ws",
            "C:\\Users\\dev\\new",
        ]

    @pytest.mark.unit
    def test_ignores_other_keys_and_duplicates(self):
        from eclipse_settings.workspace_locator import parse_recent_workspaces

        text = (
            "MAX_RECENT_WORKSPACES=5\n"
            "RECENT_WORKSPACES=/a,/b,/a\n"
            "SHOW_WORKSPACE_SELECTION_DIALOG=true\n"
        )
        assert parse_recent_workspaces(text) == ["/a", "/b"]

    @pytest.mark.unit
    def test_no_record(self):
        from eclipse_settings.workspace_locator import parse_recent_workspaces

        assert parse_recent_workspaces("eclipse.preferences.version=1\n") == []
        assert parse_recent_workspaces("RECENT_WORKSPACES=\n") == []


class TestWorkspaceLocator:
    """Discovery against a fake home directory."""

    @pytest.mark.unit
    def test_empty_home_finds_nothing(self, empty_home: Path):
        from eclipse_settings.workspace_locator import WorkspaceLocator

        assert WorkspaceLocator(home=empty_home).discover() == []

    @pytest.mark.unit
    def test_default_workspace_directory(self, tmp_path: Path):
        from eclipse_settings.workspace_locator import WorkspaceLocator

        home = tmp_path / "home"
        (home / "eclipse-workspace").mkdir(parents=True)

        assert WorkspaceLocator(home=home).discover() == [home / "eclipse-workspace"]

    @pytest.mark.unit
    def test_recent_workspaces_only_existing(self, tmp_path: Path):
        from eclipse_settings.workspace_locator import WorkspaceLocator

        home = tmp_path / "home"
        home.mkdir()
        existing = tmp_path / "projects" / "ws"
        existing.mkdir(parents=True)
        _write_ide_prefs(home, "org.eclipse.platform_4.30.0_123", f"{existing},{tmp_path / 'gone'}")

        assert WorkspaceLocator(home=home).discover() == [existing]

    @pytest.mark.unit
    def test_recent_and_default_are_deduplicated(self, tmp_path: Path):
        from eclipse_settings.workspace_locator import WorkspaceLocator

        home = tmp_path / "home"
        default = home / "workspace"
        default.mkdir(parents=True)
        other = tmp_path / "other"
        other.mkdir()
        _write_ide_prefs(home, "install", f"{default}\\n{other}")

        found = WorkspaceLocator(home=home).discover()

        assert found == [default, other]

    @pytest.mark.unit
    def test_oomph_install_location(self, tmp_path: Path):
        from eclipse_settings.workspace_locator import WorkspaceLocator

        home = tmp_path / "home"
        ws = tmp_path / "ws"
        ws.mkdir()
        settings = home / "eclipse" / "java-2026-09" / "eclipse" / "configuration" / ".settings"
        settings.mkdir(parents=True)
        (settings / "org.eclipse.ui.ide.prefs").write_text(f"RECENT_WORKSPACES={ws}\n")

        assert WorkspaceLocator(home=home).discover() == [ws]

    @pytest.mark.unit
    def test_unreadable_record_is_skipped(self, tmp_path: Path):
        from eclipse_settings.workspace_locator import WorkspaceLocator

        home = tmp_path / "home"
        (home / "workspace").mkdir(parents=True)
        record = _write_ide_prefs(home, "install", "/whatever")
        locator = WorkspaceLocator(home=home)

        with patch.object(Path, "read_text", side_effect=OSError("denied")):
            assert locator.read_recent_record(record) == []

        assert locator.discover() == [home / "workspace"]

    @pytest.mark.unit
    def test_custom_default_names(self, tmp_path: Path):
        from eclipse_settings.workspace_locator import WorkspaceLocator

        home = tmp_path / "home"
        (home / "dev-ws").mkdir(parents=True)
        (home / "workspace").mkdir()

        found = WorkspaceLocator(home=home, default_workspace_names=["dev-ws"]).discover()

        assert found == [home / "dev-ws"]

    @pytest.mark.unit
    def test_files_are_not_workspaces(self, tmp_path: Path):
        from eclipse_settings.workspace_locator import WorkspaceLocator

        home = tmp_path / "home"
        home.mkdir()
        (home / "workspace").write_text("not a directory")

        assert WorkspaceLocator(home=home).discover() == []


class TestWorkspace:

    @pytest.mark.unit
    def test_has_metadata(self, workspace: Path, tmp_path: Path):
        from eclipse_settings.workspace_locator import Workspace

        assert Workspace(workspace).has_metadata is True
        fresh = tmp_path / "fresh"
        fresh.mkdir()
        assert Workspace(fresh).has_metadata is False
        assert Workspace(fresh).name == "fresh"
