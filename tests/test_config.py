"""
Tests for importer configuration.
"""

import json
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class TestImporterConfig:

    @pytest.mark.unit
    def test_defaults(self, workspace: Path):
        from eclipse_settings.config import ImporterConfig

        config = ImporterConfig()

        assert config.source_path is None
        assert config.epf_suffix == ".epf"
        assert ".preferences" in config.prefs_suffixes
        assert "org.eclipse.jdt.core" in config.expected_components
        assert config.settings_dir(workspace) == (
            workspace / ".metadata/.plugins/org.eclipse.core.runtime/.settings"
        )

    @pytest.mark.unit
    def test_dict_round_trip(self, tmp_path: Path):
        from eclipse_settings.config import ImporterConfig

        config = ImporterConfig(
            source_path=tmp_path / "team",
            expected_components=["a.b"],
            default_workspace_names=["ws"],
        )

        restored = ImporterConfig.from_dict(config.to_dict())

        assert restored == config

    @pytest.mark.unit
    def test_unknown_key_rejected(self):
        from eclipse_settings.config import ImporterConfig
        from common.exceptions import InvalidConfigError

        with pytest.raises(InvalidConfigError) as exc_info:
            ImporterConfig.from_dict({"sauce_path": "/tmp"})
        assert exc_info.value.details["field"] == "sauce_path"

    @pytest.mark.unit
    @pytest.mark.parametrize("data", [
        {"settings_subpath": "/absolute/path"},
        {"epf_suffix": "epf"},
        {"prefs_suffixes": []},
        {"prefs_suffixes": ["prefs"]},
        {"expected_components": "org.eclipse.jdt.core"},
        {"expected_components": ["org.eclipse.jdt.core", 7]},
        {"default_workspace_names": "workspace"},
        {"default_workspace_names": [""]},
    ])
    def test_bad_values_rejected(self, data):
        from eclipse_settings.config import ImporterConfig
        from common.exceptions import InvalidConfigError

        with pytest.raises(InvalidConfigError):
            ImporterConfig.from_dict(data)

    @pytest.mark.unit
    def test_not_an_object_rejected(self):
        from eclipse_settings.config import ImporterConfig
        from common.exceptions import InvalidConfigError

        with pytest.raises(InvalidConfigError):
            ImporterConfig.from_dict(["source_path"])


class TestLoadSaveConfig:

    @pytest.mark.unit
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        from eclipse_settings.config import ImporterConfig, load_config

        assert load_config(tmp_path / "absent.json") == ImporterConfig()

    @pytest.mark.unit
    def test_save_then_load(self, tmp_path: Path):
        from eclipse_settings.config import ImporterConfig, load_config, save_config

        path = tmp_path / "conf" / "config.json"
        config = ImporterConfig(source_path=tmp_path / "team")

        assert save_config(config, path) == path
        assert json.loads(path.read_text())["source_path"] == str(tmp_path / "team")
        assert load_config(path) == config

    @pytest.mark.unit
    def test_malformed_json(self, tmp_path: Path):
        from eclipse_settings.config import load_config
        from common.exceptions import InvalidConfigError

        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(InvalidConfigError):
            load_config(path)
