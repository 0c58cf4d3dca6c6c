"""Tests for settings loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cmakebridge.config.models import BridgeSettings
from cmakebridge.config.user_config import config_search_paths, load_settings
from cmakebridge.core.errors import ConfigError


class TestBridgeSettings:
    """Test BridgeSettings defaults, validators and precedence."""

    def test_defaults(self):
        settings = BridgeSettings()

        assert settings.third_party_dir == "../ThirdParty"
        assert settings.generated_dir_name == "generated"
        assert settings.build_dir_name == "build"
        assert settings.cmake_executable is None
        assert settings.shell is None
        assert settings.capture_build_log is True
        assert settings.log_level == "WARNING"

    def test_environment_overrides_init_values(self, monkeypatch):
        monkeypatch.setenv("CMAKEBRIDGE_BUILD_DIR_NAME", "out")

        settings = BridgeSettings(build_dir_name="from-file")

        assert settings.build_dir_name == "out"

    def test_shell_from_environment_is_comma_separated(self, monkeypatch):
        monkeypatch.setenv("CMAKEBRIDGE_SHELL", "sh, -c")

        assert BridgeSettings().shell == ["sh", "-c"]

    def test_log_level_is_normalized(self):
        assert BridgeSettings(log_level=" debug ").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Log level must be one of"):
            BridgeSettings(log_level="LOUD")

    def test_paths_are_expanded(self):
        settings = BridgeSettings(sdk_dir="~/clang", templates_dir="")

        assert settings.sdk_dir == Path("~/clang").expanduser()
        assert settings.templates_dir is None


class TestLoadSettings:
    """Test YAML discovery and error reporting."""

    def test_no_config_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert load_settings() == BridgeSettings()

    def test_explicit_config_file(self, tmp_path):
        config = tmp_path / "bridge.yaml"
        config.write_text("build_dir_name: cmake-build\ncapture_build_log: false\n")

        settings = load_settings(config)

        assert settings.build_dir_name == "cmake-build"
        assert settings.capture_build_log is False

    def test_working_directory_config(self, tmp_path, monkeypatch):
        (tmp_path / "cmakebridge.yaml").write_text("generated_dir_name: gen\n")
        monkeypatch.chdir(tmp_path)

        assert load_settings().generated_dir_name == "gen"

    def test_xdg_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        xdg_config = tmp_path / "xdg" / "cmakebridge" / "config.yaml"
        xdg_config.parent.mkdir(parents=True)
        xdg_config.write_text("third_party_dir: ../External\n")

        assert load_settings().third_party_dir == "../External"

    def test_search_order(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        paths = config_search_paths(tmp_path / "explicit.yaml")

        assert paths == [
            (tmp_path / "explicit.yaml").resolve(),
            tmp_path / "cmakebridge.yaml",
            tmp_path / "xdg" / "cmakebridge" / "config.yaml",
        ]

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Config file not found"):
            load_settings(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("build_dir_name: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(config)

    def test_non_mapping_yaml(self, tmp_path):
        config = tmp_path / "list.yaml"
        config.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_settings(config)

    def test_invalid_values(self, tmp_path):
        config = tmp_path / "bridge.yaml"
        config.write_text("log_level: LOUD\n")

        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(config)
