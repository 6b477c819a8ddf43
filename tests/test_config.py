"""
Tests for configuration loading.
"""

import json

import pytest
import yaml

from cycloscan.core.config import (
    DEFAULT_CONFIG,
    Config,
    create_default_config,
    find_config,
    load_config_file,
)
from cycloscan.core.errors import ConfigError


class TestConfig:
    """Tests for Config."""

    def test_defaults(self):
        config = Config.default()
        assert config.frontend_name() == "treesitter"
        assert config.report_path() == "results.cy"
        assert config.diagnostics_enabled()
        assert config.output_format() == "text"
        assert ".h" in config.header_extensions()
        assert "/usr/include" in config.system_include_dirs()

    def test_load_without_path_is_default(self):
        assert Config.load(None) == Config.default()

    def test_yaml_file_is_merged_over_defaults(self, tmp_path):
        path = tmp_path / ".cycloscan.yaml"
        path.write_text(
            "frontend:\n"
            "  clang_args: ['-std=c11']\n"
            "report:\n"
            "  path: 'out/{stem}.cy'\n"
        )
        config = Config.load(str(path))
        assert config.frontend_name() == "treesitter"
        assert config.frontend_options()["clang_args"] == ["-std=c11"]
        assert config.report_path() == "out/{stem}.cy"
        assert config.diagnostics_enabled()

    def test_json_file(self, tmp_path):
        path = tmp_path / ".cycloscan.json"
        path.write_text(json.dumps({"diagnostics": {"enabled": False}}))
        config = Config.load(str(path))
        assert not config.diagnostics_enabled()
        assert config.diagnostics_color()

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / ".cycloscan.yaml"
        path.write_text("")
        assert load_config_file(str(path)) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.load(str(tmp_path / "nope.yaml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / ".cycloscan.yaml"
        path.write_text("frontend: [unclosed\n")
        with pytest.raises(ConfigError):
            Config.load(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / ".cycloscan.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            Config.load(str(path))

    def test_report_can_be_disabled(self):
        assert Config.from_dict({"report": {"path": None}}).report_path() is None

    def test_overrides_do_not_mutate(self):
        base = Config.default()
        changed = base.with_overrides({"output": {"format": "json"}})
        assert changed.output_format() == "json"
        assert base.output_format() == "text"
        assert DEFAULT_CONFIG["output"]["format"] == "text"


class TestConfigFiles:
    """Tests for config discovery and generation."""

    def test_find_config_searches_upward(self, tmp_path):
        (tmp_path / ".cycloscan.yml").write_text("version: 1\n")
        nested = tmp_path / "src" / "lib"
        nested.mkdir(parents=True)
        source = nested / "main.c"
        source.write_text("int main(void) { return 0; }\n")
        assert find_config(str(source)) == str((tmp_path / ".cycloscan.yml").resolve())

    def test_default_config_round_trip(self):
        assert yaml.safe_load(create_default_config()) == DEFAULT_CONFIG
