"""
Tests for configuration loading.
"""

import pytest

from idiomlint.config import (
    EngineConfig, RuleConfig, config_from_dict, find_config_file, load_config
)
from idiomlint.errors import ConfigError


class TestConfigFromDict:

    def test_defaults(self):
        config = config_from_dict({})
        assert config.rules == {}
        assert config.max_findings_per_unit == 500
        assert config.jobs == 1
        assert config.timeout_seconds is None
        assert config.autocorrect is False

    def test_rule_settings(self):
        config = config_from_dict({
            "rules": {
                "style.line_length": {"severity": "error", "params": {"max": 100}, "exclude": ["db/*"]},
                "style.negated_if": False,
            },
            "jobs": 4,
            "timeout_seconds": 2,
        })

        line_length = config.rule("style.line_length")
        assert line_length.severity == "error"
        assert line_length.params == {"max": 100}
        assert line_length.exclude == ["db/*"]
        assert config.rule("style.negated_if").enabled is False
        assert config.rule("style.not_keyword") == RuleConfig()
        assert config.jobs == 4
        assert config.timeout_seconds == 2.0

    def test_unexpected_rule_keys(self):
        with pytest.raises(ConfigError, match="Unexpected keys"):
            config_from_dict({"rules": {"style.a": {"enable": True}}})

    def test_invalid_severity(self):
        with pytest.raises(ConfigError, match="Invalid severity"):
            config_from_dict({"rules": {"style.a": {"severity": "fatal"}}})

    def test_invalid_value(self):
        with pytest.raises(ConfigError):
            config_from_dict({"jobs": "many"})

    def test_root_must_be_mapping(self):
        with pytest.raises(ConfigError):
            config_from_dict(["style.a"])


class TestLoadConfig:

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(str(tmp_path / "absent.yml")) == EngineConfig()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / ".idiomlint.yml"
        path.write_text(
            "rules:\n"
            "  style.line_length:\n"
            "    params:\n"
            "      max: 80\n"
            "exclude:\n"
            "  - vendor/*\n"
        )
        config = load_config(str(path))
        assert config.rule("style.line_length").params == {"max": 80}
        assert config.exclude == ["vendor/*"]

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / ".idiomlint.yml"
        path.write_text("rules: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_find_config_file_walks_up(self, tmp_path):
        (tmp_path / ".idiomlint.yml").write_text("jobs: 2\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(str(nested)) == str(tmp_path / ".idiomlint.yml")
