"""
Tests for configuration loading, environment overrides and validation
"""

import json

import pytest
import yaml

from farmscope.core.base import ConfigurationError
from farmscope.core.config import AppConfig, ConfigManager


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('FARMSCOPE_LOG_LEVEL', 'LOG_LEVEL', 'FARMSCOPE_OUTPUT_DIR', 'FARMSCOPE_USER_AGENT', 'FARMSCOPE_PORT'):
        monkeypatch.delenv(name, raising=False)


def write_yaml(path, data):
    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump(data, f)
    return str(path)


class TestConfigManager:

    def test_defaults_when_file_missing(self, tmp_path):
        config = ConfigManager(str(tmp_path / "absent.yaml")).load_config()

        assert config.limits.advisory_limit == 20
        assert config.limits.pest_advisory_snapshot_limit == 10
        assert config.limits.farm_advisory_preview_limit == 3
        assert config.limits.section_max_length == 1000
        assert config.fetch.timeout is None
        assert config.batch.category_delay == 1.0
        assert config.batch.item_delay == 0.5
        assert config.sources.pest_base_url == "https://pestoscope.com"

    def test_yaml_file(self, tmp_path):
        path = write_yaml(tmp_path / "config.yaml", {
            'limits': {'advisory_limit': 5},
            'batch': {'item_delay': 0},
            'fetch': {'timeout': 15}
        })
        config = ConfigManager(path).load_config()

        assert config.limits.advisory_limit == 5
        assert config.limits.pest_excerpt_length == 250
        assert config.batch.item_delay == 0
        assert config.fetch.timeout == 15

    def test_json_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'server': {'port': 9001}}), encoding='utf-8')

        assert ConfigManager(str(path)).load_config().server.port == 9001

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv('FARMSCOPE_OUTPUT_DIR', str(tmp_path / "snapshots"))
        monkeypatch.setenv('FARMSCOPE_PORT', '9000')
        monkeypatch.setenv('LOG_LEVEL', 'DEBUG')
        monkeypatch.setenv('FARMSCOPE_USER_AGENT', 'FarmScopeBot/1.0')

        config = ConfigManager(str(tmp_path / "absent.yaml")).load_config()

        assert config.batch.output_dir == str(tmp_path / "snapshots")
        assert config.server.port == 9000
        assert config.logging.level == "DEBUG"
        assert config.fetch.user_agent == "FarmScopeBot/1.0"

    def test_invalid_port_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv('FARMSCOPE_PORT', 'eighty')
        with pytest.raises(ConfigurationError):
            ConfigManager(str(tmp_path / "absent.yaml")).load_config()

    @pytest.mark.parametrize("data", [
        {'batch': {'category_delay': -1}},
        {'limits': {'advisory_limit': -5}},
        {'fetch': {'timeout': 0}},
        {'server': {'port': 0}},
        {'limits': {'unknown_cap': 3}},
        {'limits': [1, 2]},
    ])
    def test_invalid_values(self, tmp_path, data):
        path = write_yaml(tmp_path / "config.yaml", data)
        with pytest.raises(ConfigurationError):
            ConfigManager(path).load_config()

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("limits: [unclosed", encoding='utf-8')
        with pytest.raises(ConfigurationError):
            ConfigManager(str(path)).load_config()

    def test_write_default_config(self, tmp_path):
        manager = ConfigManager(str(tmp_path / "config" / "config.yaml"))
        path = manager.write_default_config()

        assert ConfigManager(path).load_config().to_dict() == AppConfig().to_dict()
