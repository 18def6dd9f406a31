"""
Unit tests for connector configuration.
"""

import pytest

from httpconnector.config import ConnectorConfig


class TestConnectorConfig:

    def test_defaults_are_valid(self):
        config = ConnectorConfig()
        config.validate()

        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.static_dir is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CONNECTOR_HOST", "0.0.0.0")
        monkeypatch.setenv("CONNECTOR_PORT", "9000")
        monkeypatch.setenv("CONNECTOR_WORKERS", "4")
        monkeypatch.setenv("CONNECTOR_TIMEOUT", "2.5")
        monkeypatch.setenv("CONNECTOR_STATIC_DIR", "/srv/www")
        monkeypatch.setenv("CONNECTOR_LOG_LEVEL", "DEBUG")

        config = ConnectorConfig.from_env()

        assert config.host == "0.0.0.0"
        assert config.port == 9000
        assert config.workers == 4
        assert config.timeout == 2.5
        assert config.static_dir == "/srv/www"
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("CONNECTOR_HOST", "CONNECTOR_PORT", "CONNECTOR_WORKERS",
                     "CONNECTOR_TIMEOUT", "CONNECTOR_STATIC_DIR", "CONNECTOR_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        assert ConnectorConfig.from_env() == ConnectorConfig()

    def test_port_zero_allowed(self):
        ConnectorConfig(port=0).validate()

    @pytest.mark.parametrize("overrides", [
        {"port": 70000},
        {"port": -1},
        {"workers": 0},
        {"queue_size": 0},
        {"buffer_size": 100},
        {"timeout": 0},
        {"max_request_size": 10},
        {"log_level": "LOUD"},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ValueError):
            ConnectorConfig(**overrides).validate()
