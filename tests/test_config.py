"""Tests for configuration loading."""

import tempfile

import pytest

from ssd_health_watch.config import Config, default_smartctl_path, load_config


def test_config_defaults():
    """Test default configuration values."""
    config = Config()

    assert config.watch.interval_seconds == 3
    assert config.smartctl.scan_timeout_seconds == 60
    assert config.smartctl.probe_timeout_seconds == 30
    assert config.smartctl.path == default_smartctl_path()
    assert config.display.healthy_pct == 80
    assert config.display.warning_pct == 40
    assert config.display.color is True


def test_config_from_dict():
    """Test loading configuration from dictionary."""
    data = {
        "smartctl": {
            "path": "/opt/smartmontools/bin/smartctl",
            "probe_timeout_seconds": 10,
        },
        "watch": {"interval_seconds": 5},
        "display": {"color": False, "title": "Lab SSDs"},
    }

    config = Config.from_dict(data)

    assert config.smartctl.path == "/opt/smartmontools/bin/smartctl"
    assert config.smartctl.probe_timeout_seconds == 10
    assert config.smartctl.scan_timeout_seconds == 60  # default
    assert config.watch.interval_seconds == 5
    assert config.display.color is False
    assert config.display.title == "Lab SSDs"
    assert config.display.healthy_pct == 80  # default


def test_config_from_yaml():
    """Test loading configuration from YAML file."""
    yaml_content = """
smartctl:
  path: /usr/local/sbin/smartctl

watch:
  interval_seconds: 2

display:
  healthy_pct: 90
  warning_pct: 50
"""

    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write(yaml_content)
        f.flush()

        config = Config.from_yaml(f.name)

    assert config.smartctl.path == "/usr/local/sbin/smartctl"
    assert config.watch.interval_seconds == 2
    assert config.display.healthy_pct == 90
    assert config.display.warning_pct == 50


def test_config_file_not_found():
    """Test error when config file doesn't exist."""
    with pytest.raises(FileNotFoundError):
        Config.from_yaml("/nonexistent/config.yaml")


def test_load_config_explicit_path_missing():
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/config.yaml")


def test_config_from_env(monkeypatch):
    """Test environment overrides."""
    monkeypatch.setenv("SHW_SMARTCTL", "/custom/smartctl")
    monkeypatch.setenv("SHW_INTERVAL", "7")

    config = Config.from_env()

    assert config.smartctl.path == "/custom/smartctl"
    assert config.watch.interval_seconds == 7


@pytest.mark.parametrize(
    "data",
    [
        {"watch": {"interval_seconds": 0}},
        {"display": {"healthy_pct": 30, "warning_pct": 60}},
        {"display": {"healthy_pct": 120}},
    ],
)
def test_invalid_values(data):
    """Test rejection of unusable settings."""
    with pytest.raises(ValueError):
        Config.from_dict(data)
