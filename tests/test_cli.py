"""Tests for the click entrypoints."""

import json

import pytest
from click.testing import CliRunner

from ssd_health_watch import cli
from ssd_health_watch.smartctl import SmartctlNotFoundError


SCAN_OUTPUT = """\
/dev/nvme0 -d nvme # /dev/nvme0, NVMe device
/dev/sdb -d sntjmicron # /dev/sdb [USB NVMe JMicron], NVMe device
"""

RESPONSES = {
    ("/dev/nvme0", "nvme"): {
        "model_name": "Samsung SSD 970 EVO Plus 1TB",
        "nvme_smart_health_information_log": {"percentage_used": 2},
    },
    ("/dev/sdb", "sntjmicron"): {
        "model_name": "WD_BLACK SN770 1TB",
        "nvme_smart_health_information_log": {"percentage_used": 41},
    },
}


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("smartctl:\n  path: smartctl\ndisplay:\n  color: false\n")
    return path


@pytest.fixture
def use_fake(monkeypatch, fake_smartctl):
    def install(scan_output=SCAN_OUTPUT, responses=RESPONSES):
        fake = fake_smartctl(scan_output=scan_output, responses=responses)
        monkeypatch.setattr(cli, "Smartctl", lambda config: fake)
        return fake

    return install


class TestSnapshot:
    """Tests for `shw snapshot`."""

    def test_table_and_warn_exit_code(self, use_fake, config_file):
        use_fake()
        result = CliRunner().invoke(cli.main, ["snapshot", "-c", str(config_file)])

        assert "/dev/nvme0" in result.output
        assert "JMicron USB-NVMe" in result.output
        assert result.exit_code == 1  # 59% is WARN

    def test_json_output(self, use_fake, config_file):
        use_fake()
        result = CliRunner().invoke(cli.main, ["snapshot", "-c", str(config_file), "--json"])

        rows = json.loads(result.output)
        assert [r["device"] for r in rows] == ["/dev/nvme0", "/dev/sdb"]
        assert rows[0]["health_percent"] == 98
        assert rows[1]["detected_driver"] == "sntjmicron"

    def test_all_healthy_exit_zero(self, use_fake, config_file):
        use_fake(scan_output="/dev/nvme0 -d nvme\n")
        result = CliRunner().invoke(cli.main, ["snapshot", "-c", str(config_file)])

        assert result.exit_code == 0

    def test_scan_failure(self, use_fake, config_file):
        use_fake(scan_output="")
        result = CliRunner().invoke(cli.main, ["snapshot", "-c", str(config_file)])

        assert result.exit_code == cli.EXIT_PRECONDITION
        assert "found no devices" in result.output


class TestScan:
    """Tests for `shw scan`."""

    def test_lists_candidates(self, use_fake, config_file):
        use_fake()
        result = CliRunner().invoke(cli.main, ["scan", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "candidates: nvme" in result.output
        assert "candidates: sntjmicron, sntjmicron,1" in result.output


def test_missing_smartctl(monkeypatch, config_file):
    class MissingSmartctl:
        def __init__(self, config):
            pass

        def ensure_available(self):
            raise SmartctlNotFoundError("smartctl not found at smartctl")

    monkeypatch.setattr(cli, "Smartctl", MissingSmartctl)
    result = CliRunner().invoke(cli.main, ["watch", "-c", str(config_file)])

    assert result.exit_code == cli.EXIT_PRECONDITION
    assert "smartctl not found" in result.output
