"""Tests for parsing smartctl --scan-open output."""

import pytest

from ssd_health_watch.models import DeviceTarget, UnrecognizedLine
from ssd_health_watch.scanner import parse_scan_line, parse_scan_output, scan_devices
from ssd_health_watch.smartctl import ScanError


SCAN_OUTPUT_LINUX = """\
/dev/sda -d sat # /dev/sda [SAT], ATA device
/dev/sdb -d sntjmicron # /dev/sdb [USB NVMe JMicron], NVMe device
/dev/nvme0 -d nvme # /dev/nvme0, NVMe device
"""

SCAN_OUTPUT_WINDOWS = """\
/dev/nvme0 -d nvme # /dev/nvme0, NVMe device
\\\\.\\PhysicalDrive1 -d sat # \\\\.\\PhysicalDrive1 [SAT], ATA device

/dev/csmi0,0 -d ata # /dev/csmi0,0, ATA device
"""


class TestParseScanLine:
    """Tests for single-line parsing."""

    def test_nvme_with_hint(self):
        assert parse_scan_line("/dev/nvme0 -d nvme # /dev/nvme0, NVMe device") == DeviceTarget("/dev/nvme0", "nvme")

    def test_nvme_without_hint(self):
        assert parse_scan_line("/dev/nvme1") == DeviceTarget("/dev/nvme1", None)

    def test_windows_physical_drive(self):
        target = parse_scan_line(r"\\.\PhysicalDrive3 -d sntasmedia # comment")

        assert target == DeviceTarget(r"\\.\PhysicalDrive3", "sntasmedia")

    def test_sd_device(self):
        assert parse_scan_line("/dev/sdc -d sat,12") == DeviceTarget("/dev/sdc", "sat,12")

    @pytest.mark.parametrize(
        "line",
        [
            "/dev/sda",  # hint required
            r"\\.\PhysicalDrive0",  # hint required
            "/dev/csmi0,0 -d ata",
            "# comment only",
            "/dev/bus/0 -d megaraid,0",
        ],
    )
    def test_unrecognized(self, line):
        result = parse_scan_line(line)

        assert isinstance(result, UnrecognizedLine)
        assert result.text == line


class TestParseScanOutput:
    """Tests for whole-output parsing."""

    def test_linux_output(self):
        targets = parse_scan_output(SCAN_OUTPUT_LINUX)

        assert targets == [
            DeviceTarget("/dev/sda", "sat"),
            DeviceTarget("/dev/sdb", "sntjmicron"),
            DeviceTarget("/dev/nvme0", "nvme"),
        ]

    def test_windows_output_skips_unknown_shapes(self):
        targets = parse_scan_output(SCAN_OUTPUT_WINDOWS)

        assert [t.device_path for t in targets] == ["/dev/nvme0", r"\\.\PhysicalDrive1"]

    @pytest.mark.parametrize("output", ["", "\n\n", "   \n\t\n"])
    def test_empty_output_is_scan_error(self, output):
        with pytest.raises(ScanError, match="found no devices"):
            parse_scan_output(output)

    def test_only_unrecognized_lines_is_not_an_error(self):
        """Lines exist but none are supported devices."""
        assert parse_scan_output("/dev/bus/0 -d megaraid,0\n") == []

    def test_scan_devices_uses_smartctl(self, fake_smartctl):
        smartctl = fake_smartctl(scan_output=SCAN_OUTPUT_LINUX)

        assert len(scan_devices(smartctl)) == 3
