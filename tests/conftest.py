"""Shared fixtures: a scripted stand-in for the smartctl binary."""

import json

import pytest

from ssd_health_watch.config import SmartctlConfig
from ssd_health_watch.smartctl import Smartctl


class FakeSmartctl(Smartctl):
    """Smartctl that answers from canned output instead of a subprocess.

    `responses` maps (device, driver) to either a dict (returned as JSON),
    a string (returned verbatim) or an exception instance (raised).
    """

    def __init__(self, scan_output="", responses=None):
        super().__init__(SmartctlConfig(path="smartctl"))
        self.scan_output = scan_output
        self.responses = responses or {}
        self.calls = []

    def ensure_available(self):
        return self.path

    def scan(self):
        return self.scan_output

    def query(self, device, driver):
        self.calls.append((device, driver))
        response = self.responses.get((device, driver), "")
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return json.dumps(response)
        return response


@pytest.fixture
def fake_smartctl():
    """Factory for FakeSmartctl instances."""
    return FakeSmartctl
