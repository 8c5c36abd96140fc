import logging
from logging.handlers import RotatingFileHandler

import pytest

from battery_ctl.backends.port import BatteryControlPort
from battery_ctl.errors import BackendFailure


class FakeBatteryPort(BatteryControlPort):
    """In-memory backend recording every call in order."""

    name = "fake"

    def __init__(self, start=40, stop=80, telemetry="Battery 1: Discharging, 57%", fail_on=()) -> None:
        self.start = start
        self.stop = stop
        self.inhibit = False
        self.force_discharge = False
        self.telemetry_text = telemetry
        self.fail_on = set(fail_on)
        self.calls: list[tuple] = []

    def _record(self, *call) -> None:
        self.calls.append(call)
        if call[0] in self.fail_on: raise BackendFailure(call[0], returncode=1, output="simulated failure")

    def writes(self) -> list[tuple]:
        return [c for c in self.calls if c[0].startswith("set_")]

    def check_available(self) -> None: pass

    def set_start_threshold(self, battery, value):
        self._record("set_start_threshold", battery, value)
        self.start = value

    def set_stop_threshold(self, battery, value):
        self._record("set_stop_threshold", battery, value)
        self.stop = value

    def set_inhibit(self, battery, flag):
        self._record("set_inhibit", battery, flag)
        self.inhibit = flag

    def set_force_discharge(self, battery, flag):
        self._record("set_force_discharge", battery, flag)
        self.force_discharge = flag

    def get_start_threshold(self, battery):
        self._record("get_start_threshold", battery)
        return self.start

    def get_stop_threshold(self, battery):
        self._record("get_stop_threshold", battery)
        return self.stop

    def telemetry(self, battery):
        self._record("telemetry", battery)
        return self.telemetry_text


@pytest.fixture
def port() -> FakeBatteryPort:
    return FakeBatteryPort()


@pytest.fixture(autouse=True)
def reset_logging():
    # drop the handlers setup_logger installs, they point at the captured streams of one test
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
