from subprocess import CompletedProcess, TimeoutExpired

import pytest

from battery_ctl.backends import tpacpi
from battery_ctl.backends.tpacpi import TpacpiBatBackend
from battery_ctl.errors import BackendFailure, DependencyMissing

ACPI_OUTPUT = """Adapter 0: off-line
Battery 0: Discharging, 57%, 02:10:00 remaining
Battery 0: design capacity 5000 mAh, last full capacity 4300 mAh = 86%
Battery 1: Unknown, 100%
"""


class FakeRun:
    def __init__(self, outputs=None, returncode=0, timeout=False) -> None:
        self.outputs = outputs or {}
        self.returncode = returncode
        self.timeout = timeout
        self.commands: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        self.commands.append(cmd)
        assert kwargs["timeout"] == 5
        if self.timeout: raise TimeoutExpired(cmd, kwargs["timeout"])
        return CompletedProcess(cmd, self.returncode, stdout=self.outputs.get(cmd[0], ""))


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    fake = FakeRun({"tpacpi-bat": "40 (relative percent)\n", "acpi": ACPI_OUTPUT})
    monkeypatch.setattr(tpacpi, "run", fake)
    return fake


def test_writes(fake_run) -> None:
    backend = TpacpiBatBackend(timeout=5)
    backend.set_start_threshold(1, 40)
    backend.set_stop_threshold(1, 80)
    backend.set_inhibit(2, True)
    backend.set_force_discharge(1, False)
    assert fake_run.commands == [
        ["tpacpi-bat", "-s", "ST", "1", "40"],
        ["tpacpi-bat", "-s", "SP", "1", "80"],
        ["tpacpi-bat", "-s", "IC", "2", "1"],
        ["tpacpi-bat", "-s", "FD", "1", "0"],
    ]


def test_reads(fake_run) -> None:
    backend = TpacpiBatBackend(timeout=5)
    assert backend.get_start_threshold(1) == 40
    assert backend.get_stop_threshold(1) == 40
    assert fake_run.commands[-1] == ["tpacpi-bat", "-g", "SP", "1"]


def test_unparseable_read(monkeypatch) -> None:
    monkeypatch.setattr(tpacpi, "run", FakeRun({"tpacpi-bat": "no battery\n"}))
    with pytest.raises(BackendFailure):
        TpacpiBatBackend(timeout=5).get_start_threshold(1)


def test_telemetry_keeps_selected_battery(fake_run) -> None:
    assert TpacpiBatBackend(timeout=5).telemetry(1).splitlines() == [
        "Adapter 0: off-line",
        "Battery 0: Discharging, 57%, 02:10:00 remaining",
        "Battery 0: design capacity 5000 mAh, last full capacity 4300 mAh = 86%",
    ]


def test_telemetry_without_match_keeps_everything(fake_run) -> None:
    assert TpacpiBatBackend(timeout=5).telemetry(5) == ACPI_OUTPUT.strip()


def test_non_zero_exit_is_backend_failure(monkeypatch) -> None:
    monkeypatch.setattr(tpacpi, "run", FakeRun({"tpacpi-bat": "Error: no ACPI\n"}, returncode=2))
    with pytest.raises(BackendFailure) as exc_info:
        TpacpiBatBackend(timeout=5).set_inhibit(1, True)
    assert exc_info.value.returncode == 2
    assert "Error: no ACPI" in str(exc_info.value)
    assert not exc_info.value.timed_out


def test_timeout_is_backend_failure(monkeypatch) -> None:
    monkeypatch.setattr(tpacpi, "run", FakeRun(timeout=True))
    with pytest.raises(BackendFailure) as exc_info:
        TpacpiBatBackend(timeout=5).set_start_threshold(1, 40)
    assert exc_info.value.timed_out
    assert exc_info.value.returncode is None


@pytest.mark.parametrize("missing", ["tpacpi-bat", "acpi"])
def test_missing_tool(monkeypatch, missing) -> None:
    monkeypatch.setattr(tpacpi, "which", lambda tool: None if tool == missing else "/usr/bin/"+tool)
    with pytest.raises(DependencyMissing, match=missing):
        TpacpiBatBackend().check_available()
