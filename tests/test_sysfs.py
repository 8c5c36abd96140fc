from collections import namedtuple

import pytest

from battery_ctl.backends import sysfs
from battery_ctl.backends.sysfs import SysfsBackend
from battery_ctl.errors import DependencyMissing

sbattery = namedtuple("sbattery", ["percent", "secsleft", "power_plugged"])


@pytest.fixture
def power_supply(tmp_path, monkeypatch):
    monkeypatch.setattr(sysfs.psutil, "sensors_battery", lambda: sbattery(57, 7800, False))
    bat = tmp_path / "BAT0"
    bat.mkdir()
    files = {
        "charge_control_start_threshold": "40",
        "charge_control_end_threshold": "80",
        "charge_behaviour": "[auto] inhibit-charge force-discharge",
        "status": "Discharging",
        "capacity": "57",
        "energy_full": "43000000",
        "energy_full_design": "50000000",
    }
    for name, value in files.items(): (bat / name).write_text(value+"\n")
    return tmp_path


def test_thresholds(power_supply) -> None:
    backend = SysfsBackend(str(power_supply))
    backend.check_available()
    backend.set_start_threshold(1, 30)
    backend.set_stop_threshold(1, 70)
    assert backend.get_start_threshold(1) == 30
    assert backend.get_stop_threshold(1) == 70
    assert (power_supply / "BAT0" / "charge_control_end_threshold").read_text() == "70\n"


def test_legacy_threshold_files(tmp_path) -> None:
    bat = tmp_path / "BAT1"
    bat.mkdir()
    (bat / "charge_start_threshold").write_text("20\n")
    (bat / "charge_stop_threshold").write_text("90\n")
    backend = SysfsBackend(str(tmp_path))
    assert (backend.get_start_threshold(2), backend.get_stop_threshold(2)) == (20, 90)


def test_missing_threshold_file(power_supply) -> None:
    (power_supply / "BAT0" / "charge_control_start_threshold").unlink()
    with pytest.raises(DependencyMissing):
        SysfsBackend(str(power_supply)).set_start_threshold(1, 40)


def test_behaviour_flags(power_supply) -> None:
    backend = SysfsBackend(str(power_supply))
    behaviour = power_supply / "BAT0" / "charge_behaviour"

    backend.set_inhibit(1, True)
    assert behaviour.read_text() == "inhibit-charge\n"
    # clearing force discharge leaves inhibit in place
    backend.set_force_discharge(1, False)
    assert backend.charge_behaviour(1) == "inhibit-charge"
    backend.set_inhibit(1, False)
    assert backend.charge_behaviour(1) == "auto"

    backend.set_force_discharge(1, True)
    assert backend.charge_behaviour(1) == "force-discharge"
    backend.set_force_discharge(1, False)
    assert backend.charge_behaviour(1) == "auto"


def test_telemetry(power_supply) -> None:
    assert SysfsBackend(str(power_supply)).telemetry(1).splitlines() == [
        "Battery 1: Discharging, 57%",
        "Battery 1: health 86%",
        "AC adapter: off-line",
    ]


def test_unavailable(tmp_path) -> None:
    with pytest.raises(DependencyMissing):
        SysfsBackend(str(tmp_path / "missing")).check_available()
    with pytest.raises(DependencyMissing):
        SysfsBackend(str(tmp_path)).check_available()
