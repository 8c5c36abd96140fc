#!/usr/bin/env python3
import logging
import os
import re

import psutil

from battery_ctl.backends.port import BatteryControlPort
from battery_ctl.errors import BackendFailure, DependencyMissing
from battery_ctl.globals import POWER_SUPPLY_DIR
from battery_ctl.types import ThresholdMode

CHARGE_BEHAVIOUR = "charge_behaviour"
AUTO, INHIBIT_CHARGE, FORCE_DISCHARGE = "auto", "inhibit-charge", "force-discharge"


class SysfsBackend(BatteryControlPort):
    """
    Battery control through the kernel power_supply class.

    Battery N is BAT{N-1}. Thresholds use charge_control_*_threshold and fall
    back to the older charge_*_threshold names, inhibit and force discharge
    both go through charge_behaviour.
    """

    name = "sysfs"

    def __init__(self, power_supply_dir: str = POWER_SUPPLY_DIR) -> None:
        self.power_supply_dir = power_supply_dir

    def battery_dir(self, battery: int) -> str:
        return os.path.join(self.power_supply_dir, f"BAT{battery - 1}")

    def get_threshold_paths(self, battery: int, mode: ThresholdMode) -> list[str]:
        bat = self.battery_dir(battery)
        if mode is ThresholdMode.START:
            return [
                os.path.join(bat, "charge_control_start_threshold"),
                os.path.join(bat, "charge_start_threshold"), # Fallback
            ]
        return [
            os.path.join(bat, "charge_control_end_threshold"),
            os.path.join(bat, "charge_stop_threshold"), # Fallback
        ]

    def _threshold_path(self, battery: int, mode: ThresholdMode) -> str:
        for p in self.get_threshold_paths(battery, mode):
            if os.path.isfile(p): return p
        raise DependencyMissing(f"no charge {mode.value} threshold file for battery {battery} in {self.battery_dir(battery)}")

    def check_available(self) -> None:
        if not os.path.isdir(self.power_supply_dir):
            raise DependencyMissing(f"{self.power_supply_dir} does NOT exist")
        if not os.path.isdir(self.battery_dir(1)):
            raise DependencyMissing(f"no battery found in {self.power_supply_dir}")

    def _write(self, path: str, value: object) -> None:
        logging.debug("writing %s to %s", value, path)
        try:
            with open(path, "w") as f: f.write(f"{value}\n")
        except OSError as e:
            raise BackendFailure(path, output=e.strerror or str(e)) from e

    def _read(self, path: str) -> str:
        try:
            with open(path) as f: return f.read().strip()
        except FileNotFoundError:
            raise DependencyMissing(f"{path} does NOT exist") from None
        except OSError as e:
            raise BackendFailure(path, output=e.strerror or str(e)) from e

    def _read_int(self, path: str) -> int:
        value = self._read(path)
        try: return int(value)
        except ValueError:
            raise BackendFailure(path, output=f"unexpected value: {value}") from None

    def set_start_threshold(self, battery: int, value: int) -> None:
        self._write(self._threshold_path(battery, ThresholdMode.START), value)

    def set_stop_threshold(self, battery: int, value: int) -> None:
        self._write(self._threshold_path(battery, ThresholdMode.STOP), value)

    def get_start_threshold(self, battery: int) -> int:
        return self._read_int(self._threshold_path(battery, ThresholdMode.START))

    def get_stop_threshold(self, battery: int) -> int:
        return self._read_int(self._threshold_path(battery, ThresholdMode.STOP))

    def charge_behaviour(self, battery: int) -> str:
        # the kernel marks the active behaviour, e.g. "auto [inhibit-charge] force-discharge"
        value = self._read(os.path.join(self.battery_dir(battery), CHARGE_BEHAVIOUR))
        match = re.search(r"\[([\w-]+)\]", value)
        return match.group(1) if match else value

    def _set_behaviour(self, battery: int, behaviour: str, flag: bool) -> None:
        path = os.path.join(self.battery_dir(battery), CHARGE_BEHAVIOUR)
        if flag: self._write(path, behaviour)
        # clearing one flag must not cancel the other behaviour
        elif self.charge_behaviour(battery) == behaviour: self._write(path, AUTO)

    def set_inhibit(self, battery: int, flag: bool) -> None: self._set_behaviour(battery, INHIBIT_CHARGE, flag)
    def set_force_discharge(self, battery: int, flag: bool) -> None: self._set_behaviour(battery, FORCE_DISCHARGE, flag)

    def _health(self, battery: int) -> str | None:
        bat = self.battery_dir(battery)
        for prefix in ("charge", "energy"):
            full, design = os.path.join(bat, prefix+"_full"), os.path.join(bat, prefix+"_full_design")
            if os.path.isfile(full) and os.path.isfile(design):
                design_value = self._read_int(design)
                if design_value: return f"{round(100 * self._read_int(full) / design_value)}%"
        return None

    def telemetry(self, battery: int) -> str:
        bat = self.battery_dir(battery)
        lines = [f"Battery {battery}: {self._read(os.path.join(bat, 'status'))}, {self._read(os.path.join(bat, 'capacity'))}%"]
        health = self._health(battery)
        if health is not None: lines.append(f"Battery {battery}: health {health}")
        sensors = psutil.sensors_battery()
        if sensors is not None: lines.append(f"AC adapter: {'on-line' if sensors.power_plugged else 'off-line'}")
        return "\n".join(lines)
