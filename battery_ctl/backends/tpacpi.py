#!/usr/bin/env python3
import logging
import re
from shutil import which
from subprocess import run, PIPE, STDOUT, TimeoutExpired

from battery_ctl.backends.port import BatteryControlPort
from battery_ctl.errors import BackendFailure, DependencyMissing
from battery_ctl.globals import ACPI, BACKEND_TIMEOUT, TPACPI_BAT

# tpacpi-bat method names
START_THRESHOLD, STOP_THRESHOLD = "ST", "SP"
INHIBIT_CHARGE, FORCE_DISCHARGE = "IC", "FD"


def run_backend(cmd: list[str], timeout: float) -> str:
    """Run a backend command and return its output, BackendFailure on non-zero exit or timeout."""
    cmdline = " ".join(cmd)
    logging.debug("running %s", cmdline)
    try:
        res = run(cmd, stdout=PIPE, stderr=STDOUT, text=True, timeout=timeout)
    except TimeoutExpired:
        raise BackendFailure(cmdline, timed_out=True) from None
    except OSError as e:
        raise BackendFailure(cmdline, output=str(e)) from e
    if res.returncode != 0: raise BackendFailure(cmdline, res.returncode, res.stdout)
    return res.stdout


class TpacpiBatBackend(BatteryControlPort):
    """ThinkPad battery control through tpacpi-bat, telemetry through acpi."""

    name = "tpacpi"

    def __init__(self, timeout: float = BACKEND_TIMEOUT) -> None:
        self.timeout = timeout

    def check_available(self) -> None:
        for tool in (TPACPI_BAT, ACPI):
            if which(tool) is None:
                raise DependencyMissing(f"'{tool}' not found, install it to use the {self.name} backend")

    def _set(self, method: str, battery: int, value: int) -> None:
        run_backend([TPACPI_BAT, "-s", method, str(battery), str(value)], self.timeout)

    def _get(self, method: str, battery: int) -> int:
        cmd = [TPACPI_BAT, "-g", method, str(battery)]
        output = run_backend(cmd, self.timeout)
        # e.g. "40 (relative percent)"
        match = re.match(r"\s*(\d+)", output)
        if match is None: raise BackendFailure(" ".join(cmd), output=f"unexpected output: {output}")
        return int(match.group(1))

    def set_start_threshold(self, battery: int, value: int) -> None: self._set(START_THRESHOLD, battery, value)
    def set_stop_threshold(self, battery: int, value: int) -> None: self._set(STOP_THRESHOLD, battery, value)
    def set_inhibit(self, battery: int, flag: bool) -> None: self._set(INHIBIT_CHARGE, battery, int(flag))
    def set_force_discharge(self, battery: int, flag: bool) -> None: self._set(FORCE_DISCHARGE, battery, int(flag))

    def get_start_threshold(self, battery: int) -> int: return self._get(START_THRESHOLD, battery)
    def get_stop_threshold(self, battery: int) -> int: return self._get(STOP_THRESHOLD, battery)

    def telemetry(self, battery: int) -> str:
        lines = run_backend([ACPI, "-a", "-b", "-i"], self.timeout).strip().splitlines()
        # acpi counts batteries from 0, tpacpi-bat from 1
        own = [line for line in lines if line.startswith(("Adapter", f"Battery {battery - 1}:"))]
        if not any(line.startswith("Battery") for line in own): own = lines
        return "\n".join(own)
