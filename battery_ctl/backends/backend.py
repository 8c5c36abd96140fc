#!/usr/bin/env python3
import logging
from shutil import which

from battery_ctl.backends.port import BatteryControlPort
from battery_ctl.backends.sysfs import SysfsBackend
from battery_ctl.backends.tpacpi import TpacpiBatBackend
from battery_ctl.errors import ValidationError
from battery_ctl.globals import ACPI, BACKEND_TIMEOUT, TPACPI_BAT
from battery_ctl.types import BackendName


def get_backend(name: str, timeout: float = BACKEND_TIMEOUT) -> BatteryControlPort:
    try: backend = BackendName(name)
    except ValueError:
        raise ValidationError(f'Unknown backend "{name}", expected one of: '+", ".join(b.value for b in BackendName)) from None

    if backend is BackendName.AUTO:
        backend = BackendName.TPACPI if which(TPACPI_BAT) and which(ACPI) else BackendName.SYSFS
        logging.info("auto selected the %s backend", backend.value)

    if backend is BackendName.TPACPI: return TpacpiBatBackend(timeout)
    return SysfsBackend()
