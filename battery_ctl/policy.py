import logging
import re

from battery_ctl.backends.port import BatteryControlPort
from battery_ctl.errors import ValidationError
from battery_ctl.globals import MAX_THRESHOLD, MIN_THRESHOLD
from battery_ctl.types import PolicyField


def validate_threshold(value) -> int:
    # bool is an int subclass, True is not a percentage
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f'Charge threshold "{value}" is not an integer')
    if not (MIN_THRESHOLD <= value <= MAX_THRESHOLD):
        raise ValidationError(f'Charge threshold "{value}" is invalid, it must be between {MIN_THRESHOLD} and {MAX_THRESHOLD}')
    return value


def parse_threshold(text: str) -> int:
    # plain ASCII digits only, int() would also take "4_0" or non-latin digits
    if not isinstance(text, str) or not re.fullmatch(r"[0-9]+", text.strip()):
        raise ValidationError(f'Charge threshold "{text}" is not an integer between {MIN_THRESHOLD} and {MAX_THRESHOLD}')
    return validate_threshold(int(text))


class PolicyModel:
    """
    The charging policy one command wants for one battery.

    Only fields set through the setters are written to the backend, in the
    order they were first set. Setting a field again replaces its value.
    """

    def __init__(self, battery: int) -> None:
        if isinstance(battery, bool) or not isinstance(battery, int) or battery < 1:
            raise ValidationError(f'Battery "{battery}" is invalid, batteries are numbered from 1')
        self.battery = battery
        self._pending: dict[PolicyField, int | bool] = {}

    def _check_battery(self, battery: int) -> None:
        if battery != self.battery:
            raise ValidationError(f"Policy is for battery {self.battery}, not battery {battery}")

    def _check_flag(self, flag) -> bool:
        if not isinstance(flag, bool): raise ValidationError(f'"{flag}" is not a boolean')
        return flag

    def set_start_threshold(self, value: int, battery: int) -> None:
        self._check_battery(battery)
        self._pending[PolicyField.START_THRESHOLD] = validate_threshold(value)

    def set_stop_threshold(self, value: int, battery: int) -> None:
        self._check_battery(battery)
        self._pending[PolicyField.STOP_THRESHOLD] = validate_threshold(value)

    def set_inhibit(self, flag: bool, battery: int) -> None:
        self._check_battery(battery)
        self._pending[PolicyField.INHIBIT] = self._check_flag(flag)

    def set_force_discharge(self, flag: bool, battery: int) -> None:
        self._check_battery(battery)
        self._pending[PolicyField.FORCE_DISCHARGE] = self._check_flag(flag)

    @property
    def start(self) -> int | None: return self._pending.get(PolicyField.START_THRESHOLD)
    @property
    def stop(self) -> int | None: return self._pending.get(PolicyField.STOP_THRESHOLD)
    @property
    def inhibit(self) -> bool | None: return self._pending.get(PolicyField.INHIBIT)
    @property
    def force_discharge(self) -> bool | None: return self._pending.get(PolicyField.FORCE_DISCHARGE)

    def pending_writes(self) -> list[tuple[PolicyField, int | bool]]:
        return list(self._pending.items())

    def apply(self, port: BatteryControlPort) -> None:
        if self.start is not None and self.stop is not None and self.start > self.stop:
            logging.warning('Charge start value "%s" is higher than the stop value "%s"!', self.start, self.stop)

        setters = {
            PolicyField.START_THRESHOLD: port.set_start_threshold,
            PolicyField.STOP_THRESHOLD: port.set_stop_threshold,
            PolicyField.INHIBIT: port.set_inhibit,
            PolicyField.FORCE_DISCHARGE: port.set_force_discharge,
        }
        for field, value in self.pending_writes():
            logging.info("setting %s of battery %s to %s", field.value.replace("_", " "), self.battery, value)
            setters[field](self.battery, value)
