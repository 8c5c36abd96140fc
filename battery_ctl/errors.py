class BatteryCtlError(Exception):
    """Base class of every error reported by battery-ctl. All of them end the process."""

    exit_code = 1


class DependencyMissing(BatteryCtlError):
    """A backend tool or kernel interface is not available on this system."""


class PermissionDenied(BatteryCtlError):
    """battery-ctl was started without root privileges."""


class ValidationError(BatteryCtlError):
    """A threshold, flag or config value is out of range or malformed."""


class UnknownCommand(BatteryCtlError):
    """The verb or sub-verb is not part of the command grammar."""


class BackendFailure(BatteryCtlError):
    """
    A backend call failed: non-zero exit status, unwritable file or timeout.

    :param command: the command line or file the backend was operating on
    :param returncode: exit status of the backend process, None if it never finished
    :param output: whatever the backend printed
    :param timed_out: True if the call was killed after the configured timeout
    """

    def __init__(self, command: str, returncode: int | None = None, output: str = "", timed_out: bool = False) -> None:
        self.command = command
        self.returncode = returncode
        self.output = output.strip() if output else ""
        self.timed_out = timed_out
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.timed_out: return f"'{self.command}' timed out"
        msg = f"'{self.command}' failed"
        if self.returncode is not None: msg += f" with exit status {self.returncode}"
        if self.output: msg += f": {self.output}"
        return msg
