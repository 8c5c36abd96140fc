from abc import ABC, abstractmethod


class BatteryControlPort(ABC):
    """
    Primitive battery operations battery-ctl needs from the system.

    Every write is idempotent and keyed by the battery index (1 is the main
    battery). Implementations raise DependencyMissing when their tools are
    absent and BackendFailure when a call fails; they never retry.
    """

    name: str = ""

    @abstractmethod
    def check_available(self) -> None:
        """Raise DependencyMissing unless the backend can be used on this system."""

    @abstractmethod
    def set_start_threshold(self, battery: int, value: int) -> None: ...

    @abstractmethod
    def set_stop_threshold(self, battery: int, value: int) -> None: ...

    @abstractmethod
    def set_inhibit(self, battery: int, flag: bool) -> None: ...

    @abstractmethod
    def set_force_discharge(self, battery: int, flag: bool) -> None: ...

    @abstractmethod
    def get_start_threshold(self, battery: int) -> int: ...

    @abstractmethod
    def get_stop_threshold(self, battery: int) -> int: ...

    @abstractmethod
    def telemetry(self, battery: int) -> str:
        """Free-form charge and health text for the battery."""
