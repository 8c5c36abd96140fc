from battery_ctl.backends.port import BatteryControlPort


class StatusReporter:
    def __init__(self, port: BatteryControlPort) -> None:
        self.port = port

    def report(self, battery: int) -> str:
        """Telemetry block, then the start and stop threshold lines. Read errors propagate."""
        telemetry = self.port.telemetry(battery).rstrip()
        start = self.port.get_start_threshold(battery)
        stop = self.port.get_stop_threshold(battery)
        return "\n".join((
            telemetry,
            f"Battery {battery} start threshold = {start}",
            f"Battery {battery} stop threshold = {stop}",
        ))
