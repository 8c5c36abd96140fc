import logging
from dataclasses import dataclass
from typing import Callable, NamedTuple

from battery_ctl.backends.port import BatteryControlPort
from battery_ctl.errors import UnknownCommand, ValidationError
from battery_ctl.globals import (
    BACKEND_TIMEOUT, DEFAULT_BATTERY, DEFAULT_START_THRESHOLD, DEFAULT_STOP_THRESHOLD, FULL_CHARGE_THRESHOLD
)
from battery_ctl.policy import PolicyModel, parse_threshold, validate_threshold
from battery_ctl.status import StatusReporter
from battery_ctl.types import SUB_VERBS, ChargeAction, DischargeAction, LimitAction, Verb


@dataclass(frozen=True)
class Options:
    battery: int = DEFAULT_BATTERY
    default_start: int = DEFAULT_START_THRESHOLD
    default_stop: int = DEFAULT_STOP_THRESHOLD
    timeout: float = BACKEND_TIMEOUT
    verbose: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.battery, bool) or not isinstance(self.battery, int) or self.battery < 1:
            raise ValidationError(f'Battery "{self.battery}" is invalid, batteries are numbered from 1')
        validate_threshold(self.default_start)
        validate_threshold(self.default_stop)
        if self.timeout <= 0: raise ValidationError(f'Timeout "{self.timeout}" must be positive')


class Command(NamedTuple):
    verb: Verb
    action: ChargeAction | DischargeAction | LimitAction | None = None
    args: tuple[str, ...] = ()


# number of arguments each command accepts, commands not listed take none
MAX_ARGS = {(Verb.LIMIT, LimitAction.ON): 2}


def parse_command(verb: str | None, args: tuple[str, ...] | list[str] = ()) -> Command:
    """Turn the words of the command line into a Command, UnknownCommand if they are not in the grammar."""
    if not verb: raise UnknownCommand("No command given")
    try: parsed_verb = Verb(verb)
    except ValueError:
        raise UnknownCommand(f'Unknown command "{verb}"') from None

    args = tuple(args)
    actions = SUB_VERBS[parsed_verb]
    action = None
    if actions is not None:
        if not args:
            raise UnknownCommand(f'"{verb}" needs one of: '+", ".join(a.value for a in actions))
        try: action = actions(args[0])
        except ValueError:
            raise UnknownCommand(f'Unknown "{verb}" command "{args[0]}"') from None
        args = args[1:]

    if len(args) > MAX_ARGS.get((parsed_verb, action), 0):
        name = " ".join(w for w in (verb, action.value if action else None) if w)
        raise UnknownCommand(f'Too many arguments for "{name}": '+" ".join(args))
    return Command(parsed_verb, action, args)


class CommandInterpreter:
    """
    Maps a Command onto PolicyModel changes and applies them on a BatteryControlPort.

    Every change is validated before the first backend write, so an invalid
    command never reaches the hardware.
    """

    def __init__(self, port: BatteryControlPort, reporter: StatusReporter | None = None) -> None:
        self.port = port
        self.reporter = reporter or StatusReporter(port)
        self._handlers: dict[tuple[Verb, object], Callable[[PolicyModel, Command, Options], None]] = {
            (Verb.CHARGE, ChargeAction.START): self._charge_start,
            (Verb.CHARGE, ChargeAction.STOP): self._charge_stop,
            (Verb.CHARGE, ChargeAction.FULL): self._full_charge,
            (Verb.DISCHARGE, DischargeAction.START): self._discharge_start,
            (Verb.DISCHARGE, DischargeAction.STOP): self._discharge_stop,
            (Verb.LIMIT, LimitAction.ON): self._limit_on,
            (Verb.LIMIT, LimitAction.OFF): self._full_charge,
        }
        missing = [
            f"{verb.value} {action.value}"
            for verb, actions in SUB_VERBS.items() if actions is not None
            for action in actions if (verb, action) not in self._handlers
        ]
        if missing: raise RuntimeError("No handler for: "+", ".join(missing))

    def execute(self, command: Command, options: Options) -> str | None:
        """
        Run one command.

        :return: the status report for "status", None for every other command
        """
        if command.verb is Verb.STATUS:
            logging.info("reading status of battery %s", options.battery)
            return self.reporter.report(options.battery)

        handler = self._handlers.get((command.verb, command.action))
        if handler is None: raise UnknownCommand(f"Unknown command {command.verb.value} {command.action}")

        policy = PolicyModel(options.battery)
        handler(policy, command, options)
        policy.apply(self.port)
        return None

    def _charge_start(self, policy: PolicyModel, command: Command, options: Options) -> None:
        policy.set_inhibit(False, options.battery)

    def _charge_stop(self, policy: PolicyModel, command: Command, options: Options) -> None:
        policy.set_inhibit(True, options.battery)

    def _full_charge(self, policy: PolicyModel, command: Command, options: Options) -> None:
        policy.set_start_threshold(FULL_CHARGE_THRESHOLD, options.battery)
        policy.set_stop_threshold(FULL_CHARGE_THRESHOLD, options.battery)

    def _discharge_start(self, policy: PolicyModel, command: Command, options: Options) -> None:
        policy.set_force_discharge(True, options.battery)

    def _discharge_stop(self, policy: PolicyModel, command: Command, options: Options) -> None:
        policy.set_force_discharge(False, options.battery)

    def _limit_on(self, policy: PolicyModel, command: Command, options: Options) -> None:
        # both thresholds or none, a lone argument falls back to the defaults too
        if len(command.args) == 2 and all(command.args):
            start, stop = (parse_threshold(arg) for arg in command.args)
        else:
            if command.args: logging.info("limit on needs both thresholds, using defaults")
            start, stop = options.default_start, options.default_stop
        policy.set_start_threshold(start, options.battery)
        policy.set_stop_threshold(stop, options.battery)
