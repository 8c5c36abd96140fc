#!/usr/bin/env python3
#
# battery-ctl - laptop battery charging policy controller for Linux

import logging
import sys

import click

from battery_ctl.backends.backend import get_backend
from battery_ctl.config.config import config as conf, find_config_file
from battery_ctl.dialogs import app_version, debug_info
from battery_ctl.errors import BatteryCtlError, UnknownCommand
from battery_ctl.globals import (
    APP_NAME, BACKEND_TIMEOUT, DEFAULT_BACKEND, DEFAULT_BATTERY, DEFAULT_START_THRESHOLD, DEFAULT_STOP_THRESHOLD
)
from battery_ctl.interpreter import CommandInterpreter, Options, parse_command
from battery_ctl.prints import print_error
from battery_ctl.tools import root_check, setup_logger
from battery_ctl.types import BackendName

COMMANDS_HELP = """Control the charging policy of a laptop battery.

\b
Commands:
  status                        show charge, health and thresholds
  charge {start|stop|full}      allow, inhibit or charge to 100%
  discharge {start|stop}        force discharge even on AC power
  limit {on [START STOP]|off}   set charge thresholds (default 40 80) or remove them
"""

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    # lets "limit on -5 80" reach threshold validation
    "ignore_unknown_options": True,
}

@click.command(context_settings=CONTEXT_SETTINGS, help=COMMANDS_HELP)
@click.option("-v", "--verbose", is_flag=True, help="Show progress messages")
@click.option("-b", "--battery", type=int, default=None, help=f"Battery to control, counted from 1 (default {DEFAULT_BATTERY})")
@click.option("-c", "--config", is_flag=False, required=False, help="Use config file at defined path")
@click.option("--backend", type=click.Choice([b.value for b in BackendName]), default=None, help=f"Battery control backend (default {DEFAULT_BACKEND})")
@click.option("--timeout", type=float, default=None, help=f"Seconds to wait for each backend call (default {BACKEND_TIMEOUT})")
@click.option("--debug", is_flag=True, help="Show debug info (include when submitting bugs)")
@click.option("--version", is_flag=True, help="Show currently installed version")
@click.argument("command", required=False)
@click.argument("args", nargs=-1)
@click.pass_context
def cli(ctx, verbose, battery, config, backend, timeout, debug, version, command, args):
    setup_logger(verbose)
    conf.set_path(find_config_file(config))
    log_file = conf.get_option("logging", "file")
    if log_file: setup_logger(verbose, log_file)

    if version:
        app_version()
        return
    if debug:
        debug_info()
        return
    if command is None:
        click.echo(ctx.get_help())
        ctx.exit(1)

    # fail on a bad command before touching the backend
    parsed = parse_command(command, args)
    options = Options(
        battery=battery if battery is not None else conf.get_int("battery", "battery", DEFAULT_BATTERY),
        default_start=conf.get_int("battery", "start_threshold", DEFAULT_START_THRESHOLD),
        default_stop=conf.get_int("battery", "stop_threshold", DEFAULT_STOP_THRESHOLD),
        timeout=timeout if timeout is not None else conf.get_float("battery", "timeout", BACKEND_TIMEOUT),
        verbose=verbose,
    )

    root_check()
    port = get_backend(backend or conf.get_option("battery", "backend", DEFAULT_BACKEND), options.timeout)
    port.check_available()
    logging.info("using the %s backend for battery %s", port.name, options.battery)

    report = CommandInterpreter(port).execute(parsed, options)
    if report is not None: click.echo(report)


def run(argv: list[str] | None = None) -> int:
    """Run battery-ctl and return its exit status, every failure maps to 1."""
    try:
        rv = cli.main(args=argv, prog_name=APP_NAME, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        return 1
    except click.exceptions.Abort:
        print_error("Aborted!")
        return 1
    except UnknownCommand as e:
        print_error(e)
        print(f"Run '{APP_NAME} --help' for the list of commands", file=sys.stderr)
        return e.exit_code
    except BatteryCtlError as e:
        print_error(e)
        return e.exit_code
    return rv if isinstance(rv, int) else 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__": main()
