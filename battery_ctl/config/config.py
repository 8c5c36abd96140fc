from configparser import ConfigParser, Error as ConfigParserError
import logging
import os
import pwd

from battery_ctl.errors import ValidationError
from battery_ctl.globals import SYSTEM_CONFIG_FILE


def get_user_home() -> str:
    """Home of the user behind sudo, falling back to the current home directory."""
    # sudo does not pass the invoking user's env vars
    user = os.getenv("SUDO_USER") or os.getenv("USER")
    if user:
        try: return pwd.getpwnam(user).pw_dir
        except KeyError: logging.debug("no passwd entry for %s", user)
    return os.path.expanduser("~")


def find_config_file(args_config_file: str | None) -> str | None:
    """
    Find the config file to use.

    Look for a config file in the following priorization order:
    1. Command line argument
    2. User config file
    3. System config file

    :param args_config_file: Path to the config file provided as a command line argument
    :return: The path to the config file to use, None if there is none
    """
    if args_config_file is not None:                                # (1) Command line argument was specified
        if os.path.isfile(args_config_file): return args_config_file
        raise ValidationError(f"Config file specified with '--config {args_config_file}' not found.")

    user_config_dir = os.getenv("XDG_CONFIG_HOME", default=os.path.join(get_user_home(), ".config"))
    user_config_file = os.path.join(user_config_dir, "battery-ctl/battery-ctl.conf")

    if os.path.isfile(user_config_file): return user_config_file    # (2) User config file
    if os.path.isfile(SYSTEM_CONFIG_FILE): return SYSTEM_CONFIG_FILE # (3) System config file
    return None


class _Config:
    def __init__(self) -> None:
        self.path: str | None = None
        self._config: ConfigParser = ConfigParser()

    def set_path(self, path: str | None) -> None:
        self.path = path
        self.update_config()

    def has_config(self) -> bool:
        return self.path is not None and os.path.isfile(self.path)

    def get_config(self) -> ConfigParser:
        return self._config

    def update_config(self) -> None:
        # create new ConfigParser to prevent old data from remaining
        self._config = ConfigParser()
        if not self.has_config(): return
        try: self._config.read(self.path)
        except ConfigParserError as e:
            raise ValidationError(f"The following error occured while parsing the config file {self.path}: {e}") from e
        logging.info("using settings defined in %s", self.path)

    def get_option(self, section: str, option: str, fallback: str | None = None) -> str | None:
        return self._config.get(section, option, fallback=fallback)

    def get_int(self, section: str, option: str, fallback: int) -> int:
        if not self._config.has_option(section, option): return fallback
        value = self._config[section][option]
        try: return int(value)
        except ValueError:
            raise ValidationError(f'[{section}] {option} = "{value}" in {self.path} is not an integer') from None

    def get_float(self, section: str, option: str, fallback: float) -> float:
        if not self._config.has_option(section, option): return fallback
        value = self._config[section][option]
        try: return float(value)
        except ValueError:
            raise ValidationError(f'[{section}] {option} = "{value}" in {self.path} is not a number') from None


config = _Config()
