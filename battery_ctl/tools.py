import logging
from logging.handlers import RotatingFileHandler
import os
import sys

from battery_ctl.errors import PermissionDenied


class ConditionalFormatter(logging.Formatter):
    """Log file formatter: records at ERROR and above point at file:line, the rest at their module."""

    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s [%(levelname)s] [%(module)s] %(message)s", datefmt=self.DATE_FORMAT)
        self._located = logging.Formatter(
            "%(asctime)s [%(levelname)s] [%(filename)s:%(lineno)d] %(message)s", datefmt=self.DATE_FORMAT
        )

    def format(self, record) -> str:
        if record.levelno >= logging.ERROR: return self._located.format(record)
        return super().format(record)


def setup_logger(verbose: bool = False, log_file: str | None = None) -> None:
    """Set up logging for one battery-ctl run.

    Progress messages are logged at INFO and only reach the terminal in verbose
    mode. The optional log file always records INFO and above.
    """
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter("[%(levelname)s] [%(module)s] %(message)s"))
    stream_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    handlers: list[logging.Handler] = [stream_handler]

    log_file_error = None
    if log_file:
        try:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10*1024*1024, # 10MB
                encoding="utf-8"
            )
            file_handler.setFormatter(ConditionalFormatter())
            file_handler.setLevel(logging.INFO)
            handlers.append(file_handler)
        except OSError as e: log_file_error = e

    logging.basicConfig(level=logging.INFO, handlers=handlers, force=True)
    if log_file_error is not None: logging.warning("unable to log to %s: %s", log_file, log_file_error)


def root_check() -> None:
    if os.geteuid() != 0:
        raise PermissionDenied("Must be run as root for this functionality to work, i.e: sudo battery-ctl")
