"""Logging for vmhop.

Every message goes to a rotating log file; most of them are also echoed to
the terminal through a shared Rich console, styled by level.

    logger = get_logger(__name__)
    logger.info("Fetching servers")
    logger.success("Port 2222 has been saved")
    logger.error("Error fetching vultr servers", exc=e)

Environment Variables:
    VMHOP_DEBUG=1           Echo debug messages to the terminal
    VMHOP_LOG_LEVEL=DEBUG   Log level (DEBUG, INFO, WARNING, ERROR)
    VMHOP_LOG_FILE=/path    Log file (default: ~/.local/share/vmhop/logs/vmhop.log)
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from vmhop.paths import HostPaths

console = Console()

SUCCESS_LEVEL = 25
logging.addLevelName(SUCCESS_LEVEL, "SUCCESS")

ROOT_LOGGER = "vmhop"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3

# level -> (rich style, prefix) for terminal echo
_CONSOLE_STYLES = {
    logging.DEBUG: ("dim", "[DEBUG] "),
    logging.INFO: ("blue", ""),
    SUCCESS_LEVEL: ("green", "✓ "),
    logging.WARNING: ("yellow", "⚠ "),
    logging.ERROR: ("red", "✗ "),
}

_state = {"configured": False, "debug": False, "log_file": None}


def _truthy(value: Optional[str]) -> bool:
    return (value or "").lower() in ("1", "true", "yes")


def log_file_path() -> Path:
    if _state["log_file"] is None:
        override = os.environ.get("VMHOP_LOG_FILE")
        _state["log_file"] = Path(override) if override else HostPaths.log_dir() / "vmhop.log"
    return _state["log_file"]


def is_debug_mode() -> bool:
    return _state["debug"] or _truthy(os.environ.get("VMHOP_DEBUG"))


def _level_from(name: Optional[str], debug: bool) -> int:
    name = (name or os.environ.get("VMHOP_LOG_LEVEL") or ("DEBUG" if debug else "INFO")).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    debug: bool = False,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> None:
    """Set up the vmhop logger tree.

    The first call installs the file handler. Later calls can only turn
    debug mode on (modules configure logging implicitly on import, before
    the CLI has parsed --debug).
    """
    root = logging.getLogger(ROOT_LOGGER)

    if _state["configured"]:
        if debug and not _state["debug"]:
            _state["debug"] = True
            root.setLevel(_level_from(log_level, debug=True))
        return

    _state["debug"] = debug or _truthy(os.environ.get("VMHOP_DEBUG"))
    if log_file:
        _state["log_file"] = Path(log_file)

    root.setLevel(_level_from(log_level, _state["debug"]))
    root.propagate = False
    root.handlers.clear()

    path = log_file_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        )
    except OSError:
        # No writable log location; terminal output still works
        root.addHandler(logging.NullHandler())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)

    _state["configured"] = True
    root.debug(f"Logging configured: level={logging.getLevelName(root.level)} file={path}")


class vmhopLogger:
    """Module logger that writes to the log file and echoes to the console.

    Every method takes console_output to control the terminal echo. Debug
    messages are only echoed in debug mode unless asked for explicitly.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self.console = console

    def _emit(self, level: int, message: str, console_output: bool, exc=None) -> None:
        self.logger.log(level, message, exc_info=exc)
        if console_output:
            style, prefix = _CONSOLE_STYLES[level]
            self.console.print(f"[{style}]{prefix}{escape(message)}[/{style}]")

    def debug(self, message: str, console_output: bool = False) -> None:
        self._emit(logging.DEBUG, message, console_output or is_debug_mode())

    def info(self, message: str, console_output: bool = True) -> None:
        self._emit(logging.INFO, message, console_output)

    def success(self, message: str, console_output: bool = True) -> None:
        self._emit(SUCCESS_LEVEL, message, console_output)

    def warning(self, message: str, console_output: bool = True) -> None:
        self._emit(logging.WARNING, message, console_output)

    def error(
        self,
        message: str,
        exc: Optional[BaseException] = None,
        console_output: bool = True,
    ) -> None:
        """Log an error; with exc, the traceback goes to the log file only."""
        if exc is not None:
            message = f"{message}: {exc}"
        self._emit(logging.ERROR, message, console_output, exc=exc)

    def print(self, message: str, style: Optional[str] = None) -> None:
        """Terminal output that should not end up in the log."""
        self.console.print(f"[{style}]{message}[/{style}]" if style else message)


def get_logger(name: str) -> vmhopLogger:
    """Logger for a module, always under the vmhop namespace."""
    if not _state["configured"]:
        configure_logging()

    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return vmhopLogger(name)


def log_startup_info() -> None:
    logger = get_logger("startup")
    logger.debug(f"vmhop on Python {sys.version.split()[0]} ({sys.platform})")
    logger.debug(f"Debug mode: {is_debug_mode()}, log file: {log_file_path()}")

    for var in ("VMHOP_DEBUG", "VMHOP_LOG_LEVEL", "VMHOP_PORT_STORE", "VMHOP_SSH_USER"):
        value = os.environ.get(var)
        if value:
            logger.debug(f"ENV {var}={value}")
