from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

from .log import TERMINAL_LOGGER_NAME

DEFAULT_LOG_PATH = "recipe-installer.log"

_ANSI = {
    "branded": "\033[1;35m",
    "progress": "\033[1;36m",
    "success": "\033[32m",
    "error": "\033[31m",
}
_RESET = "\033[0m"


class ConsoleFormatter(logging.Formatter):
    """Plain wizard output for terminal records, timestamped lines for the rest."""

    def __init__(self, *, use_color: bool = False) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not record.name.startswith(TERMINAL_LOGGER_NAME):
            return super().format(record)
        message = record.getMessage()
        color = _ANSI.get(getattr(record, "style", ""))
        if self.use_color and color and message:
            return f"{color}{message}{_RESET}"
        return message


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: Union[int, str] = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    The log file receives every record, wizard transcript included. If the
    requested path cannot be opened we fall back to a file in the working
    directory.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_recipe_installer_configured", False):
        return getattr(logger, "_recipe_installer_log_path", log_path)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handlers: list[logging.Handler] = []
    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        chosen_path = log_path
    except OSError:
        fallback = str(Path.cwd() / "recipe-installer.log")
        file_handler = logging.FileHandler(fallback)
        chosen_path = fallback
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(ConsoleFormatter(use_color=sys.stdout.isatty()))
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_recipe_installer_configured", True)
    setattr(logger, "_recipe_installer_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
