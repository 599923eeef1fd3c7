"""Terminal output for the installation wizard.

Every message goes through the ``recipe_installer.terminal`` logger so the
wizard transcript lands in the log file too. The console formatter in
``logging_utils`` renders these records without timestamps and colours them
according to their ``style``.
"""

from __future__ import annotations

import logging
from typing import Any, Union

TERMINAL_LOGGER_NAME = "recipe_installer.terminal"

_terminal = logging.getLogger(TERMINAL_LOGGER_NAME)


def _emit(level: int, message: str, style: str) -> None:
    _terminal.log(level, message, extra={"style": style})


def branded(message: str) -> None:
    _emit(logging.INFO, message, "branded")


def info(message: str) -> None:
    _emit(logging.INFO, message, "info")


def progress(message: str) -> None:
    _emit(logging.INFO, message, "progress")


def success(message: str) -> None:
    _emit(logging.INFO, message, "success")


def error(err: Union[BaseException, str]) -> None:
    if isinstance(err, BaseException):
        message = str(err) or type(err).__name__
    else:
        message = err
    _emit(logging.ERROR, message, "error")


def newline() -> None:
    _emit(logging.INFO, "", "plain")


def log_step_frontmatter(step: Any) -> None:
    """Draw the step name in a box, followed by its explanation."""

    border = "+" + "-" * (len(step.step_name) + 6) + "+"
    branded(border)
    branded(f"|   {step.step_name}   |")
    branded(border)
    info(step.explanation)
