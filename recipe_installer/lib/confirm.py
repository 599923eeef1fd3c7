from __future__ import annotations

import asyncio
import logging

from ..errors import InstallationCancelled
from ..log import TERMINAL_LOGGER_NAME

logger = logging.getLogger(__name__)


def _read_line(prompt: str) -> str:
    # Flush pending wizard output so the prompt appears below it.
    for h in logging.getLogger(TERMINAL_LOGGER_NAME).handlers + logging.getLogger().handlers:
        h.flush()
    return input(f"{prompt} ")


async def wait_for_confirmation(prompt: str) -> None:
    """Suspend until the user presses enter.

    stdin is read on a worker thread so the event loop stays responsive.
    End of input cancels the installation.
    """

    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, _read_line, prompt)
    except EOFError as e:
        logger.info("Confirmation aborted: end of input")
        raise InstallationCancelled("Installation cancelled by user") from e
    logger.debug("Confirmed: %s", prompt)
