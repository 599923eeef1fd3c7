from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

from . import log
from .config import load_settings
from .errors import InstallationCancelled
from .installer import Installer
from .logging_utils import configure_logging

logger = logging.getLogger(__name__)


def run_installer(
    installer: Installer,
    cli_args: Optional[Mapping[str, Any]] = None,
    *,
    config_path: Optional[str] = None,
) -> int:
    """Configure logging and run an installer to completion.

    Returns a process exit code. Failures other than a user cancellation are
    logged and re-raised.
    """

    settings = load_settings(config_path)
    actual_log_path = configure_logging(
        log_path=settings.log_path,
        level=settings.log_level,
        also_console=settings.console,
    )
    logger.info(
        "Starting installer for %s (log=%s)", installer.options.package_name, actual_log_path
    )

    try:
        asyncio.run(installer.run(dict(cli_args or {})))
    except (InstallationCancelled, KeyboardInterrupt):
        log.newline()
        log.error("Installation cancelled")
        return 130
    except Exception:
        logger.exception("Installer for %s failed", installer.options.package_name)
        raise
    return 0
