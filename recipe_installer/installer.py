"""The installer engine.

An installer is an ordered list of steps plus an options record naming the
package and carrying optional lifecycle hooks. ``Installer.run`` walks the
user through it:

    frontmatter + confirmation
    validate_args(cli_args)        errors are reported and stop the run
    pre_install()
    for each step:
        before_each(step_id)
        step frontmatter
        executor(step, cli_args)
        after_each(step_id)
    post_install()
    success message

Only argument validation is guarded. A failure anywhere else means the
installer itself is broken, so it propagates to the caller.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Sequence, Tuple

from . import log
from .executors import CliArgs, Step, StepId, ensure_known_step, execute_step
from .lib.confirm import wait_for_confirmation

logger = logging.getLogger(__name__)

Hook = Callable[..., Any]


@dataclass(frozen=True)
class InstallerOptions:
    package_name: str
    package_description: str
    package_owner: str
    package_repo_link: str
    validate_args: Optional[Callable[[CliArgs], Any]] = None
    pre_install: Optional[Callable[[], Any]] = None
    before_each: Optional[Callable[[StepId], Any]] = None
    after_each: Optional[Callable[[StepId], Any]] = None
    post_install: Optional[Callable[[], Any]] = None


async def _noop(*args: Any) -> None:
    return None


def _as_async(hook: Optional[Hook]) -> Callable[..., Awaitable[None]]:
    """Wrap an optional hook so callers can always ``await hook(...)``.

    Hooks may be coroutine functions or plain callables.
    """
    if hook is None:
        return _noop

    async def call(*args: Any) -> None:
        result = hook(*args)
        if inspect.isawaitable(result):
            await result

    return call


class Installer:
    def __init__(self, options: InstallerOptions, steps: Sequence[Step]) -> None:
        self._options = options
        self._steps: Tuple[Step, ...] = tuple(steps)
        for step in self._steps:
            ensure_known_step(step)

        self._validate_args = _as_async(options.validate_args)
        self._pre_install = _as_async(options.pre_install)
        self._before_each = _as_async(options.before_each)
        self._after_each = _as_async(options.after_each)
        self._post_install = _as_async(options.post_install)

    @property
    def options(self) -> InstallerOptions:
        return self._options

    @property
    def steps(self) -> Tuple[Step, ...]:
        return self._steps

    async def display_frontmatter(self) -> None:
        opts = self._options
        log.branded(f"Welcome to the installer for {opts.package_name}")
        log.branded(opts.package_description)
        log.info(f"This package is authored and supported by {opts.package_owner}")
        log.info(f"For additional documentation and support please visit {opts.package_repo_link}")
        log.newline()
        await wait_for_confirmation("Press enter to begin installation")

    async def run(self, cli_args: CliArgs) -> None:
        await self.display_frontmatter()

        try:
            await self._validate_args(cli_args)
        except Exception as e:
            logger.debug("Argument validation failed for %s", self._options.package_name, exc_info=True)
            log.error(e)
            return

        await self._pre_install()

        for step in self._steps:
            log.newline()
            await self._before_each(step.step_id)

            log.log_step_frontmatter(step)
            logger.info("Running step %s (%s)", step.step_id, step.kind.value)
            await execute_step(step, cli_args)

            await self._after_each(step.step_id)

        await self._post_install()

        log.newline()
        log.success(f"Installer complete, {self._options.package_name} is now configured for your app!")
