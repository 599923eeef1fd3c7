from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence, Tuple

from .. import log
from ..errors import InvalidStepError
from ..lib.command import format_argv, run_cmd
from ..lib.workspace import Workspace
from .base import BaseStep, CliArgs, StepKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dependency:
    name: str
    version: Optional[str] = None
    is_dev_dep: bool = False


@dataclass(frozen=True)
class PackageManager:
    name: str
    lockfile: str
    add: Tuple[str, ...]
    dev_flag: str
    version_sep: str = "@"

    def spec(self, dep: Dependency) -> str:
        if dep.version:
            return f"{dep.name}{self.version_sep}{dep.version}"
        return dep.name

    def argv(self, deps: Sequence[Dependency], *, dev: bool) -> list[str]:
        argv = list(self.add)
        if dev:
            argv.append(self.dev_flag)
        return argv + [self.spec(d) for d in deps]


# Checked in order; the first lockfile present wins.
PACKAGE_MANAGERS: Tuple[PackageManager, ...] = (
    PackageManager("yarn", "yarn.lock", ("yarn", "add"), "--dev"),
    PackageManager("pnpm", "pnpm-lock.yaml", ("pnpm", "add"), "--save-dev"),
    PackageManager("npm", "package-lock.json", ("npm", "install"), "--save-dev"),
    PackageManager("poetry", "poetry.lock", ("poetry", "add"), "--group=dev"),
    PackageManager("uv", "uv.lock", ("uv", "add"), "--dev", version_sep="=="),
)
DEFAULT_PACKAGE_MANAGER = PACKAGE_MANAGERS[2]


@dataclass(frozen=True)
class AddDependencyStep(BaseStep):
    kind: ClassVar[StepKind] = StepKind.ADD_DEPENDENCY

    packages: Tuple[Dependency, ...]

    def __post_init__(self) -> None:
        super().__post_init__()
        # Freeze whatever sequence the caller handed in.
        object.__setattr__(self, "packages", tuple(self.packages))
        if not self.packages:
            raise InvalidStepError(f"Step {self.step_id!r}: packages must not be empty")
        for dep in self.packages:
            if not isinstance(dep, Dependency) or not dep.name.strip():
                raise InvalidStepError(f"Step {self.step_id!r}: invalid dependency {dep!r}")


def is_add_dependency_step(step: Any) -> bool:
    return getattr(step, "kind", None) is StepKind.ADD_DEPENDENCY


def detect_package_manager(ws: Workspace) -> PackageManager:
    for pm in PACKAGE_MANAGERS:
        if (ws.root / pm.lockfile).exists():
            return pm
    return DEFAULT_PACKAGE_MANAGER


async def add_dependency_executor(step: AddDependencyStep, cli_args: CliArgs) -> None:
    ws = Workspace.current()
    pm = detect_package_manager(ws)
    logger.info("Using package manager %s (step=%s)", pm.name, step.step_id)

    regular = [d for d in step.packages if not d.is_dev_dep]
    dev = [d for d in step.packages if d.is_dev_dep]

    for deps, is_dev in ((regular, False), (dev, True)):
        if not deps:
            continue
        argv = pm.argv(deps, dev=is_dev)
        log.progress(f"Running {format_argv(argv)}")
        await asyncio.to_thread(run_cmd, argv, cwd=str(ws.root))

    log.success("Dependencies installed")
