from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Union

from .. import log
from ..errors import InvalidStepError, StepExecutionError
from ..lib.confirm import wait_for_confirmation
from ..lib.workspace import Workspace
from .base import BaseStep, CliArgs, StepKind, resolve_arg

logger = logging.getLogger(__name__)

Transform = Callable[[str, CliArgs], str]


@dataclass(frozen=True)
class FileTransformStep(BaseStep):
    kind: ClassVar[StepKind] = StepKind.FILE_TRANSFORM

    single_file_search: Union[str, Callable[[CliArgs], str]]
    transform: Transform

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.single_file_search:
            raise InvalidStepError(f"Step {self.step_id!r}: single_file_search is required")
        if not callable(self.transform):
            raise InvalidStepError(f"Step {self.step_id!r}: transform must be callable")


def is_file_transform_step(step: Any) -> bool:
    return getattr(step, "kind", None) is StepKind.FILE_TRANSFORM


def _find_single_file(ws: Workspace, pattern: str) -> str:
    if not isinstance(pattern, str) or not pattern.strip():
        raise StepExecutionError(f"single_file_search resolved to an empty pattern: {pattern!r}")
    matches = ws.glob(pattern)
    if not matches:
        raise StepExecutionError(f"No file matches {pattern!r}")
    if len(matches) > 1:
        found = ", ".join(ws.relative(p) for p in matches)
        raise StepExecutionError(f"Expected exactly one file matching {pattern!r}, found: {found}")
    return ws.relative(matches[0])


def render_diff(path: str, before: str, after: str) -> str:
    lines = difflib.unified_diff(
        before.splitlines(keepends=True),
        after.splitlines(keepends=True),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    )
    return "".join(lines).rstrip("\n")


async def file_transform_executor(step: FileTransformStep, cli_args: CliArgs) -> None:
    ws = Workspace.current()
    pattern = resolve_arg(step.single_file_search, cli_args)
    path = _find_single_file(ws, pattern)

    original = ws.read_text(path)
    updated = step.transform(original, cli_args)
    if not isinstance(updated, str):
        raise StepExecutionError(f"Transform for {path} returned {type(updated).__name__}, expected str")

    if updated == original:
        log.info(f"No changes needed in {path}")
        return

    log.progress(f"Proposed changes to {path}:")
    log.info(render_diff(path, original, updated))
    await wait_for_confirmation("Press enter to apply changes")

    ws.write_text(path, updated)
    logger.info("Transformed %s (step=%s)", path, step.step_id)
    log.success(f"Updated {path}")
