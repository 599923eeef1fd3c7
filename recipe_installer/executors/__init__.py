from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Union

from ..errors import InvalidStepError
from .add_dependency import AddDependencyStep, Dependency, add_dependency_executor, is_add_dependency_step
from .base import BaseStep, CliArgs, StepId, StepKind
from .file_transform import FileTransformStep, file_transform_executor, is_file_transform_step
from .new_file import NewFileStep, is_new_file_step, new_file_executor

Step = Union[FileTransformStep, AddDependencyStep, NewFileStep]
Executor = Callable[[Any, CliArgs], Awaitable[None]]

EXECUTORS: Dict[StepKind, Executor] = {
    StepKind.FILE_TRANSFORM: file_transform_executor,
    StepKind.ADD_DEPENDENCY: add_dependency_executor,
    StepKind.NEW_FILE: new_file_executor,
}


def ensure_known_step(step: Any) -> StepKind:
    """Return the step's kind, or raise if no executor handles it."""

    kind = getattr(step, "kind", None)
    if not isinstance(kind, StepKind) or kind not in EXECUTORS:
        raise InvalidStepError(
            f"Step {getattr(step, 'step_id', step)!r} has unknown kind {kind!r}; "
            f"expected one of: {', '.join(k.value for k in StepKind)}"
        )
    return kind


async def execute_step(step: Step, cli_args: CliArgs) -> None:
    await EXECUTORS[ensure_known_step(step)](step, cli_args)


__all__ = [
    "AddDependencyStep",
    "BaseStep",
    "CliArgs",
    "Dependency",
    "EXECUTORS",
    "Executor",
    "FileTransformStep",
    "NewFileStep",
    "Step",
    "StepId",
    "StepKind",
    "add_dependency_executor",
    "ensure_known_step",
    "execute_step",
    "file_transform_executor",
    "is_add_dependency_step",
    "is_file_transform_step",
    "is_new_file_step",
    "new_file_executor",
]
