from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Mapping, TypeVar, Union

from ..errors import InvalidStepError

StepId = Union[str, int]
CliArgs = Mapping[str, Any]

T = TypeVar("T")


class StepKind(str, enum.Enum):
    FILE_TRANSFORM = "file-transform"
    ADD_DEPENDENCY = "add-dependency"
    NEW_FILE = "new-file"


@dataclass(frozen=True)
class BaseStep:
    """Fields shared by every step; the subclass fixes ``kind``."""

    kind: ClassVar[StepKind]

    step_id: StepId
    step_name: str
    explanation: str

    def __post_init__(self) -> None:
        if isinstance(self.step_id, bool) or not isinstance(self.step_id, (str, int)):
            raise InvalidStepError(f"step_id must be a string or an int, got {self.step_id!r}")
        for name in ("step_name", "explanation"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidStepError(f"Step {self.step_id!r}: {name} is required")


def resolve_arg(value: Union[T, Callable[[CliArgs], T]], cli_args: CliArgs) -> T:
    """Return ``value`` itself, or its result when it is computed from the CLI args."""
    if callable(value):
        return value(cli_args)
    return value
