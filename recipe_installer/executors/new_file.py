from __future__ import annotations

import logging
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Tuple, Union

from .. import log
from ..errors import InvalidStepError, StepExecutionError
from ..lib.confirm import wait_for_confirmation
from ..lib.workspace import Workspace
from .base import BaseStep, CliArgs, StepKind, resolve_arg

logger = logging.getLogger(__name__)

TemplateValues = Union[Mapping[str, Any], Callable[[CliArgs], Mapping[str, Any]]]


def _no_values(cli_args: CliArgs) -> Mapping[str, Any]:
    return {}


@dataclass(frozen=True)
class NewFileStep(BaseStep):
    """Create files from a template shipped with the installer.

    ``template_path`` should be absolute, typically built from the installer
    module's ``__file__``. A relative path is resolved against the working
    directory, which is the application being installed into.
    ``target_directory`` is always relative to the application root.
    """

    kind: ClassVar[StepKind] = StepKind.NEW_FILE

    template_path: Union[str, Path]
    target_directory: Union[str, Callable[[CliArgs], str]] = "."
    template_values: TemplateValues = field(default=_no_values)

    def __post_init__(self) -> None:
        super().__post_init__()
        if not str(self.template_path):
            raise InvalidStepError(f"Step {self.step_id!r}: template_path is required")


def is_new_file_step(step: Any) -> bool:
    return getattr(step, "kind", None) is StepKind.NEW_FILE


def _render_name(name: str, values: Mapping[str, Any]) -> str:
    for key, value in values.items():
        name = name.replace(f"__{key}__", str(value))
    return name


def plan_files(template_path: Path, values: Mapping[str, Any]) -> List[Tuple[Path, str]]:
    """Return (relative output path, rendered content) for every template file."""

    if not template_path.exists():
        raise StepExecutionError(f"Template not found: {template_path}")

    if template_path.is_file():
        sources = [(template_path, Path(template_path.name))]
    else:
        sources = [
            (p, p.relative_to(template_path))
            for p in sorted(template_path.rglob("*"))
            if p.is_file()
        ]

    str_values: Dict[str, str] = {k: str(v) for k, v in values.items()}
    planned: List[Tuple[Path, str]] = []
    seen: Dict[Path, Path] = {}
    for src, rel in sources:
        out_rel = Path(*[_render_name(part, str_values) for part in rel.parts])
        if out_rel in seen:
            raise StepExecutionError(
                f"Template files {seen[out_rel].as_posix()} and {rel.as_posix()} "
                f"both render to {out_rel.as_posix()}"
            )
        seen[out_rel] = rel
        with src.open("r", encoding="utf-8", newline="") as f:
            content = string.Template(f.read()).safe_substitute(str_values)
        planned.append((out_rel, content))
    return planned


async def new_file_executor(step: NewFileStep, cli_args: CliArgs) -> None:
    ws = Workspace.current()
    target_dir = Path(resolve_arg(step.target_directory, cli_args))
    values = resolve_arg(step.template_values, cli_args)

    planned = plan_files(Path(step.template_path), values)
    if not planned:
        raise StepExecutionError(f"Template {step.template_path} contains no files")

    outputs = [(target_dir / rel, content) for rel, content in planned]
    existing = [str(p) for p, _ in outputs if ws.exists(p)]
    if existing:
        raise StepExecutionError(f"Refusing to overwrite existing files: {', '.join(existing)}")

    log.progress("The following files will be created:")
    for p, _ in outputs:
        log.info(f"  {p.as_posix()}")
    await wait_for_confirmation("Press enter to create files")

    for p, content in outputs:
        ws.write_text(p, content)
        logger.info("Created %s (step=%s)", p.as_posix(), step.step_id)
    log.success(f"Created {len(outputs)} file(s)")
