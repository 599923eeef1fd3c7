"""Recipe installer: a step-by-step wizard that applies an installer to an app.

Core design goals:
- Steps are declarative, typed and explain themselves before they run
- Strictly sequential execution with optional lifecycle hooks
- Argument validation fails gracefully, everything else fails loudly
- Centralized logging
"""

from .errors import (
    InstallationCancelled,
    InstallerError,
    InvalidStepError,
    StepExecutionError,
    WorkspaceViolation,
)
from .executors import (
    AddDependencyStep,
    Dependency,
    FileTransformStep,
    NewFileStep,
    StepKind,
)
from .installer import Installer, InstallerOptions

__all__ = [
    "AddDependencyStep",
    "Dependency",
    "FileTransformStep",
    "InstallationCancelled",
    "Installer",
    "InstallerError",
    "InstallerOptions",
    "InvalidStepError",
    "NewFileStep",
    "StepExecutionError",
    "StepKind",
    "WorkspaceViolation",
]
