from __future__ import annotations


class InstallerError(RuntimeError):
    pass


class InvalidStepError(InstallerError, ValueError):
    """A step definition that can never be executed."""


class StepExecutionError(InstallerError):
    pass


class InstallationCancelled(InstallerError):
    """The user declined or aborted a confirmation prompt."""


class WorkspaceViolation(InstallerError, ValueError):
    """A path that would leave the application root."""
