"""Shared fixtures for the installer tests.

The confirmation prompt and the executors are replaced with recorders so the
engine can be exercised without a terminal, a package manager or an app tree.
"""

from __future__ import annotations

import logging

import pytest

from recipe_installer import InstallerOptions
from recipe_installer.executors import EXECUTORS, StepKind
from recipe_installer.log import TERMINAL_LOGGER_NAME


@pytest.fixture
def calls() -> list:
    """Ordered record of every hook, executor and prompt invocation."""
    return []


@pytest.fixture
def confirmations(monkeypatch, calls) -> list:
    prompts: list[str] = []

    async def fake_confirm(prompt: str) -> None:
        prompts.append(prompt)
        calls.append(("confirm", prompt))

    monkeypatch.setattr("recipe_installer.installer.wait_for_confirmation", fake_confirm)
    monkeypatch.setattr("recipe_installer.executors.file_transform.wait_for_confirmation", fake_confirm)
    monkeypatch.setattr("recipe_installer.executors.new_file.wait_for_confirmation", fake_confirm)
    return prompts


@pytest.fixture
def fake_executors(monkeypatch, calls) -> dict:
    """Replace every executor with a recorder.

    Put a step_id into the returned ``failing`` set to make its executor raise.
    """
    state = {"failing": set(), "args": []}

    def make(kind: StepKind):
        async def executor(step, cli_args) -> None:
            calls.append(("exec", kind.value, step.step_id))
            state["args"].append(cli_args)
            if step.step_id in state["failing"]:
                raise RuntimeError(f"executor failed for {step.step_id}")

        return executor

    for kind in StepKind:
        monkeypatch.setitem(EXECUTORS, kind, make(kind))
    return state


@pytest.fixture
def make_options():
    def factory(**hooks) -> InstallerOptions:
        return InstallerOptions(
            package_name="tailwind",
            package_description="Adds Tailwind CSS to your app",
            package_owner="Jane Doe <jane@example.com>",
            package_repo_link="https://example.com/recipes/tailwind",
            **hooks,
        )

    return factory


@pytest.fixture
def terminal_records(caplog):
    caplog.set_level(logging.DEBUG, logger=TERMINAL_LOGGER_NAME)

    def records(level: int | None = None) -> list[logging.LogRecord]:
        return [
            r
            for r in caplog.records
            if r.name == TERMINAL_LOGGER_NAME and (level is None or r.levelno == level)
        ]

    return records


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_recipe_installer_configured", "_recipe_installer_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
