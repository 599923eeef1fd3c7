from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import ClassVar

import pytest

from recipe_installer import (
    AddDependencyStep,
    Dependency,
    FileTransformStep,
    Installer,
    InvalidStepError,
    NewFileStep,
)


def _transform(step_id, name="Update config"):
    return FileTransformStep(
        step_id=step_id,
        step_name=name,
        explanation="Adds the plugin to the config file",
        single_file_search="app.config.js",
        transform=lambda source, args: source,
    )


def _add_dependency(step_id):
    return AddDependencyStep(
        step_id=step_id,
        step_name="Install packages",
        explanation="Installs the runtime packages",
        packages=(Dependency("tailwindcss", "2.0.0"),),
    )


def _new_file(step_id):
    return NewFileStep(
        step_id=step_id,
        step_name="Add stylesheet",
        explanation="Creates the global stylesheet",
        template_path="templates/styles",
    )


def _recording_hooks(calls, **raising):
    """Async hooks that record their invocation; ``raising`` maps hook name -> step_id (or True)."""

    def hook(name):
        async def call(*args):
            calls.append((name, *args))
            target = raising.get(name)
            if target is True or (args and target == args[0]):
                raise RuntimeError(f"{name} failed")

        return call

    return {
        name: hook(name)
        for name in ("validate_args", "pre_install", "before_each", "after_each", "post_install")
    }


def test_scenario_no_hooks_runs_each_executor_in_order(
    make_options, fake_executors, confirmations, calls, terminal_records
):
    installer = Installer(make_options(), [_transform(1), _add_dependency(2)])

    asyncio.run(installer.run({"name": "app"}))

    assert confirmations == ["Press enter to begin installation"]
    assert [c for c in calls if c[0] == "exec"] == [
        ("exec", "file-transform", 1),
        ("exec", "add-dependency", 2),
    ]
    assert [c[0] for c in calls] == ["confirm", "exec", "exec"]
    successes = [r for r in terminal_records() if getattr(r, "style", None) == "success"]
    assert len(successes) == 1
    assert "tailwind" in successes[0].getMessage()


def test_cli_args_are_forwarded_unchanged(make_options, fake_executors, confirmations, calls):
    seen = []

    async def validate(args):
        seen.append(args)

    cli_args = {"name": "app", "flags": ["--x"]}
    installer = Installer(make_options(validate_args=validate), [_transform(1), _new_file(2)])
    asyncio.run(installer.run(cli_args))

    assert seen == [cli_args]
    assert all(a is cli_args for a in fake_executors["args"])


def test_scenario_validation_failure_stops_quietly(
    make_options, fake_executors, confirmations, calls, terminal_records
):
    hooks = _recording_hooks(calls, validate_args=True)
    installer = Installer(make_options(**hooks), [_transform(1), _add_dependency(2)])

    asyncio.run(installer.run({}))

    errors = terminal_records(logging.ERROR)
    assert len(errors) == 1
    assert errors[0].getMessage() == "validate_args failed"
    assert [c[0] for c in calls] == ["confirm", "validate_args"]


def test_validation_error_without_message_reports_type(
    make_options, fake_executors, confirmations, terminal_records
):
    def validate(args):
        raise ValueError()

    asyncio.run(Installer(make_options(validate_args=validate), [_transform(1)]).run({}))

    assert [r.getMessage() for r in terminal_records(logging.ERROR)] == ["ValueError"]


def test_missing_validate_args_proceeds(make_options, fake_executors, confirmations, calls):
    hooks = _recording_hooks(calls)
    del hooks["validate_args"]
    installer = Installer(make_options(**hooks), [_transform("a")])

    asyncio.run(installer.run({}))

    assert [c[0] for c in calls] == [
        "confirm",
        "pre_install",
        "before_each",
        "exec",
        "after_each",
        "post_install",
    ]


def test_hooks_wrap_every_step_in_order(make_options, fake_executors, confirmations, calls):
    hooks = _recording_hooks(calls)
    steps = [_transform(1), _add_dependency("two"), _new_file(3)]

    asyncio.run(Installer(make_options(**hooks), steps).run({}))

    assert calls == [
        ("confirm", "Press enter to begin installation"),
        ("validate_args", {}),
        ("pre_install",),
        ("before_each", 1),
        ("exec", "file-transform", 1),
        ("after_each", 1),
        ("before_each", "two"),
        ("exec", "add-dependency", "two"),
        ("after_each", "two"),
        ("before_each", 3),
        ("exec", "new-file", 3),
        ("after_each", 3),
        ("post_install",),
    ]


def test_executor_failure_aborts_remaining_steps(make_options, fake_executors, confirmations, calls):
    hooks = _recording_hooks(calls)
    fake_executors["failing"].add(2)
    steps = [_transform(1), _add_dependency(2), _new_file(3)]

    with pytest.raises(RuntimeError, match="executor failed for 2"):
        asyncio.run(Installer(make_options(**hooks), steps).run({}))

    names = [c[0] for c in calls]
    assert ("exec", "add-dependency", 2) in calls
    assert ("after_each", 2) not in calls
    assert ("before_each", 3) not in calls
    assert ("exec", "new-file", 3) not in calls
    assert "post_install" not in names


def test_scenario_before_each_failure_on_second_step(make_options, fake_executors, confirmations, calls):
    hooks = _recording_hooks(calls, before_each=2)
    steps = [_transform(1), _add_dependency(2)]

    with pytest.raises(RuntimeError, match="before_each failed"):
        asyncio.run(Installer(make_options(**hooks), steps).run({}))

    assert ("exec", "file-transform", 1) in calls
    assert ("before_each", 2) in calls
    assert ("exec", "add-dependency", 2) not in calls
    assert ("after_each", 2) not in calls
    assert ("post_install",) not in calls


@pytest.mark.parametrize("hook", ["pre_install", "post_install"])
def test_pre_and_post_install_failures_propagate(make_options, fake_executors, confirmations, calls, hook):
    hooks = _recording_hooks(calls, **{hook: True})

    with pytest.raises(RuntimeError, match=f"{hook} failed"):
        asyncio.run(Installer(make_options(**hooks), [_transform(1)]).run({}))


def test_pre_install_failure_runs_no_steps(make_options, fake_executors, confirmations, calls):
    hooks = _recording_hooks(calls, pre_install=True)

    with pytest.raises(RuntimeError):
        asyncio.run(Installer(make_options(**hooks), [_transform(1)]).run({}))

    assert not [c for c in calls if c[0] in {"exec", "before_each", "post_install"}]


def test_plain_function_hooks_are_supported(make_options, fake_executors, confirmations, calls):
    installer = Installer(
        make_options(
            pre_install=lambda: calls.append(("pre_install",)),
            before_each=lambda step_id: calls.append(("before_each", step_id)),
        ),
        [_transform(1)],
    )

    asyncio.run(installer.run({}))

    assert calls[1:3] == [("pre_install",), ("before_each", 1)]


def test_frontmatter_lists_package_details(make_options, fake_executors, confirmations, terminal_records):
    asyncio.run(Installer(make_options(), []).run({}))

    messages = [r.getMessage() for r in terminal_records()]
    assert messages[:4] == [
        "Welcome to the installer for tailwind",
        "Adds Tailwind CSS to your app",
        "This package is authored and supported by Jane Doe <jane@example.com>",
        "For additional documentation and support please visit https://example.com/recipes/tailwind",
    ]
    styles = [r.style for r in terminal_records()[:4]]
    assert styles == ["branded", "branded", "info", "info"]


def test_step_frontmatter_is_rendered_before_executor(
    make_options, fake_executors, confirmations, terminal_records
):
    asyncio.run(Installer(make_options(), [_transform(1, name="Update config")]).run({}))

    messages = [r.getMessage() for r in terminal_records()]
    assert "|   Update config   |" in messages
    assert "Adds the plugin to the config file" in messages


def test_unknown_step_kind_is_rejected_at_construction(make_options, fake_executors, confirmations):
    @dataclass(frozen=True)
    class RunScriptStep:
        kind: ClassVar[str] = "run-script"
        step_id: str = "script"
        step_name: str = "Run a script"
        explanation: str = "Runs an arbitrary script"

    with pytest.raises(InvalidStepError, match="unknown kind"):
        Installer(make_options(), [_transform(1), RunScriptStep()])
    assert confirmations == []


def test_steps_are_copied_at_construction(make_options):
    steps = [_transform(1)]
    installer = Installer(make_options(), steps)
    steps.append(_transform(2))

    assert [s.step_id for s in installer.steps] == [1]
