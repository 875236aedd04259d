"""Regression tests for optional CLI UI dependencies (rich/questionary).

These tests verify bootstrap commands are resilient when optional UI
packages are missing, and prompting fails cleanly only when the
prompt engine is actually exercised.
"""

from __future__ import annotations

import sys

import pytest

from argprompt.cli import exit_codes
from argprompt.cli.app import main
from argprompt.cli.console import console, escape
from argprompt.cli.prompt_engine import QuestionaryPromptEngine
from argprompt.core.models import ParameterKind, QuestionDescriptor
from argprompt.exceptions import EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


def test_help_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_no_command_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    assert main([]) == exit_codes.SUCCESS


def test_console_falls_back_to_plain_stderr(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    console.print("[bold red]Error[/bold red]: zzz")
    assert capsys.readouterr().err.strip() == "Error: zzz"


def test_escape_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    assert escape("[name]") == "[name]"


@pytest.mark.asyncio
async def test_prompting_errors_cleanly_when_questionary_missing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_questionary(monkeypatch)

    question = QuestionDescriptor(name="name", type=ParameterKind.TEXT, message="Name?")
    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        await QuestionaryPromptEngine().prompt([question])


def test_burger_errors_cleanly_when_questionary_missing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_questionary(monkeypatch)

    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        main(["burger", "my-burger"])
