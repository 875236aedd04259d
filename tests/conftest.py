"""Shared pytest fixtures and configuration for the argprompt test suite.

Guidelines
----------
* No terminal interaction in any test: the prompt engine is faked
  unless questionary itself is mocked.
* Core tests must be pure — no side effects.
* Async code is exercised with ``pytest.mark.asyncio``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from argprompt.core.models import (
    CommandConfig,
    ParameterSpec,
    Question,
    QuestionDescriptor,
)
from argprompt.utils.calling import call_and_resolve


class FakePromptEngine:
    """Prompt engine answering from a script instead of a terminal.

    Skip conditions are honoured exactly like the real engine.  A
    question without a scripted answer gets its (resolved) default.
    """

    def __init__(self, answers: dict[str, Any] | None = None) -> None:
        self.answers: dict[str, Any] = dict(answers or {})
        self.calls: list[list[QuestionDescriptor]] = []
        self.asked: list[QuestionDescriptor] = []
        self.defaults: dict[str, Any] = {}

    async def prompt(self, questions: Sequence[QuestionDescriptor]) -> dict[str, Any]:
        self.calls.append(list(questions))
        collected: dict[str, Any] = {}
        for question in questions:
            if question.when is not None and not await call_and_resolve(question.when, collected):
                continue
            self.asked.append(question)
            default = question.default
            if callable(default):
                default = await call_and_resolve(default, collected)
            self.defaults[question.name] = default
            collected[question.name] = self.answers.get(question.name, default)
        return collected

    @property
    def asked_names(self) -> list[str]:
        return [question.name for question in self.asked]


class RecordingReporter:
    """Validation reporter that records messages and exits like the real one."""

    def __init__(self) -> None:
        self.messages: list[str] | None = None

    def __call__(self, messages: Sequence[str]) -> Any:
        self.messages = list(messages)
        raise SystemExit(1)


def burger_config(
    execute: Callable[..., Any] | None = None,
    **overrides: Any,
) -> CommandConfig:
    """The four-parameter burger command used across the suite."""
    defaults: dict[str, Any] = {
        "cmd": "burger",
        "description": "create your burger",
        "error_strategy": "raise",
        "parameters": [
            ParameterSpec(
                cmd_spec="[name]",
                type="input",
                question=Question(message="How do you want to name your burger?"),
            ),
            ParameterSpec(
                cmd_spec="-s, --sauces <sauces-list>",
                description="A comma-separated list of sauces",
                type="checkbox",
                choices=["bbq", "ketchup", "mayonnaise", "mustard", "spicy"],
                question=Question(message="Choose your sauce(s)"),
            ),
            ParameterSpec(
                cmd_spec="-b, --bacon <none|simple|double|triple>",
                description="Select the quantity of bacon",
                type="list",
                choices=["none", "simple", "double", "triple"],
                default="simple",
                question=Question(message="What quantity of bacon do you want?"),
            ),
            ParameterSpec(
                cmd_spec="--tomato",
                description="Add tomato",
                type="boolean",
                default=False,
                question=Question(message="Do you want some tomato?"),
            ),
        ],
        "execute": execute if execute is not None else (lambda values: values),
    }
    defaults.update(overrides)
    return CommandConfig(**defaults)


@pytest.fixture
def prompt_engine() -> FakePromptEngine:
    return FakePromptEngine()


@pytest.fixture
def make_prompt_engine() -> type[FakePromptEngine]:
    return FakePromptEngine


@pytest.fixture
def make_burger() -> Callable[..., CommandConfig]:
    return burger_config


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
