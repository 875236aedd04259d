"""Derive interactive questions from parameter declarations.

A parameter is asked for only when it declares a question.  The
question template may be partial; every missing field is completed
from the parameter, and every callable the parameter contributes is
wrapped so that it also sees the values already resolved from the
command line.

Wrapped call shapes
-------------------
* ``default(answers)``         → ``declared(answers, cli_values)``
* ``choices(answers)``         → ``declared(answers, cli_values)``
* ``validate(value, answers)`` → ``declared(value, answers, cli_values)``
* ``when(answers)``            → ``declared(answers, cli_values)``
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from argprompt.core.models import (
    CompiledParameter,
    ParameterKind,
    QuestionDescriptor,
    Validator,
)
from argprompt.utils.calling import call_flexible


def _bind_answers(func: Callable[..., Any], cli_values: Mapping[str, Any]) -> Callable[..., Any]:
    def bound(answers: Mapping[str, Any]) -> Any:
        return call_flexible(func, answers, cli_values)

    return bound


def _bind_validator(validator: Validator, cli_values: Mapping[str, Any]) -> Validator:
    def bound(value: Any, answers: Mapping[str, Any]) -> Any:
        return call_flexible(validator, value, answers, cli_values)

    return bound


def _default_when(param: CompiledParameter, cli_values: Mapping[str, Any]) -> Callable[..., bool]:
    """Ask only when the command line left the parameter unresolved."""

    def when(answers: Mapping[str, Any]) -> bool:
        value = cli_values.get(param.name)
        if param.variadic:
            return not (isinstance(value, Sequence) and len(value) > 0)
        return value is None

    return when


def build_question(
    param: CompiledParameter,
    cli_values: Mapping[str, Any],
) -> QuestionDescriptor | None:
    """Complete *param*'s question template, or ``None`` when it has none."""
    template = param.question
    if template is None:
        return None
    spec = param.spec

    default = template.default if template.default is not None else spec.default
    if callable(default):
        default = _bind_answers(default, cli_values)

    choices = template.choices
    if choices is None and spec.choices is not None:
        choices = (
            _bind_answers(spec.choices, cli_values)
            if callable(spec.choices)
            else spec.choices
        )

    validate = template.validate
    if validate is None and param.validator is not None:
        validate = _bind_validator(param.validator, cli_values)

    if template.when is None:
        when = _default_when(param, cli_values)
    else:
        when = _bind_answers(template.when, cli_values)

    return QuestionDescriptor(
        name=template.name or param.name,
        type=ParameterKind.parse(template.type) if template.type else param.kind,
        message=template.message or spec.description or param.name,
        default=default,
        choices=choices,
        validate=validate,
        when=when,
    )


def synthesize_questions(
    parameters: Sequence[CompiledParameter],
    cli_values: Mapping[str, Any],
) -> list[QuestionDescriptor]:
    """Build the ordered question list for one invocation.

    Parameters without a question template are left out; the order of
    the result follows declaration order.
    """
    questions: list[QuestionDescriptor] = []
    for param in parameters:
        question = build_question(param, cli_values)
        if question is not None:
            questions.append(question)
    return questions
