"""Interactive prompt engine backed by questionary.

This module is responsible for:

* Resolving each question's skip condition, default and choices
  against the answers collected so far.
* Asking the question with the matching questionary prompt.
* Re-asking until the question's validator accepts the answer.

Questions are asked strictly one at a time, in order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from argprompt.cli.console import console, escape
from argprompt.core.models import Choice, ParameterKind, QuestionDescriptor
from argprompt.core.validation import choice_value
from argprompt.exceptions import EnvironmentError
from argprompt.utils.calling import call_and_resolve, resolve

logger = logging.getLogger(__name__)


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompting."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms, no I/O)
# ---------------------------------------------------------------------------

def _choice_title(entry: Any) -> str:
    """Return the label shown for a choice entry."""
    if isinstance(entry, Choice):
        return str(entry.label if entry.label is not None else entry.value)
    if isinstance(entry, Mapping) and "value" in entry:
        label = entry.get("label") or entry.get("name")
        return str(label if label is not None else entry["value"])
    return str(entry)


def _text_default(default: Any) -> str:
    return "" if default is None else str(default)


def _as_messages(verdict: Any, value: Any) -> list[str]:
    """Turn a validator verdict into messages; empty means accepted."""
    if verdict is True:
        return []
    if verdict is False or verdict is None:
        return [f"{value} is not a valid value"]
    if isinstance(verdict, str):
        return [verdict]
    return [str(message) for message in verdict]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class QuestionaryPromptEngine:
    """:class:`~argprompt.core.protocols.PromptEngine` using questionary.

    ``Ctrl+C`` is not swallowed: ``KeyboardInterrupt`` propagates to the
    caller.
    """

    async def prompt(self, questions: Sequence[QuestionDescriptor]) -> dict[str, Any]:
        questionary = _import_questionary()
        answers: dict[str, Any] = {}
        for question in questions:
            if question.when is not None:
                if not await call_and_resolve(question.when, answers):
                    logger.debug("Skipping question %s", question.name)
                    continue
            answers[question.name] = await self._ask(questionary, question, answers)
        return answers

    async def _ask(
        self,
        questionary: Any,
        question: QuestionDescriptor,
        answers: Mapping[str, Any],
    ) -> Any:
        default = question.default
        if callable(default):
            default = await call_and_resolve(default, answers)
        choices = question.choices
        if callable(choices):
            choices = await call_and_resolve(choices, answers)
        else:
            choices = await resolve(choices)

        while True:
            prompt = self._build_prompt(questionary, question, default, list(choices or []))
            value = await prompt.unsafe_ask_async()
            if question.validate is None:
                return value
            verdict = await call_and_resolve(question.validate, value, answers)
            messages = _as_messages(verdict, value)
            if not messages:
                return value
            for message in messages:
                console.print(f"[red]>>[/red] {escape(message)}")

    @staticmethod
    def _build_prompt(
        questionary: Any,
        question: QuestionDescriptor,
        default: Any,
        choices: list[Any],
    ) -> Any:
        """Build the questionary prompt matching the question kind."""
        kind = question.type
        message = question.message

        if kind is ParameterKind.CONFIRM:
            return questionary.confirm(
                message,
                default=True if default is None else bool(default),
            )
        if kind is ParameterKind.PASSWORD:
            return questionary.password(message, default=_text_default(default))
        if kind is ParameterKind.SELECT:
            values = [choice_value(entry) for entry in choices]
            return questionary.select(
                message,
                choices=[
                    questionary.Choice(title=_choice_title(entry), value=choice_value(entry))
                    for entry in choices
                ],
                default=default if default in values else None,
                use_arrow_keys=True,
                use_shortcuts=False,
            )
        if kind is ParameterKind.CHECKBOX:
            checked = default if isinstance(default, (list, tuple, set)) else ()
            return questionary.checkbox(
                message,
                choices=[
                    questionary.Choice(
                        title=_choice_title(entry),
                        value=choice_value(entry),
                        checked=choice_value(entry) in checked,
                    )
                    for entry in choices
                ],
            )
        return questionary.text(message, default=_text_default(default))
