"""Validation engine and the validators generated for typed parameters.

Guarantees
----------
* Every validator of a value mapping is started before any result is
  inspected, and all of them are awaited before a verdict is returned.
* Messages are reported in the iteration order of the value mapping,
  never in completion order.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from argprompt.core.models import Choice, ChoiceProvider, Validator
from argprompt.utils.calling import call_and_resolve, resolve

logger = logging.getLogger(__name__)

INTEGER_RE = re.compile(r"^-?[0-9]+$")
NUMBER_RE = re.compile(r"^-?[0-9]+(\.[0-9]+)?$")


# ---------------------------------------------------------------------------
# Choices
# ---------------------------------------------------------------------------

def choice_value(entry: Any) -> Any:
    """Return the bare value of a choice entry."""
    if isinstance(entry, Choice):
        return entry.value
    if isinstance(entry, Mapping) and "value" in entry:
        return entry["value"]
    return entry


def normalize_choices(entries: Iterable[Any]) -> list[Any]:
    """Reduce ``Choice`` / ``{value, label}`` entries to bare values."""
    return [choice_value(entry) for entry in entries]


async def resolve_choices(
    provider: ChoiceProvider | None,
    answers: Mapping[str, Any] | None = None,
    cli_values: Mapping[str, Any] | None = None,
) -> list[Any]:
    """Resolve a literal, sync or async choice provider to a list."""
    if provider is None:
        return []
    if callable(provider):
        entries = await call_and_resolve(provider, answers or {}, cli_values or {})
    else:
        entries = await resolve(provider)
    return list(entries or [])


def _available_help(available: Sequence[Any]) -> str:
    if len(available) == 1:
        return f"available value: {available[0]}"
    return "available values: " + ", ".join(str(value) for value in available)


def make_choice_validator(
    choices: ChoiceProvider | None,
    label: str | None = None,
) -> Validator:
    """Build a validator accepting only values offered by *choices*.

    A single value or a sequence of values may be validated; every value
    missing from the resolved choices yields its own message naming all
    accepted values.
    """

    async def validate_choice(
        provided: Any,
        answers: Mapping[str, Any] | None = None,
        cli_values: Mapping[str, Any] | None = None,
    ) -> bool | list[str]:
        values = provided if isinstance(provided, (list, tuple)) else [provided]
        available = normalize_choices(
            await resolve_choices(choices, answers, cli_values),
        )
        messages = [
            f"{value} is not a valid {label or 'value'} - {_available_help(available)}"
            for value in values
            if value not in available
        ]
        return messages or True

    return validate_choice


# ---------------------------------------------------------------------------
# Numeric validators
# ---------------------------------------------------------------------------

def make_integer_validator(name: str) -> Validator:
    """Build a validator accepting ``^-?[0-9]+$``."""

    def validate_integer(value: Any) -> bool | str:
        if INTEGER_RE.match(str(value)):
            return True
        return f"{value} is not a valid value for {name} (expecting an integer)"

    return validate_integer


def make_number_validator(name: str) -> Validator:
    """Build a validator accepting ``^-?[0-9]+(\\.[0-9]+)?$``."""

    def validate_number(value: Any) -> bool | str:
        if NUMBER_RE.match(str(value)):
            return True
        return f"{value} is not a valid value for {name} (expecting a number)"

    return validate_number


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

async def _run_validator(
    name: str,
    value: Any,
    validator: Validator,
    values: Mapping[str, Any],
) -> list[str]:
    result = await call_and_resolve(validator, value, {}, values)
    if result is True:
        return []
    if result is False or result is None:
        return [f"{value} is not a valid value for {name}"]
    if isinstance(result, str):
        return [result]
    return [str(message) for message in result]


async def validate_values(
    values: Mapping[str, Any],
    validators: Mapping[str, Validator],
) -> bool | list[str]:
    """Validate every defined value that has a registered validator.

    Returns
    -------
    bool | list[str]
        ``True`` when nothing failed, else the messages in the order of
        *values*.
    """
    pending = [
        _run_validator(name, value, validators[name], values)
        for name, value in values.items()
        if value is not None and name in validators
    ]
    results = await asyncio.gather(*pending)
    messages = [message for batch in results for message in batch]
    if messages:
        logger.debug("Validation failed with %d message(s)", len(messages))
        return messages
    return True
