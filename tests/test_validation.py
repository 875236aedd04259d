"""Tests for the validation engine (core/validation.py)."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from argprompt.core.models import Choice
from argprompt.core.validation import (
    make_choice_validator,
    make_integer_validator,
    make_number_validator,
    normalize_choices,
    resolve_choices,
    validate_values,
)

BACON = ["none", "simple", "double", "triple"]


def _delayed_validator(delay: float, message: str) -> Any:
    async def validate(value: Any) -> str:
        await asyncio.sleep(delay)
        return message

    return validate


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TestValidateValues:
    @pytest.mark.asyncio
    async def test_all_valid_returns_true(self) -> None:
        result = await validate_values(
            {"steaks": "3"},
            {"steaks": make_integer_validator("steaks")},
        )
        assert result is True

    @pytest.mark.asyncio
    async def test_three_failures_three_messages_in_value_order(self) -> None:
        # The first validator finishes last.
        validators = {
            "a": _delayed_validator(0.03, "a is bad"),
            "b": _delayed_validator(0.01, "b is bad"),
            "c": _delayed_validator(0.0, "c is bad"),
        }
        result = await validate_values({"a": 1, "b": 2, "c": 3}, validators)
        assert result == ["a is bad", "b is bad", "c is bad"]

    @pytest.mark.asyncio
    async def test_validators_run_concurrently(self) -> None:
        running: list[str] = []
        overlap: list[bool] = []

        def make(name: str) -> Any:
            async def validate(value: Any) -> bool:
                running.append(name)
                await asyncio.sleep(0.01)
                overlap.append(len(running) == 2)
                return True

            return validate

        await validate_values({"a": 1, "b": 2}, {"a": make("a"), "b": make("b")})
        assert all(overlap)

    @pytest.mark.asyncio
    async def test_false_yields_generic_message(self) -> None:
        result = await validate_values({"name": "my_burger"}, {"name": lambda v: False})
        assert result == ["my_burger is not a valid value for name"]

    @pytest.mark.asyncio
    async def test_message_list_is_extended(self) -> None:
        result = await validate_values({"x": 1}, {"x": lambda v: ["one", "two"]})
        assert result == ["one", "two"]

    @pytest.mark.asyncio
    async def test_undefined_values_are_not_validated(self) -> None:
        calls: list[Any] = []

        def validate(value: Any) -> bool:
            calls.append(value)
            return False

        assert await validate_values({"x": None}, {"x": validate}) is True
        assert calls == []

    @pytest.mark.asyncio
    async def test_values_without_validator_are_ignored(self) -> None:
        assert await validate_values({"comment": "anything"}, {}) is True

    @pytest.mark.asyncio
    async def test_validator_receives_empty_answers_and_all_values(self) -> None:
        seen: list[tuple[Any, ...]] = []

        def validate(value: Any, answers: Any, values: Any) -> bool:
            seen.append((value, answers, values))
            return True

        values = {"x": 1, "y": 2}
        await validate_values(values, {"x": validate})
        assert seen == [(1, {}, values)]


# ---------------------------------------------------------------------------
# Numeric validators
# ---------------------------------------------------------------------------

class TestNumericValidators:
    def test_integer_accepts(self) -> None:
        validate = make_integer_validator("drinkSize")
        assert validate("200") is True
        assert validate("-4") is True

    def test_integer_message_names_parameter_and_token(self) -> None:
        message = make_integer_validator("drinkSize")("abc")
        assert message == "abc is not a valid value for drinkSize (expecting an integer)"

    def test_number_accepts(self) -> None:
        validate = make_number_validator("price")
        assert validate("12.5") is True
        assert validate("12") is True

    def test_number_rejects(self) -> None:
        message = make_number_validator("price")("12.5o")
        assert "12.5o" in message
        assert "price" in message
        assert "expecting a number" in message


# ---------------------------------------------------------------------------
# Choice validators
# ---------------------------------------------------------------------------

class TestChoiceValidator:
    @pytest.mark.asyncio
    async def test_accepts_known_value(self) -> None:
        assert await make_choice_validator(BACON)("double") is True

    @pytest.mark.asyncio
    async def test_message_lists_all_accepted_values(self) -> None:
        result = await make_choice_validator(BACON)("zzz")
        assert result == [
            "zzz is not a valid value - available values: none, simple, double, triple",
        ]

    @pytest.mark.asyncio
    async def test_single_available_value_wording(self) -> None:
        result = await make_choice_validator(["only"])("zzz")
        assert result == ["zzz is not a valid value - available value: only"]

    @pytest.mark.asyncio
    async def test_every_offending_value_reported(self) -> None:
        result = await make_choice_validator(["bbq", "mustard"], "sauce")(["xxx", "bbq", "yyy"])
        assert isinstance(result, list)
        assert len(result) == 2
        assert result[0].startswith("xxx is not a valid sauce")
        assert result[1].startswith("yyy is not a valid sauce")

    @pytest.mark.asyncio
    async def test_async_provider_is_awaited(self) -> None:
        async def provider() -> list[str]:
            await asyncio.sleep(0.02)
            return BACON

        validate = make_choice_validator(provider)
        assert await validate("triple") is True
        result = await validate("zzz")
        assert "none, simple, double, triple" in result[0]

    @pytest.mark.asyncio
    async def test_provider_receives_values(self) -> None:
        def provider(answers: Any, cli_values: Any) -> list[str]:
            return ["veggie"] if cli_values.get("vege") else BACON

        validate = make_choice_validator(provider)
        assert await validate("veggie", {}, {"vege": True}) is True

    @pytest.mark.asyncio
    async def test_labelled_entries_are_normalised(self) -> None:
        choices = [Choice("s", "Simple"), {"value": "d", "label": "Double"}, "t"]
        validate = make_choice_validator(choices)
        assert await validate(["s", "d", "t"]) is True
        result = await validate("Double")
        assert "available values: s, d, t" in result[0]

    @pytest.mark.asyncio
    async def test_engine_integration(self) -> None:
        result = await validate_values(
            {"bacon": "zzz", "sauces": ["mustard", "xxx"]},
            {
                "bacon": make_choice_validator(BACON),
                "sauces": make_choice_validator(["mustard", "ketchup"]),
            },
        )
        assert isinstance(result, list)
        assert len(result) == 2


class TestChoiceHelpers:
    def test_normalize(self) -> None:
        assert normalize_choices([Choice(1, "one"), {"value": 2}, 3]) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_resolve_none(self) -> None:
        assert await resolve_choices(None) == []

    @pytest.mark.asyncio
    async def test_resolve_literal_tuple(self) -> None:
        assert await resolve_choices(("a", "b")) == ["a", "b"]
