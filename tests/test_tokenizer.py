"""Tests for the argparse-backed tokenizer (infra/argv_tokenizer.py)."""

from __future__ import annotations

from typing import Any

import pytest

from argprompt.cli.burger import BURGER
from argprompt.core.compiler import compile_command
from argprompt.core.models import CommandConfig, CompiledCommand, ParameterSpec
from argprompt.exceptions import TokenizationError
from argprompt.infra.argv_tokenizer import ArgvTokenizer


def _compiled(*parameters: ParameterSpec) -> CompiledCommand:
    return compile_command(
        CommandConfig(cmd="burger", parameters=list(parameters), execute=lambda v: v),
    )


def _tokenize(command: CompiledCommand, *argv: str) -> tuple[dict[str, Any], tuple[str, ...]]:
    tokenized = ArgvTokenizer().tokenize(command, list(argv))
    return tokenized.values, tokenized.unknown


@pytest.fixture
def burger() -> CompiledCommand:
    return _compiled(
        ParameterSpec(cmd_spec="[name]"),
        ParameterSpec(cmd_spec="-s, --sauces <sauces-list>", type="checkbox"),
        ParameterSpec(cmd_spec="--steaks <quantity>", type="integer"),
        ParameterSpec(cmd_spec="--drink-size <quantity>", type="int"),
        ParameterSpec(cmd_spec="-p, --price <estimated-price>", type="number"),
        ParameterSpec(cmd_spec="--tomato", type="confirm"),
        ParameterSpec(cmd_spec="--no-cheese", type="confirm"),
        ParameterSpec(cmd_spec="--comment [text]"),
    )


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

class TestValues:
    def test_everything_given(self, burger: CompiledCommand) -> None:
        values, unknown = _tokenize(
            burger,
            "my-burger",
            "--sauces", "mustard,ketchup",
            "--steaks", "3",
            "--drink-size", "200",
            "-p", "12.5",
            "--tomato",
            "--no-cheese",
            "--comment", "great",
        )
        assert values == {
            "name": "my-burger",
            "sauces": ["mustard", "ketchup"],
            "steaks": 3,
            "drinkSize": 200,
            "price": 12.5,
            "tomato": True,
            "cheese": False,
            "comment": "great",
        }
        assert unknown == ()

    def test_nothing_given_maps_to_none(self, burger: CompiledCommand) -> None:
        values, _ = _tokenize(burger)
        assert set(values) == {
            "name", "sauces", "steaks", "drinkSize", "price", "tomato", "cheese", "comment",
        }
        assert all(value is None for value in values.values())

    def test_positionals_come_first(self, burger: CompiledCommand) -> None:
        values, _ = _tokenize(burger, "--tomato", "my-burger")
        assert list(values)[0] == "name"
        assert values["name"] == "my-burger"

    def test_bad_numbers_stay_raw(self, burger: CompiledCommand) -> None:
        values, _ = _tokenize(burger, "--drink-size", "xxx", "-p", "12.5o")
        assert values["drinkSize"] == "xxx"
        assert values["price"] == "12.5o"

    def test_empty_list_is_explicit(self, burger: CompiledCommand) -> None:
        values, _ = _tokenize(burger, "--sauces", "")
        assert values["sauces"] == []

    def test_optional_value_without_value(self, burger: CompiledCommand) -> None:
        values, _ = _tokenize(burger, "--comment")
        assert values["comment"] is True

    def test_failing_custom_coercion_keeps_raw(self) -> None:
        def strict(raw: str) -> int:
            return int(raw)

        command = _compiled(ParameterSpec(cmd_spec="--n <v>", coercion=strict))
        values, _ = _tokenize(command, "--n", "abc")
        assert values["n"] == "abc"


# ---------------------------------------------------------------------------
# Positionals
# ---------------------------------------------------------------------------

class TestPositionals:
    def test_variadic_collects_tokens(self) -> None:
        command = _compiled(
            ParameterSpec(cmd_spec="[name]"),
            ParameterSpec(cmd_spec="[sauces...]", type="checkbox"),
        )
        values, _ = _tokenize(command, "my-burger", "bbq", "mustard")
        assert values == {"name": "my-burger", "sauces": ["bbq", "mustard"]}

    def test_positionals_after_an_option(self) -> None:
        command = compile_command(BURGER)
        values, unknown = _tokenize(command, "my-burger", "--tomato", "bbq", "ketchup")
        assert values["name"] == "my-burger"
        assert values["sauces"] == ["bbq", "ketchup"]
        assert values["tomato"] is True
        assert unknown == ()

    def test_positionals_spread_between_options(self) -> None:
        command = compile_command(BURGER)
        values, unknown = _tokenize(
            command, "--tomato", "my-burger", "-b", "double", "bbq", "--salad", "spicy",
        )
        assert values["name"] == "my-burger"
        assert values["sauces"] == ["bbq", "spicy"]
        assert values["bacon"] == "double"
        assert values["salad"] is True
        assert unknown == ()

    def test_variadic_not_mentioned_is_none(self) -> None:
        command = _compiled(
            ParameterSpec(cmd_spec="[name]"),
            ParameterSpec(cmd_spec="[sauces...]", type="checkbox"),
        )
        values, _ = _tokenize(command, "my-burger")
        assert values["sauces"] is None

    def test_variadic_integers_are_coerced(self) -> None:
        command = _compiled(ParameterSpec(cmd_spec="[sizes...]", type="integer"))
        values, _ = _tokenize(command, "1", "2")
        assert values["sizes"] == [1, 2]

    def test_missing_required_positional(self) -> None:
        command = _compiled(ParameterSpec(cmd_spec="<name>"))
        with pytest.raises(TokenizationError):
            _tokenize(command)


# ---------------------------------------------------------------------------
# Errors and unknown tokens
# ---------------------------------------------------------------------------

class TestUnknownAndErrors:
    def test_unknown_option_is_collected(self, burger: CompiledCommand) -> None:
        values, unknown = _tokenize(burger, "my-burger", "--cheddar")
        assert values["name"] == "my-burger"
        assert unknown == ("--cheddar",)

    def test_no_abbreviations(self, burger: CompiledCommand) -> None:
        values, unknown = _tokenize(burger, "--tom")
        assert values["tomato"] is None
        assert "--tom" in unknown

    def test_missing_option_value(self, burger: CompiledCommand) -> None:
        with pytest.raises(TokenizationError, match="steaks"):
            _tokenize(burger, "--steaks")

    def test_help_text(self, burger: CompiledCommand) -> None:
        text = ArgvTokenizer().format_help(burger)
        assert "--drink-size" in text
        assert "[name]" in text
