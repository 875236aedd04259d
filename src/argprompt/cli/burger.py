"""``argprompt burger`` — demonstration command.

Every ingredient can be given on the command line; whatever is missing
is asked for interactively.
"""

from __future__ import annotations

import json
from typing import Any

from argprompt.cli.console import console, escape
from argprompt.core.models import CommandConfig, ParameterSpec, Question

SAUCES: tuple[str, ...] = ("bbq", "ketchup", "mayonnaise", "mustard", "spicy")
BACON: tuple[str, ...] = ("none", "simple", "double", "triple")


def make_burger(values: dict[str, Any]) -> dict[str, Any]:
    """Render the final burger and return it."""
    console.print(f"The [cyan]{escape(values.get('name'))}[/cyan] burger is in preparation ...")
    console.print("Have a nice meal!")
    console.print_json(json.dumps(values, default=str))
    return values


BURGER = CommandConfig(
    cmd="burger",
    description="create your burger",
    parameters=[
        ParameterSpec(
            cmd_spec="[name]",
            type="input",
            question=Question(message="How do you want to name your burger?"),
        ),
        ParameterSpec(
            cmd_spec="[sauces...]",
            description="List of sauces",
            type="checkbox",
            choices=SAUCES,
            label="sauce",
            question=Question(message="Choose your sauce(s)"),
        ),
        ParameterSpec(
            cmd_spec="-b, --bacon <none|simple|double|triple>",
            description="Select the quantity of bacon",
            type="list",
            choices=BACON,
            default="simple",
            question=Question(message="What quantity of bacon do you want?"),
        ),
        ParameterSpec(
            cmd_spec="--salad",
            description="Add salad",
            type="confirm",
            default=False,
            question=Question(message="Do you want some salad?"),
        ),
        ParameterSpec(
            cmd_spec="--tomato",
            description="Add tomato",
            type="confirm",
            default=True,
            question=Question(message="Do you want some tomato?"),
        ),
        ParameterSpec(
            cmd_spec="--steaks <quantity>",
            description="Number of steaks",
            type="int",
            question=Question(message="How many steaks do you want?"),
        ),
        ParameterSpec(
            cmd_spec="-p, --price <estimated-price>",
            description="Price you are willing to pay",
            type="number",
            question=Question(message="How much are you willing to pay?"),
        ),
    ],
    execute=make_burger,
)
