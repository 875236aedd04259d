"""Infrastructure: argparse-backed command-line tokenizer.

Translates a :class:`~argprompt.core.models.CompiledCommand` grammar into
an :class:`argparse.ArgumentParser` and splits argv with it.

Rules
-----
* Every value the command line does not mention is ``None``, so the
  question synthesizer can tell "not provided" apart from a value.
* Positionals are collected wherever they appear among the options.
* Unknown options are collected, never fatal.
* argparse never exits the process here: its errors are re-raised as
  :class:`~argprompt.exceptions.TokenizationError`.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from typing import Any, NoReturn

from argprompt.core.models import (
    ArgumentDescriptor,
    CompiledCommand,
    CompiledParameter,
    OptionDescriptor,
    OptionValue,
    ParameterKind,
    TokenizedArgs,
)
from argprompt.exceptions import TokenizationError
from argprompt.utils.calling import call_flexible

logger = logging.getLogger(__name__)


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message: str) -> NoReturn:
        raise TokenizationError(message, hint=self.format_usage().strip())


# ---------------------------------------------------------------------------
# Parser construction
# ---------------------------------------------------------------------------

def _positional_nargs(argument: ArgumentDescriptor) -> str | None:
    if argument.variadic:
        return "+" if argument.required else "*"
    return None if argument.required else "?"


def _add_option(parser: argparse.ArgumentParser, option: OptionDescriptor) -> None:
    kwargs: dict[str, Any] = {
        "dest": option.name,
        "default": None,
        "help": option.description,
    }
    if option.value is OptionValue.REQUIRED:
        kwargs["action"] = "store"
    elif option.value is OptionValue.OPTIONAL:
        kwargs.update(action="store", nargs="?", const=True)
    else:
        kwargs.update(action="store_const", const=not option.negate)
    parser.add_argument(*option.option_strings, **kwargs)


def build_parser(command: CompiledCommand) -> argparse.ArgumentParser:
    """Construct the argument parser for *command*'s grammar."""
    parser = _RaisingArgumentParser(
        prog=command.name,
        description=command.description or None,
        add_help=False,
        allow_abbrev=False,
    )
    for argument in command.arguments:
        nargs = _positional_nargs(argument)
        kwargs: dict[str, Any] = {"metavar": argument.token}
        if nargs is not None:
            kwargs["nargs"] = nargs
        if nargs in ("?", "*"):
            kwargs["default"] = None
        parser.add_argument(argument.name, **kwargs)
    for option in command.options:
        _add_option(parser, option)
    return parser


# ---------------------------------------------------------------------------
# Value conversion
# ---------------------------------------------------------------------------

def _coerce(param: CompiledParameter, raw: Any) -> Any:
    """Apply *param*'s coercion to a string, keeping *raw* when it fails."""
    if param.coercion is None or not isinstance(raw, str):
        return raw
    try:
        return call_flexible(param.coercion, raw)
    except (TypeError, ValueError) as exc:
        logger.debug("Coercion of %s=%r failed: %s", param.name, raw, exc)
        return raw


def _convert(param: CompiledParameter, raw: Any) -> Any:
    if raw is None:
        return None
    if param.variadic:
        if not raw:
            return None
        if param.kind is ParameterKind.CHECKBOX:
            return list(raw)
        return [_coerce(param, item) for item in raw]
    return _coerce(param, raw)


# ---------------------------------------------------------------------------
# Public adapter
# ---------------------------------------------------------------------------

class ArgvTokenizer:
    """:class:`~argprompt.core.protocols.Tokenizer` built on argparse."""

    def tokenize(self, command: CompiledCommand, argv: Sequence[str]) -> TokenizedArgs:
        parser = build_parser(command)
        namespace, unknown = parser.parse_known_intermixed_args(list(argv))

        values: dict[str, Any] = {}
        ordered = [p for p in command.parameters if p.argument is not None]
        ordered += [p for p in command.parameters if p.option is not None]
        for param in ordered:
            values[param.name] = _convert(param, getattr(namespace, param.name, None))

        return TokenizedArgs(values=values, unknown=tuple(unknown))

    def format_help(self, command: CompiledCommand) -> str:
        """Return argparse-formatted help for *command*."""
        return build_parser(command).format_help()
