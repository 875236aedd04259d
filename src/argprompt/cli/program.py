"""Command registry and dispatch — the public entry point of argprompt.

A :class:`Program` wires the core pipeline to concrete collaborators:
the argparse tokenizer, the questionary prompt engine and the Rich
validation reporter.  Each can be replaced at construction time, which
is how the tests drive the pipeline without a terminal.

Usage::

    program = Program()
    program.command(CommandConfig(cmd="burger", parameters=[...]), make_burger)
    burger = await program.parse(["burger", "my-burger", "--bacon", "double"])
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from argprompt.cli.prompt_engine import QuestionaryPromptEngine
from argprompt.cli.report import report_validation_failure
from argprompt.core.compiler import compile_command
from argprompt.core.completion import CompletionSignal
from argprompt.core.models import CommandConfig, CompiledCommand
from argprompt.core.pipeline import InvocationPipeline
from argprompt.core.protocols import PromptEngine, Tokenizer, ValidationReporter
from argprompt.exceptions import ConfigurationError, UnknownCommandError
from argprompt.infra.argv_tokenizer import ArgvTokenizer

logger = logging.getLogger(__name__)


class Program:
    """Registry of commands with a per-invocation completion handle.

    Parameters
    ----------
    prog:
        Program name used in messages.
    tokenizer:
        Defaults to :class:`~argprompt.infra.argv_tokenizer.ArgvTokenizer`.
    prompt_engine:
        Defaults to :class:`~argprompt.cli.prompt_engine.QuestionaryPromptEngine`.
    reporter:
        Used by commands with the ``report`` error strategy.  Defaults to
        :func:`~argprompt.cli.report.report_validation_failure`.
    """

    def __init__(
        self,
        prog: str | None = None,
        *,
        tokenizer: Tokenizer | None = None,
        prompt_engine: PromptEngine | None = None,
        reporter: ValidationReporter | None = None,
    ) -> None:
        self.prog: str | None = prog
        self._tokenizer: Tokenizer = tokenizer or ArgvTokenizer()
        self._prompt_engine: PromptEngine = prompt_engine or QuestionaryPromptEngine()
        self._reporter: ValidationReporter = reporter or report_validation_failure
        self._commands: dict[str, CompiledCommand] = {}
        self._tasks: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    @property
    def commands(self) -> Mapping[str, CompiledCommand]:
        """Read-only view of the registered commands by name."""
        return MappingProxyType(self._commands)

    def command(
        self,
        config: CommandConfig | Mapping[str, Any],
        execute: Callable[..., Any] | None = None,
    ) -> CompiledCommand:
        """Compile and register a command.

        *execute*, when given, replaces the configuration's handler.

        Raises
        ------
        ConfigurationError
            If the configuration is invalid or the name is already taken.
        """
        if isinstance(config, Mapping):
            try:
                config = CommandConfig(**config)
            except TypeError as exc:
                raise ConfigurationError(f"Invalid command configuration: {exc}") from exc
        if execute is not None:
            config = dataclasses.replace(config, execute=execute)

        compiled = compile_command(config)
        if compiled.name in self._commands:
            raise ConfigurationError(f"Command {compiled.name!r} is already registered")
        self._commands[compiled.name] = compiled
        logger.debug(
            "Registered %s (%d argument(s), %d option(s))",
            compiled.name,
            len(compiled.arguments),
            len(compiled.options),
        )
        return compiled

    def reset(self) -> None:
        """Forget every registered command."""
        self._commands.clear()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def pipeline(self, name: str) -> InvocationPipeline:
        """Return a fresh pipeline for the registered command *name*."""
        command = self._commands.get(name)
        if command is None:
            known = ", ".join(sorted(self._commands)) or "none"
            raise UnknownCommandError(
                f"Unknown command: {name}",
                hint=f"Registered commands: {known}",
            )
        return InvocationPipeline(
            command,
            self._tokenizer,
            self._prompt_engine,
            self._reporter,
        )

    def dispatch(self, argv: Sequence[str]) -> CompletionSignal:
        """Start resolving ``argv[0]``'s command and return its handle.

        Must be called from a running event loop.  The returned
        :class:`CompletionSignal` is resolved exactly once with the
        handler's result or with the error that stopped the invocation.
        """
        name = argv[0] if argv else None
        signal = CompletionSignal(name)
        if name is None:
            signal.fail(UnknownCommandError("No command given"))
            return signal
        try:
            pipeline = self.pipeline(name)
        except UnknownCommandError as exc:
            signal.fail(exc)
            return signal

        task = asyncio.ensure_future(pipeline.run_to_signal(list(argv[1:]), signal))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return signal

    async def parse(self, argv: Sequence[str]) -> Any:
        """Dispatch *argv* and wait for the outcome."""
        return await self.dispatch(argv)

    def run(self, argv: Sequence[str]) -> Any:
        """Blocking variant of :meth:`parse` for scripts."""
        return asyncio.run(self.parse(argv))
