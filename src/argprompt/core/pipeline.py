"""Invocation pipeline — resolves one command invocation end to end.

State machine
-------------
``IDLE → TOKENIZING → VALIDATING_CLI → PROMPTING → MERGING → EXECUTING
→ COMPLETED``

1. **Tokenize** argv with the injected tokenizer; the optional
   pre-validation hook may rewrite the result.
2. **Validate** the command-line wave.  On failure nothing is asked:
   the ``raise`` strategy raises :class:`ValidationError`, the
   ``report`` strategy hands the messages to the reporter, which
   terminates the process.
3. **Prompt** for every question whose skip condition lets it through,
   then coerce integer / number answers.
4. **Merge** answers over command-line values, after the optional
   pre-merge hook.
5. **Execute** the handler with the merged values.

Exceptions raised by hooks or by the handler propagate unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from argprompt.core.compiler import coerce_integer, coerce_number
from argprompt.core.completion import CompletionSignal
from argprompt.core.models import (
    CompiledCommand,
    CompiledParameter,
    ErrorStrategy,
    ParameterKind,
    TokenizedArgs,
)
from argprompt.core.protocols import PromptEngine, Tokenizer, ValidationReporter
from argprompt.core.questions import synthesize_questions
from argprompt.core.validation import validate_values
from argprompt.exceptions import ExecutionError, ValidationError
from argprompt.utils.calling import requires_positional, call_and_resolve, resolve
from argprompt.utils.mapping import deep_merge

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    TOKENIZING = "tokenizing"
    VALIDATING_CLI = "validating-cli"
    PROMPTING = "prompting"
    MERGING = "merging"
    EXECUTING = "executing"
    COMPLETED = "completed"


class InvocationPipeline:
    """Single-use driver for one invocation of a compiled command.

    Parameters
    ----------
    command:
        The compiled command to run.
    tokenizer:
        Any object satisfying the :class:`Tokenizer` protocol.
    prompt_engine:
        Any object satisfying the :class:`PromptEngine` protocol.
    reporter:
        Used by the ``report`` error strategy.  Without one, validation
        failures are raised as under the ``raise`` strategy.
    """

    def __init__(
        self,
        command: CompiledCommand,
        tokenizer: Tokenizer,
        prompt_engine: PromptEngine,
        reporter: ValidationReporter | None = None,
    ) -> None:
        self._command = command
        self._tokenizer = tokenizer
        self._prompt_engine = prompt_engine
        self._reporter = reporter
        self.state: PipelineState = PipelineState.IDLE
        self.succeeded: bool | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(self, argv: Sequence[str]) -> Any:
        """Resolve every parameter, run the handler and return its result."""
        if self.state is not PipelineState.IDLE:
            raise RuntimeError("An InvocationPipeline can only run once")
        try:
            tokenized = await self._tokenize(argv)
            cli_values = tokenized.values
            await self._validate(cli_values)
            answers = await self._prompt(cli_values)
            values = await self._merge(answers, cli_values)
            result = await self._execute(values)
        except BaseException:
            self._complete(succeeded=False)
            raise
        self._complete(succeeded=True)
        return result

    async def run_to_signal(self, argv: Sequence[str], signal: CompletionSignal) -> None:
        """Run and resolve *signal* with the outcome.

        ``SystemExit`` raised by the ``report`` strategy is not turned
        into a signal; it terminates the process.
        """
        try:
            result = await self.run(argv)
        except SystemExit:
            raise
        except asyncio.CancelledError as exc:
            signal.fail(exc)
            raise
        except BaseException as exc:  # noqa: BLE001
            signal.fail(exc)
        else:
            signal.succeed(result)

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def _enter(self, state: PipelineState) -> None:
        logger.debug("%s: %s → %s", self._command.name, self.state.value, state.value)
        self.state = state

    def _complete(self, *, succeeded: bool) -> None:
        self._enter(PipelineState.COMPLETED)
        self.succeeded = succeeded

    async def _tokenize(self, argv: Sequence[str]) -> TokenizedArgs:
        self._enter(PipelineState.TOKENIZING)
        tokenized = self._tokenizer.tokenize(self._command, argv)
        hook = self._command.pre_validation_hook
        if hook is not None:
            transformed = await call_and_resolve(hook, tokenized)
            if isinstance(transformed, TokenizedArgs):
                tokenized = transformed
            elif isinstance(transformed, Mapping):
                tokenized = TokenizedArgs(dict(transformed), tokenized.unknown)
            elif transformed is not None:
                raise ExecutionError(
                    "The pre-validation hook must return TokenizedArgs, a mapping or None",
                )
        if tokenized.unknown:
            logger.debug("Ignoring unknown tokens: %s", " ".join(tokenized.unknown))
        return tokenized

    async def _validate(self, cli_values: Mapping[str, Any]) -> None:
        self._enter(PipelineState.VALIDATING_CLI)
        verdict = await validate_values(cli_values, self._command.validators)
        if verdict is True:
            return
        messages = list(verdict)
        if self._command.error_strategy is ErrorStrategy.REPORT and self._reporter is not None:
            self._reporter(messages)
        raise ValidationError(messages)

    async def _prompt(self, cli_values: Mapping[str, Any]) -> dict[str, Any]:
        self._enter(PipelineState.PROMPTING)
        questions = synthesize_questions(self._command.parameters, cli_values)
        answers = dict(await self._prompt_engine.prompt(questions)) if questions else {}

        by_question = self._parameters_by_question_name()
        for name, answer in answers.items():
            param = by_question.get(name)
            if param is None or answer is None:
                continue
            if param.kind is ParameterKind.INTEGER:
                answers[name] = coerce_integer(answer)
            elif param.kind is ParameterKind.NUMBER:
                answers[name] = coerce_number(answer)
        return answers

    async def _merge(
        self,
        answers: dict[str, Any],
        cli_values: dict[str, Any],
    ) -> dict[str, Any]:
        self._enter(PipelineState.MERGING)
        hook = self._command.pre_merge_hook
        if hook is not None:
            transformed = await call_and_resolve(hook, answers, cli_values)
            try:
                answers, cli_values = transformed
            except (TypeError, ValueError):
                raise ExecutionError(
                    "The pre-merge hook must return an (answers, cli_values) pair",
                ) from None
        return deep_merge(cli_values, answers)

    async def _execute(self, values: dict[str, Any]) -> Any:
        self._enter(PipelineState.EXECUTING)
        execute = self._command.execute
        if not requires_positional(execute, 2):
            return await resolve(execute(values))

        completion: asyncio.Future[Any] = asyncio.get_running_loop().create_future()

        def done(error: Any = None, result: Any = None) -> None:
            if completion.done():
                logger.warning("%s: completion callback called more than once", self._command.name)
                return
            if error is None:
                completion.set_result(result)
            elif isinstance(error, BaseException):
                completion.set_exception(error)
            else:
                completion.set_exception(ExecutionError(str(error)))

        returned = await resolve(execute(values, done))
        if not completion.done() and returned is not None:
            return returned
        return await completion

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _parameters_by_question_name(self) -> dict[str, CompiledParameter]:
        return {
            (param.question.name or param.name): param
            for param in self._command.parameters
            if param.question is not None
        }
