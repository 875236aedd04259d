"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the tokenizer and the prompt engine can be
swapped or faked freely.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NoReturn, Protocol

from argprompt.core.models import CompiledCommand, QuestionDescriptor, TokenizedArgs


class Tokenizer(Protocol):
    """Contract for command-line tokenizers."""

    def tokenize(self, command: CompiledCommand, argv: Sequence[str]) -> TokenizedArgs:
        """Split *argv* (the tokens after the command name) into values.

        The returned values are keyed by parameter name, positionals
        first then options, both in declaration order.  Values absent
        from *argv* map to ``None``.  Coercions are applied; a coercion
        that raises ``TypeError`` or ``ValueError`` leaves the raw string.
        Tokens matching no declared option are returned in
        :attr:`TokenizedArgs.unknown` instead of failing.

        Raises
        ------
        TokenizationError
            When a required positional or option value is missing.
        """
        ...  # pragma: no cover


class PromptEngine(Protocol):
    """Contract for interactive prompt backends."""

    async def prompt(self, questions: Sequence[QuestionDescriptor]) -> dict[str, Any]:
        """Ask *questions* one at a time and return answers by name.

        A question whose ``when`` yields a falsy value is skipped and
        contributes no answer.  Callables on a question receive the
        answers collected so far.
        """
        ...  # pragma: no cover


class ValidationReporter(Protocol):
    """Contract for the ``report`` error strategy."""

    def __call__(self, messages: Sequence[str]) -> NoReturn:
        """Show *messages* to the user and terminate the process."""
        ...  # pragma: no cover
