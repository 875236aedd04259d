"""Custom exception hierarchy for argprompt.

Every error raised by the library is an :class:`ArgPromptError`
subclass.  Exceptions raised by user code (hooks, handlers) propagate
unchanged.

Hierarchy
---------
ArgPromptError
├── ConfigurationError
├── TokenizationError
├── UnknownCommandError
├── ValidationError
├── ExecutionError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence


class ArgPromptError(Exception):
    """Base exception for all argprompt errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Registration ----------------------------------------------------------

class ConfigurationError(ArgPromptError):
    """Raised synchronously when a command declaration is invalid."""


# --- Command line ----------------------------------------------------------

class TokenizationError(ArgPromptError):
    """Raised when argv does not fit the compiled grammar."""


class UnknownCommandError(ArgPromptError):
    """Raised when a dispatched argv names no registered command."""


# --- Validation ------------------------------------------------------------

class ValidationError(ArgPromptError):
    """Raised when one or more command-line values fail validation.

    The individual messages are kept in :attr:`messages`; the exception
    message joins them with an indented newline so that every offending
    value is visible at once.
    """

    def __init__(self, messages: Sequence[str], *, hint: str | None = None) -> None:
        super().__init__(format_messages(messages), hint=hint)
        self.messages: tuple[str, ...] = tuple(messages)


# --- Execution -------------------------------------------------------------

class ExecutionError(ArgPromptError):
    """Raised when a hook or the command handler fails."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(ArgPromptError):
    """Raised when an optional runtime dependency is not available."""


def format_messages(messages: Sequence[str]) -> str:
    """Join validation messages the way they are shown to users."""
    return "\n    ".join(messages)
