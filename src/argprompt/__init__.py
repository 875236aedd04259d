"""argprompt — declare a command once, fill it from argv or interactively.

Parameters that are not supplied on the command line are asked for with
an interactive prompt, then both waves are merged and handed to the
command handler.
"""

from argprompt.cli.program import Program
from argprompt.core.completion import CompletionSignal
from argprompt.core.models import (
    Choice,
    CommandConfig,
    ErrorStrategy,
    ParameterKind,
    ParameterSpec,
    Question,
)
from argprompt.exceptions import (
    ArgPromptError,
    ConfigurationError,
    ExecutionError,
    ValidationError,
)
from argprompt.version import __version__

__all__: list[str] = [
    "ArgPromptError",
    "Choice",
    "CommandConfig",
    "CompletionSignal",
    "ConfigurationError",
    "ErrorStrategy",
    "ExecutionError",
    "ParameterKind",
    "ParameterSpec",
    "Program",
    "Question",
    "ValidationError",
    "__version__",
]
