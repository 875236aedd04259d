"""Core layer — declaration compiling, validation, questions and the pipeline.

Rules
-----
* No ``print()`` calls.
* No imports from ``cli`` or ``infra``.
* Tokenizing and prompting happen only through :mod:`.protocols`.
"""

from argprompt.core.compiler import compile_command, compile_parameter
from argprompt.core.completion import CompletionSignal
from argprompt.core.models import (
    Choice,
    CommandConfig,
    CompiledCommand,
    CompiledParameter,
    ErrorStrategy,
    ParameterKind,
    ParameterSpec,
    Question,
    QuestionDescriptor,
    TokenizedArgs,
)
from argprompt.core.pipeline import InvocationPipeline, PipelineState
from argprompt.core.protocols import PromptEngine, Tokenizer, ValidationReporter
from argprompt.core.questions import synthesize_questions
from argprompt.core.validation import make_choice_validator, validate_values

__all__: list[str] = [
    "Choice",
    "CommandConfig",
    "CompiledCommand",
    "CompiledParameter",
    "CompletionSignal",
    "ErrorStrategy",
    "InvocationPipeline",
    "ParameterKind",
    "ParameterSpec",
    "PipelineState",
    "PromptEngine",
    "Question",
    "QuestionDescriptor",
    "TokenizedArgs",
    "Tokenizer",
    "ValidationReporter",
    "compile_command",
    "compile_parameter",
    "make_choice_validator",
    "synthesize_questions",
    "validate_values",
]
