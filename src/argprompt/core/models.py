"""Domain models for argprompt.

Declarations (:class:`ParameterSpec`, :class:`Question`,
:class:`CommandConfig`) are what callers write.  Compiled models
(:class:`CompiledParameter`, :class:`CompiledCommand`) are what the
compiler derives from them.  All models are **frozen** dataclasses;
compilation never mutates a declaration.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from argprompt.exceptions import ConfigurationError

Validator = Callable[..., Any]
"""``(value, answers, cli_values) -> True | False | str | list[str]``, sync or async."""

Coercion = Callable[[str], Any]
"""``(raw) -> value`` applied to command-line strings."""

ChoiceProvider = Sequence[Any] | Callable[..., Any]
"""Literal choices, or ``(answers, cli_values) -> choices``, sync or async."""


# ---------------------------------------------------------------------------
# Parameter kinds
# ---------------------------------------------------------------------------

class ParameterKind(str, Enum):
    """Closed set of parameter kinds."""

    TEXT = "text"
    PASSWORD = "password"
    CONFIRM = "confirm"
    SELECT = "select"
    CHECKBOX = "checkbox"
    INTEGER = "integer"
    NUMBER = "number"

    @classmethod
    def parse(cls, value: ParameterKind | str | None) -> ParameterKind:
        """Normalise *value* (canonical name or alias) to a kind.

        Raises
        ------
        ConfigurationError
            If *value* names no known kind.
        """
        if value is None:
            return cls.TEXT
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _KIND_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            known = ", ".join(kind.value for kind in cls)
            raise ConfigurationError(
                f"Unknown parameter type: {value!r}",
                hint=f"Use one of: {known}",
            ) from None

    @property
    def is_choice(self) -> bool:
        return self in (ParameterKind.SELECT, ParameterKind.CHECKBOX)

    @property
    def is_numeric(self) -> bool:
        return self in (ParameterKind.INTEGER, ParameterKind.NUMBER)


_KIND_ALIASES: dict[str, str] = {
    "input": "text",
    "list": "select",
    "rawselect": "select",
    "int": "integer",
    "float": "number",
    "bool": "confirm",
    "boolean": "confirm",
}


class ErrorStrategy(str, Enum):
    """What to do when command-line values fail validation."""

    RAISE = "raise"
    """Fail the completion signal with a :class:`ValidationError`."""

    REPORT = "report"
    """Print the listing and terminate the process with status 1."""


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Choice:
    """A choice entry with a display label distinct from its value."""

    value: Any
    label: str | None = None


@dataclass(frozen=True, slots=True)
class Question:
    """Partial interactive question; missing fields come from the parameter."""

    message: str | None = None
    name: str | None = None
    type: ParameterKind | str | None = None
    default: Any = None
    choices: ChoiceProvider | None = None
    validate: Validator | None = None
    when: Callable[..., Any] | None = None


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One declared input of a command."""

    cmd_spec: str | None = None
    """CLI grammar token, e.g. ``"[name]"`` or ``"-b, --bacon <size>"``."""

    description: str | None = None
    type: ParameterKind | str | None = None
    default: Any = None
    """Literal default, or ``(answers, cli_values) -> default``."""

    choices: ChoiceProvider | None = None
    validate: Validator | None = None
    question: Question | Mapping[str, Any] | None = None
    coercion: Coercion | None = None
    label: str | None = None
    """Human label for the values of this parameter in generated messages."""


@dataclass(frozen=True, slots=True)
class CommandConfig:
    """Declarative description of one command."""

    cmd: str
    description: str = ""
    parameters: Sequence[ParameterSpec | Mapping[str, Any]] = ()
    execute: Callable[..., Any] | None = None
    pre_validation_hook: Callable[..., Any] | None = None
    """``(TokenizedArgs) -> TokenizedArgs | Mapping``, sync or async."""

    pre_merge_hook: Callable[..., Any] | None = None
    """``(answers, cli_values) -> (answers, cli_values)``, sync or async."""

    error_strategy: ErrorStrategy | str = ErrorStrategy.REPORT
    section: str | None = None
    """Opaque grouping tag, passed through untouched."""


# ---------------------------------------------------------------------------
# Compiled grammar
# ---------------------------------------------------------------------------

class ParameterRole(str, Enum):
    OPTION = "option"
    ARGUMENT = "argument"
    QUESTION_ONLY = "question-only"


class OptionValue(str, Enum):
    """How an option consumes the token that follows it."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    FLAG = "flag"


@dataclass(frozen=True, slots=True)
class OptionDescriptor:
    """Compiled option grammar for one Option-classified parameter."""

    flags: str
    description: str | None
    coercion: Coercion | None
    name: str
    long: str
    short: str | None = None
    value: OptionValue = OptionValue.FLAG
    negate: bool = False
    """``--no-x`` style flag: presence yields ``False``."""

    @property
    def option_strings(self) -> tuple[str, ...]:
        if self.short is None:
            return (self.long,)
        return (self.short, self.long)


@dataclass(frozen=True, slots=True)
class ArgumentDescriptor:
    """Compiled positional slot for one Argument-classified parameter."""

    token: str
    name: str
    required: bool = False
    variadic: bool = False


@dataclass(frozen=True, slots=True)
class CompiledParameter:
    """A declaration together with everything derived from it."""

    spec: ParameterSpec
    name: str
    kind: ParameterKind
    role: ParameterRole
    validator: Validator | None
    coercion: Coercion | None
    question: Question | None
    argument: ArgumentDescriptor | None = None
    option: OptionDescriptor | None = None

    @property
    def variadic(self) -> bool:
        return self.argument is not None and self.argument.variadic


@dataclass(frozen=True, slots=True)
class CompiledCommand:
    """Immutable result of compiling a :class:`CommandConfig`."""

    name: str
    description: str
    parameters: tuple[CompiledParameter, ...]
    arguments: tuple[ArgumentDescriptor, ...]
    options: tuple[OptionDescriptor, ...]
    execute: Callable[..., Any]
    pre_validation_hook: Callable[..., Any] | None = None
    pre_merge_hook: Callable[..., Any] | None = None
    error_strategy: ErrorStrategy = ErrorStrategy.REPORT
    section: str | None = None

    @property
    def positional_tokens(self) -> tuple[str, ...]:
        """Positional grammar tokens in declaration order."""
        return tuple(arg.token for arg in self.arguments)

    @property
    def validators(self) -> dict[str, Validator]:
        return {
            param.name: param.validator
            for param in self.parameters
            if param.validator is not None
        }

    def parameter(self, name: str) -> CompiledParameter | None:
        return next((p for p in self.parameters if p.name == name), None)


# ---------------------------------------------------------------------------
# Per-invocation values
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TokenizedArgs:
    """Tokenizer output: CLI-wave values plus tolerated unknown tokens."""

    values: dict[str, Any] = field(default_factory=dict)
    unknown: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class QuestionDescriptor:
    """Completed question handed to the prompt engine.

    ``default``, ``choices`` and ``when`` may be callables of the answers
    collected so far; ``validate`` is a callable of ``(value, answers)``.
    Any of them may return an awaitable.
    """

    name: str
    type: ParameterKind
    message: str
    default: Any = None
    choices: Any = None
    validate: Callable[..., Any] | None = None
    when: Callable[..., Any] | None = None
