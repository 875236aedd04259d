"""Compile command declarations into an immutable grammar.

Classification of a parameter by its ``cmd_spec``:

* starts with ``-``   → **option** (``"-b, --bacon <size>"``)
* present otherwise   → **argument** (``"<name>"``, ``"[sauces...]"``)
* absent              → **question-only** (named after its question)

Every function here is pure: the same declarations always compile to
the same names and grammar, and the declarations are never mutated.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from argprompt.core.models import (
    ArgumentDescriptor,
    CommandConfig,
    CompiledCommand,
    CompiledParameter,
    Coercion,
    ErrorStrategy,
    OptionDescriptor,
    OptionValue,
    ParameterKind,
    ParameterRole,
    ParameterSpec,
    Question,
    Validator,
)
from argprompt.core.validation import (
    INTEGER_RE,
    NUMBER_RE,
    make_choice_validator,
    make_integer_validator,
    make_number_validator,
)
from argprompt.exceptions import ConfigurationError
from argprompt.utils.naming import camel_case

_FLAG_SPLIT_RE = re.compile(r"[ ,|]+")


# ---------------------------------------------------------------------------
# Default coercions
# ---------------------------------------------------------------------------

def coerce_integer(raw: Any) -> Any:
    """Parse *raw* as an int when it matches the integer grammar."""
    return int(raw) if INTEGER_RE.match(str(raw)) else raw


def coerce_number(raw: Any) -> Any:
    """Parse *raw* as a float when it matches the number grammar."""
    return float(raw) if NUMBER_RE.match(str(raw)) else raw


def coerce_list(raw: Any) -> Any:
    """Split a comma-separated string into trimmed tokens."""
    if not isinstance(raw, str):
        return raw
    if raw == "":
        return []
    return [token.strip() for token in raw.split(",")]


def default_coercion(kind: ParameterKind) -> Coercion | None:
    """Return the string → value conversion used when none is declared."""
    if kind is ParameterKind.INTEGER:
        return coerce_integer
    if kind is ParameterKind.NUMBER:
        return coerce_number
    if kind is ParameterKind.CHECKBOX:
        return coerce_list
    return None


def default_validator(
    kind: ParameterKind,
    name: str,
    spec: ParameterSpec,
) -> Validator | None:
    """Return the validator generated for *kind* when none is declared."""
    if kind.is_choice:
        return make_choice_validator(spec.choices, spec.label)
    if kind is ParameterKind.INTEGER:
        return make_integer_validator(name)
    if kind is ParameterKind.NUMBER:
        return make_number_validator(name)
    return None


# ---------------------------------------------------------------------------
# Grammar parsing
# ---------------------------------------------------------------------------

def parse_option_spec(
    cmd_spec: str,
    description: str | None = None,
    coercion: Coercion | None = None,
) -> OptionDescriptor:
    """Parse ``"-s, --long <value>"`` style option grammar.

    When the second token is a value placeholder (``<x>`` / ``[x]``) the
    first token is the sole flag; otherwise the first token is the short
    flag and the second the long flag.
    """
    tokens = [token for token in _FLAG_SPLIT_RE.split(cmd_spec.strip()) if token]
    short: str | None = None
    if len(tokens) > 1 and not tokens[1].startswith(("<", "[")):
        short = tokens.pop(0)
    long = tokens.pop(0)

    if "<" in cmd_spec:
        value = OptionValue.REQUIRED
    elif "[" in cmd_spec:
        value = OptionValue.OPTIONAL
    else:
        value = OptionValue.FLAG

    negate = long.startswith("--no-")
    name = camel_case(long[len("--no-"):] if negate else long)
    if not name:
        raise ConfigurationError(f"Cannot derive a name from option {cmd_spec!r}")

    return OptionDescriptor(
        flags=cmd_spec,
        description=description,
        coercion=coercion,
        name=name,
        long=long,
        short=short,
        value=value,
        negate=negate,
    )


def parse_argument_spec(cmd_spec: str) -> ArgumentDescriptor:
    """Parse ``"<name>"``, ``"[name]"`` or ``"[name...]"`` positional grammar."""
    token = cmd_spec.strip()
    name = camel_case(token)
    if not name or " " in token:
        raise ConfigurationError(
            f"Invalid argument spec {cmd_spec!r}",
            hint="Declare one positional per parameter, e.g. '<name>' or '[items...]'",
        )
    return ArgumentDescriptor(
        token=token,
        name=name,
        required=token.startswith("<"),
        variadic="..." in token,
    )


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------

def _as_spec(declaration: ParameterSpec | Mapping[str, Any]) -> ParameterSpec:
    if isinstance(declaration, ParameterSpec):
        return declaration
    if isinstance(declaration, Mapping):
        try:
            return ParameterSpec(**declaration)
        except TypeError as exc:
            raise ConfigurationError(f"Invalid parameter declaration: {exc}") from exc
    raise ConfigurationError(
        f"A parameter must be a ParameterSpec or a mapping, got {type(declaration).__name__}",
    )


def _as_question(question: Question | Mapping[str, Any] | None) -> Question | None:
    if question is None or isinstance(question, Question):
        return question
    if isinstance(question, Mapping):
        try:
            return Question(**question)
        except TypeError as exc:
            raise ConfigurationError(f"Invalid question declaration: {exc}") from exc
    raise ConfigurationError(
        f"A question must be a Question or a mapping, got {type(question).__name__}",
    )


def compile_parameter(declaration: ParameterSpec | Mapping[str, Any]) -> CompiledParameter:
    """Classify one declaration and derive its name, validator and coercion."""
    spec = _as_spec(declaration)
    kind = ParameterKind.parse(spec.type)
    question = _as_question(spec.question)
    coercion = spec.coercion or default_coercion(kind)

    argument: ArgumentDescriptor | None = None
    option: OptionDescriptor | None = None
    cmd_spec = (spec.cmd_spec or "").strip()

    if not cmd_spec:
        if question is None or not question.name:
            raise ConfigurationError(
                "A parameter without cmd_spec must declare a question with a name",
            )
        role = ParameterRole.QUESTION_ONLY
        name = question.name
    elif cmd_spec.startswith("-"):
        role = ParameterRole.OPTION
        option = parse_option_spec(cmd_spec, spec.description, coercion)
        name = option.name
    else:
        role = ParameterRole.ARGUMENT
        argument = parse_argument_spec(cmd_spec)
        name = argument.name

    validator = spec.validate or default_validator(kind, name, spec)

    return CompiledParameter(
        spec=spec,
        name=name,
        kind=kind,
        role=role,
        validator=validator,
        coercion=coercion,
        question=question,
        argument=argument,
        option=option,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def compile_command(config: CommandConfig) -> CompiledCommand:
    """Compile a :class:`CommandConfig` into a :class:`CompiledCommand`.

    Raises
    ------
    ConfigurationError
        If ``execute`` is not callable, a parameter is malformed, or two
        parameters derive the same name.
    """
    if not config.cmd or not config.cmd.strip():
        raise ConfigurationError("A command configuration must have a non-empty 'cmd'")
    if not callable(config.execute):
        raise ConfigurationError(
            "A command configuration must have a function as 'execute' property",
        )
    try:
        strategy = ErrorStrategy(config.error_strategy)
    except ValueError:
        raise ConfigurationError(
            f"Unknown error strategy: {config.error_strategy!r}",
            hint="Use 'raise' or 'report'",
        ) from None

    parameters = tuple(compile_parameter(decl) for decl in config.parameters)

    seen: set[str] = set()
    for param in parameters:
        if param.name in seen:
            raise ConfigurationError(
                f"Duplicate parameter name {param.name!r} in command {config.cmd!r}",
            )
        seen.add(param.name)

    return CompiledCommand(
        name=config.cmd.strip(),
        description=config.description,
        parameters=parameters,
        arguments=tuple(p.argument for p in parameters if p.argument is not None),
        options=tuple(p.option for p in parameters if p.option is not None),
        execute=config.execute,
        pre_validation_hook=config.pre_validation_hook,
        pre_merge_hook=config.pre_merge_hook,
        error_strategy=strategy,
        section=config.section,
    )
