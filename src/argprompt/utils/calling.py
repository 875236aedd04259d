"""Helpers for calling user-supplied callables.

User callables (validators, providers, hooks, skip conditions) may be
plain functions or coroutine functions, and may accept fewer positional
arguments than the library offers.  Only the leading arguments a
callable can take are passed to it.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any


def _positional_capacity(func: Callable[..., Any]) -> int | None:
    """Return how many positional arguments *func* accepts.

    ``None`` means unbounded (``*args``) or that the signature cannot be
    inspected, in which case every argument is passed.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None

    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def requires_positional(func: Callable[..., Any], count: int) -> bool:
    """Return ``True`` when *func* requires at least *count* positional arguments.

    Parameters with a default and ``*args`` do not count.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    required = [
        param
        for param in signature.parameters.values()
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        )
        and param.default is inspect.Parameter.empty
    ]
    return len(required) >= count


def call_flexible(func: Callable[..., Any], *args: Any) -> Any:
    """Call *func* with as many leading *args* as it accepts."""
    capacity = _positional_capacity(func)
    if capacity is not None:
        args = args[:capacity]
    return func(*args)


async def resolve(value: Any) -> Any:
    """Await *value* when it is awaitable, else return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def call_and_resolve(func: Callable[..., Any], *args: Any) -> Any:
    """:func:`call_flexible` then :func:`resolve` the result."""
    return await resolve(call_flexible(func, *args))
