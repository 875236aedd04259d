"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from argprompt.exceptions import EnvironmentError

_MARKUP_RE = re.compile(r"\[/?[a-z #]+\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


def escape(text: object) -> str:
    """Escape Rich markup in user-supplied *text*."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return str(text)
    return rich_escape(str(text))


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*(_strip_markup(obj) for obj in objects), file=sys.stderr)
            return
        rich_console.print(*objects)

    def print_json(self, data: str) -> None:
        """Pretty-print a JSON document, highlighted when Rich is available."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(data, file=sys.stderr)
            return
        rich_console.print_json(data)


def _strip_markup(obj: object) -> object:
    if isinstance(obj, str):
        return _MARKUP_RE.sub("", obj)
    return obj


console = _ConsoleProxy()
