"""User-facing rendering of command-line validation failures.

Used by the ``report`` error strategy: the listing is printed and the
process terminates with :data:`~argprompt.cli.exit_codes.GENERAL_ERROR`.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import NoReturn

from argprompt.cli import exit_codes
from argprompt.cli.console import console, escape


def format_validation_listing(messages: Sequence[str]) -> str:
    """Render *messages* as the indented listing shown to users."""
    body = "\n    ".join(escape(message) for message in messages)
    return f"\n  [bold red]Error[/bold red]:\n\n    {body}\n"


def report_validation_failure(messages: Sequence[str]) -> NoReturn:
    """Print *messages* and exit the process with status 1."""
    console.print(format_validation_listing(messages))
    sys.exit(exit_codes.GENERAL_ERROR)
