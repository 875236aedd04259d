"""Process exit statuses of the ``argprompt`` console script.

``cli()`` and the ``report`` validation strategy are the only places
that end the process; both take their status from here.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command handler finished, or only help/version was shown."""

GENERAL_ERROR: int = 1
"""An ArgPromptError reached ``cli()``, or the ``report`` strategy rejected argv values."""

KEYBOARD_INTERRUPT: int = 130
"""Prompting was aborted with Ctrl+C (128 + SIGINT)."""

UNEXPECTED_ERROR: int = 2
"""Any other exception escaped the command."""
