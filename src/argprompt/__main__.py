"""``python -m argprompt``: run the demo CLI through its error boundary."""

from __future__ import annotations

from argprompt.cli.app import cli

if __name__ == "__main__":
    cli()
