"""CLI layer — prompting, user-facing output, wiring and error boundary.

This package is the outermost layer of the library.  It may import
from ``core``, ``infra``, and ``utils``, but no other layer may import
from ``cli``.
"""
