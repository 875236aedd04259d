"""Infrastructure layer — adapters for external parsing machinery.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must satisfy the protocols in :mod:`argprompt.core.protocols`.
"""

from argprompt.infra.argv_tokenizer import ArgvTokenizer, build_parser

__all__: list[str] = [
    "ArgvTokenizer",
    "build_parser",
]
