"""Identifier derivation from command-line tokens."""

from __future__ import annotations

import re

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def split_words(text: str) -> list[str]:
    """Split *text* into words on punctuation and case boundaries.

    ``"--drink-size"`` → ``["drink", "size"]``,
    ``"[sauces...]"`` → ``["sauces"]``,
    ``"HTTPServer"`` → ``["HTTP", "Server"]``.
    """
    return _WORD_RE.findall(text)


def camel_case(text: str) -> str:
    """Return the camel-cased identifier for a flag or positional token.

    >>> camel_case("--drink-size")
    'drinkSize'
    >>> camel_case("[name]")
    'name'
    """
    words = [word.lower() for word in split_words(text)]
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])
