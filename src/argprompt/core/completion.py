"""Per-invocation completion handle.

Each dispatch owns one :class:`CompletionSignal`.  The pipeline resolves
it exactly once, with a result or with an error, and the caller awaits
it.  Nothing is shared between invocations, so overlapping dispatches
cannot receive each other's outcome.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Generator
from typing import Any

logger = logging.getLogger(__name__)


class CompletionSignal:
    """One-shot, awaitable outcome of a single command invocation.

    Usage::

        signal = program.dispatch(["burger", "my-burger"])
        result = await signal
    """

    def __init__(self, command: str | None = None) -> None:
        self.command: str | None = command
        self._future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()

    # ------------------------------------------------------------------
    # Producer side
    # ------------------------------------------------------------------

    def succeed(self, result: Any = None) -> bool:
        """Resolve with *result*.  Returns ``False`` if already resolved."""
        if self._future.done():
            logger.warning("Ignoring extra success signal for %r", self.command)
            return False
        self._future.set_result(result)
        return True

    def fail(self, error: BaseException) -> bool:
        """Resolve with *error*.  Returns ``False`` if already resolved."""
        if self._future.done():
            logger.warning("Ignoring extra failure signal for %r: %s", self.command, error)
            return False
        self._future.set_exception(error)
        return True

    # ------------------------------------------------------------------
    # Consumer side
    # ------------------------------------------------------------------

    def done(self) -> bool:
        return self._future.done()

    async def wait(self) -> Any:
        """Return the result, or raise the error, once resolved."""
        return await asyncio.shield(self._future)

    def __await__(self) -> Generator[Any, None, Any]:
        return self.wait().__await__()

    def __repr__(self) -> str:
        state = "done" if self._future.done() else "pending"
        return f"<CompletionSignal command={self.command!r} {state}>"
