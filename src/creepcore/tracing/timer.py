"""CPU timing scope.

Usage:
    with CpuTimer("Main Loop", world.cpu_used) as timer:
        ...
        if timer.elapsed() > budget:
            ...

On exit the timer logs where the scope started and how much CPU it added.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType

logger = logging.getLogger(__name__)


class CpuTimer:
    """Measures host CPU consumed inside a with-block.

    Args:
        name: Label for the log line.
        clock: Returns CPU used so far in the current tick.
    """

    def __init__(self, name: str, clock: Callable[[], float]) -> None:
        self.name = name
        self._clock = clock
        self.loaded = 0.0
        self.added: float | None = None

    def __enter__(self) -> CpuTimer:
        self.loaded = self._clock()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.added = self._clock() - self.loaded
        logger.info(
            "\n%s done!\n\t| Init. At: %.2fcpu\n\t| Added: %.2fcpu",
            self.name,
            self.loaded,
            self.added,
        )

    def elapsed(self) -> float:
        """CPU added since entering the scope (final value once exited)."""
        if self.added is not None:
            return self.added
        return self._clock() - self.loaded
