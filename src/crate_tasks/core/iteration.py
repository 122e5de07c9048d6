"""Iteration runner — repeat a step until it fails.

Backs the ``longtest`` stress loop.  There is deliberately no
iteration cap; the loop ends on the first failing status or when the
process is interrupted from outside.
"""

from __future__ import annotations

from collections.abc import Callable


def _nonzero(status: int) -> bool:
    return status != 0


class IterationRunner:
    """Invoke *step* over and over, reporting a 1-based counter.

    Parameters
    ----------
    step:
        Zero-argument callable returning an exit status.
    on_iteration:
        Called with the iteration number *before* each attempt.
    should_stop:
        Predicate on the step's status; defaults to "non-zero".
    """

    def __init__(
        self,
        step: Callable[[], int],
        *,
        on_iteration: Callable[[int], None],
        should_stop: Callable[[int], bool] = _nonzero,
    ) -> None:
        self._step = step
        self._on_iteration = on_iteration
        self._should_stop = should_stop
        self.iterations: int = 0

    def run(self) -> int:
        """Loop until :attr:`should_stop` accepts a status, then return it."""
        while True:
            self.iterations += 1
            self._on_iteration(self.iterations)
            status = self._step()
            if self._should_stop(status):
                return status
