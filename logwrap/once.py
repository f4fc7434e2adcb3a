"""
One-shot barrier.

``OneShot.do(fn)`` runs ``fn`` at most once per instance.  Every caller,
including the ones that lost the race, returns only after that single run
has finished.  If the run raised, the exception is kept and re-raised to
every caller; the body is never retried.  A run cut short by an interrupt
is not recorded, so the next caller runs the body again.
"""

from __future__ import annotations

import threading
from typing import Callable


class OneShot:
    """Done-once latch guarding a side-effecting initialisation body."""

    def __init__(self) -> None:
        self._lock  = threading.Lock()
        self._done  = False
        self._error: BaseException | None = None

    @property
    def done(self) -> bool:
        return self._done

    def do(self, fn: Callable[[], None]) -> None:
        if not self._done:
            with self._lock:
                if not self._done:
                    try:
                        fn()
                    except Exception as exc:
                        self._error = exc
                    # interrupts skip this and leave the latch open
                    self._done = True
        if self._error is not None:
            raise self._error
