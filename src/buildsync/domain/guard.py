"""Flag marking writes to the job store that the watcher itself performs."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class ReentrancyGuard:
    """Tracks whether a sync-induced job store write is in flight.

    Job store listeners consult :meth:`is_active` to tell writes made by the watcher
    apart from changes made by users, so they do not push the watcher's own writes
    back to the source. Holders are counted, which keeps the flag raised while any
    key is mid-upsert even when the reconciler lock is sharded.
    """

    def __init__(self) -> None:
        self._mutex = threading.Lock()
        self._holders = 0

    def begin(self) -> None:
        with self._mutex:
            self._holders += 1

    def end(self) -> None:
        with self._mutex:
            if self._holders == 0:
                raise RuntimeError("ReentrancyGuard.end() called without a matching begin()")
            self._holders -= 1

    def is_active(self) -> bool:
        with self._mutex:
            return self._holders > 0

    @contextmanager
    def active(self) -> Iterator[ReentrancyGuard]:
        self.begin()
        try:
            yield self
        finally:
            self.end()
