"""Job store listeners that must ignore the watcher's own writes."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from buildsync.domain.guard import ReentrancyGuard
    from buildsync.domain.model import Job, JobChange

log = getLogger(__name__)


def _log_user_change(job: Job, change: JobChange) -> None:
    log.info(
        "Job %s was %s while no sync write was in flight; not syncing it back",
        job.name,
        change,
    )


class JobChangeListener:
    """Forwards job changes to ``on_user_change`` unless an upsert caused them.

    Deletes made by the reconciler do not raise the guard, so they reach
    ``on_user_change`` like any other change.
    """

    def __init__(
        self,
        guard: ReentrancyGuard,
        on_user_change: Callable[[Job, JobChange], None] | None = None,
    ) -> None:
        self.guard = guard
        self.on_user_change = on_user_change or _log_user_change
        self.suppressed = 0

    def __call__(self, job: Job, change: JobChange) -> None:
        if self.guard.is_active():
            self.suppressed += 1
            log.debug("Suppressed reverse sync for job %s (%s by watcher)", job.name, change)
            return
        self.on_user_change(job, change)
