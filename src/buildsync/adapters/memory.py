"""Dict-backed job store for local runs and tests."""

from __future__ import annotations

import threading
from logging import getLogger
from typing import TYPE_CHECKING

from buildsync.domain.errors import JobAlreadyExistsError, JobNotFoundError
from buildsync.domain.model import Job, JobChange

if TYPE_CHECKING:
    from buildsync.domain.ports.job_store import JobChangeObserver

log = getLogger(__name__)


class InMemoryJobStore:
    """Keeps jobs in a dict and serves lookups from a separate name index.

    Deleting a job drops it from the backing dict only; the index keeps a stale
    entry until :meth:`refresh_index` rebuilds it, mirroring stores whose item
    index has to be reloaded after a removal. Lookups never return a stale entry.
    """

    def __init__(self, jobs: dict[str, Job] | None = None) -> None:
        self._jobs: dict[str, Job] = dict(jobs or {})
        self._index: set[str] = set(self._jobs)
        self._observers: list[JobChangeObserver] = []
        self._mutex = threading.RLock()
        self.refreshes = 0

    def add_observer(self, observer: JobChangeObserver) -> None:
        self._observers.append(observer)

    def lookup(self, name: str) -> Job | None:
        with self._mutex:
            if name not in self._index:
                return None
            return self._jobs.get(name)

    def create(self, name: str, document: str) -> Job:
        with self._mutex:
            if name in self._jobs:
                raise JobAlreadyExistsError(f"Job {name} already exists", job_name=name)
            job = Job(name=name, config_document=document)
            self._jobs[name] = job
            self._index.add(name)
        self._notify(job, JobChange.CREATED)
        return job

    def update(self, job: Job, document: str) -> Job:
        with self._mutex:
            stored = self._jobs.get(job.name)
            if stored is None:
                raise JobNotFoundError(f"Job {job.name} does not exist", job_name=job.name)
            stored.replace_configuration(document)
        self._notify(stored, JobChange.UPDATED)
        return stored

    def delete(self, job: Job) -> None:
        with self._mutex:
            stored = self._jobs.pop(job.name, None)
            if stored is None:
                raise JobNotFoundError(f"Job {job.name} does not exist", job_name=job.name)
        self._notify(stored, JobChange.DELETED)

    def refresh_index(self) -> None:
        with self._mutex:
            self._index = set(self._jobs)
            self.refreshes += 1

    def names(self) -> list[str]:
        with self._mutex:
            return sorted(self._jobs)

    def __len__(self) -> int:
        return len(self._jobs)

    def _notify(self, job: Job, change: JobChange) -> None:
        for observer in self._observers:
            observer(job, change)


if TYPE_CHECKING:
    from buildsync.domain.ports.job_store import JobStore

    _store_check: JobStore = InMemoryJobStore()
