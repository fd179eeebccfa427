"""Port for the target job store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from buildsync.domain.model import Job, JobChange


@runtime_checkable
class JobStore(Protocol):
    """Create, look up, update and delete jobs by name.

    Implementations raise :class:`~buildsync.domain.errors.JobStoreError` on failure.
    ``refresh_index`` is best-effort; callers treat its failure as non-fatal.
    """

    def lookup(self, name: str) -> Job | None: ...

    def create(self, name: str, document: str) -> Job: ...

    def update(self, job: Job, document: str) -> Job: ...

    def delete(self, job: Job) -> None: ...

    def refresh_index(self) -> None: ...


@runtime_checkable
class JobChangeObserver(Protocol):
    """Callback invoked by a job store after a job was created, updated or deleted."""

    def __call__(self, job: Job, change: JobChange) -> None: ...
