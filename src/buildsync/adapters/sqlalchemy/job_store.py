"""Job store persisted through SQLAlchemy sessions."""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from buildsync.domain.errors import JobAlreadyExistsError, JobNotFoundError, JobStoreError
from buildsync.domain.model import Job, JobChange

from .engine import session_factory as default_session_factory
from .mappings import job_table

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.orm import Session, sessionmaker

    from buildsync.domain.ports.job_store import JobChangeObserver

log = getLogger(__name__)


class SqlAlchemyJobStore:
    """Runs every operation in its own session, committing on success.

    Returned jobs are detached; pass them back to :meth:`update` or :meth:`delete`
    and the store re-reads the row by name. Observers are notified only after the
    change has been committed.
    """

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        self.session_factory = session_factory or default_session_factory()
        self._observers: list[JobChangeObserver] = []
        self.job_count: int | None = None

    def add_observer(self, observer: JobChangeObserver) -> None:
        self._observers.append(observer)

    def lookup(self, name: str) -> Job | None:
        with self._session(name) as session:
            return session.get(Job, name)

    def create(self, name: str, document: str) -> Job:
        job = Job(name=name, config_document=document)
        try:
            with self._session(name) as session:
                session.add(job)
                session.commit()
        except JobStoreError as exc:
            if isinstance(exc.__cause__, IntegrityError):
                raise JobAlreadyExistsError(f"Job {name} already exists", job_name=name) from exc
            raise
        self._notify(job, JobChange.CREATED)
        return job

    def update(self, job: Job, document: str) -> Job:
        with self._session(job.name) as session:
            stored = session.get(Job, job.name)
            if stored is None:
                raise JobNotFoundError(f"Job {job.name} does not exist", job_name=job.name)
            stored.replace_configuration(document)
            session.commit()
        self._notify(stored, JobChange.UPDATED)
        return stored

    def delete(self, job: Job) -> None:
        with self._session(job.name) as session:
            stored = session.get(Job, job.name)
            if stored is None:
                raise JobNotFoundError(f"Job {job.name} does not exist", job_name=job.name)
            session.delete(stored)
            session.commit()
        self._notify(stored, JobChange.DELETED)

    def refresh_index(self) -> None:
        with self._session(None) as session:
            self.job_count = session.execute(
                select(func.count()).select_from(job_table)
            ).scalar_one()
        log.debug("Job index refreshed: %s jobs", self.job_count)

    def names(self) -> list[str]:
        with self._session(None) as session:
            stmt = select(job_table.c.name).order_by(job_table.c.name)
            return list(session.execute(stmt).scalars())

    @contextmanager
    def _session(self, job_name: str | None) -> Iterator[Session]:
        session = self.session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            session.rollback()
            raise JobStoreError(
                f"Job store operation failed for {job_name or 'index'}: {exc}",
                job_name=job_name,
            ) from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _notify(self, job: Job, change: JobChange) -> None:
        for observer in self._observers:
            observer(job, change)


if TYPE_CHECKING:
    from buildsync.domain.ports.job_store import JobStore

    _store_check: JobStore = SqlAlchemyJobStore()
