"""Dispatch of watch notifications onto the job store."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, assert_never

from buildsync.domain.decisions import should_process
from buildsync.domain.guard import ReentrancyGuard
from buildsync.domain.ledger import VersionLedger
from buildsync.domain.model import NamespaceName, SyncOutcome, WatchAction

if TYPE_CHECKING:
    from collections.abc import Iterable
    from contextlib import AbstractContextManager

    from buildsync.domain.model import WatchedResource
    from buildsync.domain.ports.job_store import JobStore
    from buildsync.domain.ports.mapping import JobMapper

log = getLogger(__name__)


@dataclass(slots=True)
class BootstrapResult:
    """Outcome of reconciling the initial resource listing."""

    outcomes: Counter[SyncOutcome] = field(default_factory=Counter)
    failed: list[NamespaceName] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return sum(self.outcomes.values())

    def record(self, outcome: SyncOutcome) -> None:
        self.outcomes[outcome] += 1


class Reconciler:
    """Keeps one job per qualifying build configuration in the job store.

    Every upsert and delete runs under ``lock``, a single domain shared by all keys,
    so reads and writes of the ledger and the job store happen in one total order.
    Any context manager can stand in for the default ``threading.Lock``. The ledger
    and the reentrancy guard belong to this instance.
    """

    def __init__(
        self,
        *,
        job_store: JobStore,
        mapper: JobMapper,
        default_namespace: str,
        ledger: VersionLedger | None = None,
        guard: ReentrancyGuard | None = None,
        lock: AbstractContextManager[object] | None = None,
    ) -> None:
        self.job_store = job_store
        self.mapper = mapper
        self.default_namespace = default_namespace
        self.ledger = ledger if ledger is not None else VersionLedger()
        self.guard = guard if guard is not None else ReentrancyGuard()
        self._lock: AbstractContextManager[object] = lock if lock is not None else threading.Lock()

    def is_reentrant_write_in_progress(self) -> bool:
        return self.guard.is_active()

    def on_bootstrap_list(self, items: Iterable[WatchedResource] | None) -> BootstrapResult:
        """Upsert every listed resource; a failing item does not stop the others."""

        result = BootstrapResult()
        for resource in items or ():
            try:
                outcome = self._upsert(resource)
            except Exception:
                log.exception(
                    "Failed to upsert job for BuildConfig %s with revision: %s",
                    resource.key,
                    resource.resource_version,
                )
                result.record(SyncOutcome.FAILED)
                result.failed.append(resource.key)
                continue
            result.record(outcome)
        log.info(
            "Reconciled %s BuildConfigs from initial listing (%s failed)",
            result.processed,
            len(result.failed),
        )
        return result

    def on_event(self, action: WatchAction | str, resource: WatchedResource) -> SyncOutcome:
        """Handle one watch notification; errors are logged, never raised."""

        kind = action if isinstance(action, WatchAction) else WatchAction.parse(action)
        try:
            match kind:
                case WatchAction.ADDED:
                    return self._upsert(resource)
                case WatchAction.MODIFIED:
                    return self._modify(resource)
                case WatchAction.DELETED:
                    return self._delete(resource)
                case WatchAction.UNKNOWN:
                    log.debug("Ignoring %r notification for BuildConfig %s", action, resource.key)
                    return SyncOutcome.IGNORED
                case _:
                    assert_never(kind)
        except Exception:
            log.exception(
                "Failed to handle %s notification for BuildConfig %s with revision: %s",
                kind,
                resource.key,
                resource.resource_version,
            )
            return SyncOutcome.FAILED

    def on_close(self, error: BaseException | None = None) -> None:
        if error is not None:
            log.warning("Watch on BuildConfigs closed: %s", error)
        else:
            log.info("Watch on BuildConfigs closed")

    def _modify(self, resource: WatchedResource) -> SyncOutcome:
        if self.mapper.qualifies(resource):
            return self._upsert(resource)
        # no longer a pipeline build, so its job has to go
        return self._delete(resource)

    def _upsert(self, resource: WatchedResource) -> SyncOutcome:
        if not self.mapper.qualifies(resource):
            log.debug("BuildConfig %s is not a pipeline build; skipping", resource.key)
            return SyncOutcome.NOT_QUALIFYING

        with self._lock, self.guard.active():
            key = NamespaceName.of(resource)
            version = resource.version
            job_name = self.mapper.derive_job_name(resource, self.default_namespace)

            if not should_process(key, version, self.ledger):
                log.info(
                    "Ignored out of order notification for BuildConfig %s with "
                    "resourceVersion %s when we have already processed %s",
                    key,
                    version,
                    self.ledger.get(key),
                )
                return SyncOutcome.STALE

            had_entry = key in self.ledger
            previous = self.ledger.get(key)
            # recorded before the write so a duplicate arriving meanwhile is stale
            self.ledger.put(key, version)

            try:
                definition = self.mapper.map_to_job_definition(resource, self.default_namespace)
                if definition is None:
                    log.info("BuildConfig %s does not map to a job; nothing to upsert", key)
                    return SyncOutcome.UNMAPPED
                outcome = self._write_job(job_name, definition.to_document())
            except Exception:
                if had_entry:
                    self.ledger.put(key, previous)
                else:
                    self.ledger.remove(key)
                raise

        verb = "Created" if outcome is SyncOutcome.CREATED else "Updated"
        log.info("%s job %s from BuildConfig %s with revision: %s", verb, job_name, key, version)
        return outcome

    def _write_job(self, job_name: str, document: str) -> SyncOutcome:
        existing = self.job_store.lookup(job_name)
        if existing is None:
            self.job_store.create(job_name, document)
            return SyncOutcome.CREATED
        self.job_store.update(existing, document)
        return SyncOutcome.UPDATED

    def _delete(self, resource: WatchedResource) -> SyncOutcome:
        job_name = self.mapper.derive_job_name(resource, self.default_namespace)
        key = NamespaceName.of(resource)

        with self._lock:
            outcome = SyncOutcome.ABSENT
            job = self.job_store.lookup(job_name)
            if job is not None:
                self.job_store.delete(job)
                outcome = SyncOutcome.DELETED
                try:
                    self.job_store.refresh_index()
                except Exception:  # noqa: BLE001
                    log.critical(
                        "Failed to reload job index after deleting %s from BuildConfig %s",
                        job_name,
                        key,
                        exc_info=True,
                    )
            self.ledger.remove(key)

        if outcome is SyncOutcome.DELETED:
            log.info("Deleted job %s from BuildConfig %s", job_name, key)
        else:
            log.debug("No job %s to delete for BuildConfig %s", job_name, key)
        return outcome
