"""Application orchestration entry points."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from buildsync.adapters.openshift import OpenShiftWatchSource
from buildsync.adapters.sqlalchemy import SqlAlchemyJobStore, is_started, startup
from buildsync.config import get_watch_config
from buildsync.domain.errors import WatchError
from buildsync.domain.listeners import JobChangeListener
from buildsync.domain.mapping import BuildConfigJobMapper
from buildsync.domain.model import SyncOutcome
from buildsync.domain.reconciler import BootstrapResult, Reconciler

if TYPE_CHECKING:
    from collections.abc import Callable

    from buildsync.config import WatchConfig
    from buildsync.domain.model import Job, JobChange
    from buildsync.domain.ports import JobMapper, JobStore, WatchSource

log = getLogger(__name__)


@dataclass(slots=True)
class WatchRunResult:
    """Summary of one list-then-watch run."""

    bootstrap: BootstrapResult
    events: Counter[SyncOutcome] = field(default_factory=Counter)
    closed_with: WatchError | None = None

    @property
    def handled(self) -> int:
        return sum(self.events.values())


def build_reconciler(
    config: WatchConfig,
    *,
    job_store: JobStore | None = None,
    mapper: JobMapper | None = None,
    database_uri: str | None = None,
    on_user_change: Callable[[Job, JobChange], None] | None = None,
) -> Reconciler:
    """Wire a reconciler and hook its guard into the job store's change listeners."""

    if job_store is None:
        if not is_started():
            startup(database_uri=database_uri)
        job_store = SqlAlchemyJobStore()

    reconciler = Reconciler(
        job_store=job_store,
        mapper=mapper or BuildConfigJobMapper(),
        default_namespace=config.default_namespace,
    )
    add_observer = getattr(job_store, "add_observer", None)
    if add_observer is not None:
        add_observer(JobChangeListener(reconciler.guard, on_user_change))
    return reconciler


def reconcile_once(
    config: WatchConfig | None = None,
    *,
    source: WatchSource | None = None,
    reconciler: Reconciler | None = None,
    database_uri: str | None = None,
) -> BootstrapResult:
    """List the BuildConfigs once and reconcile their jobs."""

    return _run(
        config, source=source, reconciler=reconciler, database_uri=database_uri, follow=False
    ).bootstrap


def run_watcher(
    config: WatchConfig | None = None,
    *,
    source: WatchSource | None = None,
    reconciler: Reconciler | None = None,
    database_uri: str | None = None,
) -> WatchRunResult:
    """Reconcile the initial listing, then follow the watch stream until it closes."""

    return _run(
        config, source=source, reconciler=reconciler, database_uri=database_uri, follow=True
    )


def _run(
    config: WatchConfig | None,
    *,
    source: WatchSource | None,
    reconciler: Reconciler | None,
    database_uri: str | None,
    follow: bool,
) -> WatchRunResult:
    effective_config = config or get_watch_config()
    effective_source = source or OpenShiftWatchSource(config=effective_config)
    effective_reconciler = reconciler or build_reconciler(
        effective_config, database_uri=database_uri
    )
    log.info(
        "Starting BuildConfig sync: namespace=%s, default_namespace=%s, follow=%s",
        effective_config.namespace,
        effective_config.default_namespace,
        follow,
    )

    listing = effective_source.list_resources()
    result = WatchRunResult(bootstrap=effective_reconciler.on_bootstrap_list(listing.items))
    if not follow:
        return result

    try:
        for event in effective_source.watch(listing.resource_version):
            result.events[effective_reconciler.on_event(event.action, event.resource)] += 1
    except WatchError as exc:
        result.closed_with = exc
        effective_reconciler.on_close(exc)
    else:
        effective_reconciler.on_close(None)

    log.info(
        "Finished BuildConfig watch: handled=%s, failed=%s",
        result.handled,
        result.events[SyncOutcome.FAILED],
    )
    return result

