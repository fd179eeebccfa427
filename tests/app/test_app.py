from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx

from buildsync.adapters.memory import InMemoryJobStore
from buildsync.adapters.openshift import OpenShiftWatchSource
from buildsync.app import build_reconciler, reconcile_once, run_watcher
from buildsync.config import WatchConfig
from buildsync.domain.errors import WatchError
from buildsync.domain.model import JobChange, SyncOutcome, WatchAction, WatchEvent
from tests.helpers.resources import FakeWatchSource, make_resource

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from buildsync.domain.model import Job

CONFIG = WatchConfig(namespace="ci", default_namespace="ci", api_url="https://api.example.com")


def test_run_watcher_bootstraps_then_follows_events() -> None:
    store = InMemoryJobStore()
    source = FakeWatchSource(
        items=[make_resource("a", "1"), make_resource("b", "1", pipeline=False)],
        events=[
            WatchEvent(WatchAction.MODIFIED, make_resource("a", "1")),
            WatchEvent(WatchAction.ADDED, make_resource("c", "5")),
            WatchEvent(WatchAction.DELETED, make_resource("a", "6")),
        ],
        resource_version="100",
    )

    reconciler = build_reconciler(CONFIG, job_store=store)

    result = run_watcher(CONFIG, source=source, reconciler=reconciler)

    assert source.watched_from == ["100"]
    assert result.bootstrap.outcomes[SyncOutcome.CREATED] == 1
    assert result.bootstrap.outcomes[SyncOutcome.NOT_QUALIFYING] == 1
    assert result.events[SyncOutcome.STALE] == 1
    assert result.events[SyncOutcome.CREATED] == 1
    assert result.events[SyncOutcome.DELETED] == 1
    assert result.handled == 3
    assert result.closed_with is None
    assert store.names() == ["c"]


def test_run_watcher_records_watch_error() -> None:
    error = WatchError("too old resource version", code=410)
    source = FakeWatchSource(items=[make_resource()], error=error)
    reconciler = build_reconciler(CONFIG, job_store=InMemoryJobStore())

    result = run_watcher(CONFIG, source=source, reconciler=reconciler)

    assert result.closed_with is error
    assert result.bootstrap.processed == 1


def test_reconcile_once_does_not_watch() -> None:
    source = FakeWatchSource(items=[make_resource()])
    reconciler = build_reconciler(CONFIG, job_store=InMemoryJobStore())

    result = reconcile_once(CONFIG, source=source, reconciler=reconciler)

    assert result.outcomes[SyncOutcome.CREATED] == 1
    assert source.watched_from == []


def test_build_reconciler_registers_reverse_sync_listener() -> None:
    store = InMemoryJobStore()
    user_changes: list[tuple[str, JobChange]] = []

    def on_user_change(job: Job, change: JobChange) -> None:
        user_changes.append((job.name, change))

    reconciler = build_reconciler(CONFIG, job_store=store, on_user_change=on_user_change)
    reconciler.on_event(WatchAction.ADDED, make_resource(version="1"))
    job = store.lookup("app")
    assert job is not None
    store.update(job, "{}")

    assert user_changes == [("app", JobChange.UPDATED)]


def test_build_reconciler_defaults_to_sqlalchemy_store(started_adapter: Engine) -> None:
    _ = started_adapter
    reconciler = build_reconciler(CONFIG)

    outcome = reconciler.on_event(WatchAction.ADDED, make_resource(version="1"))

    assert outcome is SyncOutcome.CREATED
    assert reconciler.job_store.lookup("app") is not None


def test_run_watcher_closes_on_unreadable_error_event() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.dumps({"type": "ERROR", "object": {"kind": "Status", "code": "Gone"}})
        if request.url.params.get("watch") == "true":
            return httpx.Response(200, content=body.encode())
        return httpx.Response(200, json={"kind": "BuildConfigList", "items": []})

    def client_factory(config: WatchConfig) -> httpx.Client:
        return httpx.Client(base_url=config.api_url, transport=httpx.MockTransport(handler))

    source = OpenShiftWatchSource(config=CONFIG, client_factory=client_factory)
    reconciler = build_reconciler(CONFIG, job_store=InMemoryJobStore())

    result = run_watcher(CONFIG, source=source, reconciler=reconciler)

    assert isinstance(result.closed_with, WatchError)
    assert result.handled == 0
