from __future__ import annotations

import logging

import pytest

from buildsync.adapters.memory import InMemoryJobStore
from buildsync.domain.guard import ReentrancyGuard
from buildsync.domain.listeners import JobChangeListener
from buildsync.domain.mapping import BuildConfigJobMapper
from buildsync.domain.model import Job, JobChange, WatchAction
from buildsync.domain.reconciler import Reconciler
from tests.helpers.resources import make_resource


def test_listener_forwards_changes_while_guard_inactive() -> None:
    seen: list[tuple[str, JobChange]] = []
    listener = JobChangeListener(
        ReentrancyGuard(), lambda job, change: seen.append((job.name, change))
    )

    listener(Job(name="manual", config_document="{}"), JobChange.UPDATED)

    assert seen == [("manual", JobChange.UPDATED)]
    assert listener.suppressed == 0


def test_listener_suppresses_changes_while_guard_active() -> None:
    seen: list[tuple[str, JobChange]] = []
    guard = ReentrancyGuard()
    listener = JobChangeListener(guard, lambda job, change: seen.append((job.name, change)))

    with guard.active():
        listener(Job(name="synced", config_document="{}"), JobChange.CREATED)

    assert seen == []
    assert listener.suppressed == 1


def test_watcher_writes_do_not_trigger_reverse_sync() -> None:
    seen: list[tuple[str, JobChange]] = []
    store = InMemoryJobStore()
    reconciler = Reconciler(job_store=store, mapper=BuildConfigJobMapper(), default_namespace="ci")
    listener = JobChangeListener(
        reconciler.guard, lambda job, change: seen.append((job.name, change))
    )
    store.add_observer(listener)

    reconciler.on_event(WatchAction.ADDED, make_resource(version="1"))
    reconciler.on_event(WatchAction.MODIFIED, make_resource(version="2"))
    job = store.lookup("app")
    assert job is not None
    store.update(job, '{"edited": true}')

    assert listener.suppressed == 2
    assert seen == [("app", JobChange.UPDATED)]


def test_default_handler_does_not_claim_origin_of_deletes(
    caplog: pytest.LogCaptureFixture,
) -> None:
    store = InMemoryJobStore()
    reconciler = Reconciler(job_store=store, mapper=BuildConfigJobMapper(), default_namespace="ci")
    store.add_observer(JobChangeListener(reconciler.guard))

    with caplog.at_level(logging.INFO, logger="buildsync.domain.listeners"):
        reconciler.on_event(WatchAction.ADDED, make_resource(version="1"))
        reconciler.on_event(WatchAction.DELETED, make_resource(version="1"))

    messages = [r.getMessage() for r in caplog.records if r.name == "buildsync.domain.listeners"]
    assert messages == [
        "Job app was deleted while no sync write was in flight; not syncing it back"
    ]
    assert "outside of the watcher" not in caplog.text
