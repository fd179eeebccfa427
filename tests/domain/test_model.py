from __future__ import annotations

import pytest

from buildsync.domain.model import Job, NamespaceName, WatchAction, WatchedResource


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("ADDED", WatchAction.ADDED),
        ("modified", WatchAction.MODIFIED),
        (" DELETED ", WatchAction.DELETED),
        ("BOOKMARK", WatchAction.UNKNOWN),
        ("ERROR", WatchAction.UNKNOWN),
        (None, WatchAction.UNKNOWN),
        (7, WatchAction.UNKNOWN),
    ],
)
def test_watch_action_parse(raw: object, expected: WatchAction) -> None:
    assert WatchAction.parse(raw) is expected


def test_namespace_name_equality_and_hashing() -> None:
    first = NamespaceName("ci", "app")
    second = NamespaceName("ci", "app")

    assert first == second
    assert {first: 1}[second] == 1
    assert str(first) == "ci/app"
    assert NamespaceName.of(WatchedResource(namespace="ci", name="app")) == first


def test_resource_version_property_parses_integer() -> None:
    assert WatchedResource(namespace="ci", name="a", resource_version="12").version == 12
    assert WatchedResource(namespace="ci", name="a", resource_version="x1").version is None


def test_job_replace_configuration_bumps_timestamp() -> None:
    job = Job(name="app", config_document="{}")
    before = job.updated_at

    job.replace_configuration('{"a": 1}')

    assert job.configuration() == {"a": 1}
    assert job.updated_at >= before
