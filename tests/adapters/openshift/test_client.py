from __future__ import annotations

import json
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from buildsync.adapters.openshift import OpenShiftWatchSource, build_config_path
from buildsync.config import WatchConfig
from buildsync.domain.errors import WatchError
from buildsync.domain.model import WatchAction

CONFIG = WatchConfig(
    namespace="ci",
    default_namespace="ci",
    api_url="https://api.example.com:6443",
    token="secret-token",
)


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[WatchConfig], httpx.Client]:
    def factory(config: WatchConfig) -> httpx.Client:
        return httpx.Client(
            base_url=config.api_url,
            headers={"Authorization": f"Bearer {config.token}"},
            transport=httpx.MockTransport(handler),
        )

    return factory


def _lines(*events: object) -> bytes:
    return "\n".join(
        event if isinstance(event, str) else json.dumps(event) for event in events
    ).encode()


def test_list_resources_parses_items(build_config_payload: dict[str, object]) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "kind": "BuildConfigList",
                "metadata": {"resourceVersion": "2000"},
                "items": [build_config_payload],
            },
        )

    source = OpenShiftWatchSource(config=CONFIG, client_factory=_make_client_factory(handler))

    listing = source.list_resources()

    assert listing.resource_version == "2000"
    assert [item.name for item in listing.items] == ["app"]
    assert requests[0].url.path == build_config_path("ci")
    assert requests[0].headers["Authorization"] == "Bearer secret-token"


def test_list_resources_raises_watch_error_on_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            403,
            json={"kind": "Status", "code": 403, "message": "buildconfigs is forbidden"},
        )

    source = OpenShiftWatchSource(config=CONFIG, client_factory=_make_client_factory(handler))

    with pytest.raises(WatchError) as exc:
        source.list_resources()

    assert exc.value.code == 403
    assert "forbidden" in str(exc.value)


def test_list_resources_rejects_unexpected_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"not json")

    source = OpenShiftWatchSource(config=CONFIG, client_factory=_make_client_factory(handler))

    with pytest.raises(WatchError):
        source.list_resources()


def test_watch_yields_events_and_skips_noise(
    build_config_payload: dict[str, object],
    docker_build_config_payload: dict[str, object],
) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        body = _lines(
            {"type": "ADDED", "object": build_config_payload},
            "",
            "{broken",
            {"type": "BOOKMARK", "object": {"metadata": {"resourceVersion": "2100"}}},
            {"type": "MODIFIED", "object": docker_build_config_payload},
            {"type": "DELETED", "object": build_config_payload},
        )
        return httpx.Response(200, content=body)

    source = OpenShiftWatchSource(config=CONFIG, client_factory=_make_client_factory(handler))

    events = list(source.watch("2000"))

    assert [event.action for event in events] == [
        WatchAction.ADDED,
        WatchAction.MODIFIED,
        WatchAction.DELETED,
    ]
    assert [event.resource.name for event in events] == ["app", "image", "app"]
    params = requests[0].url.params
    assert params["watch"] == "true"
    assert params["resourceVersion"] == "2000"


def test_watch_error_event_raises(build_config_payload: dict[str, object]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = _lines(
            {"type": "ADDED", "object": build_config_payload},
            {
                "type": "ERROR",
                "object": {"kind": "Status", "code": 410, "message": "too old resource version"},
            },
        )
        return httpx.Response(200, content=body)

    source = OpenShiftWatchSource(config=CONFIG, client_factory=_make_client_factory(handler))
    stream = source.watch("1")

    first = next(stream)
    assert first.action is WatchAction.ADDED
    with pytest.raises(WatchError) as exc:
        next(stream)

    assert exc.value.code == 410


def test_watch_http_failure_raises_watch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    source = OpenShiftWatchSource(config=CONFIG, client_factory=_make_client_factory(handler))

    with pytest.raises(WatchError):
        list(source.watch())


def test_watch_error_event_with_unreadable_status_raises_watch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = _lines({"type": "ERROR", "object": {"kind": "Status", "code": "Gone"}})
        return httpx.Response(200, content=body)

    source = OpenShiftWatchSource(config=CONFIG, client_factory=_make_client_factory(handler))

    with pytest.raises(WatchError) as exc:
        list(source.watch("1"))

    assert exc.value.code is None
