"""HTTP access to the OpenShift BuildConfig API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from buildsync.config.watch import WatchConfig, get_watch_config
from buildsync.domain.errors import WatchError
from buildsync.domain.model import WatchAction

from .schema import StatusPayload, WatchEventPayload
from .translator import parse_build_config_list, parse_watch_event

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from buildsync.domain.model import ResourceListing, WatchEvent

log = getLogger(__name__)

BUILD_CONFIG_API = "apis/build.openshift.io/v1"
ERROR_EVENT = "ERROR"


def build_config_path(namespace: str) -> str:
    return f"/{BUILD_CONFIG_API}/namespaces/{namespace}/buildconfigs"


def _default_client_factory(config: WatchConfig) -> httpx.Client:
    headers = {"Accept": "application/json"}
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    return httpx.Client(
        base_url=config.api_url,
        headers=headers,
        verify=config.verify_tls,
        timeout=config.timeout_seconds,
    )


@dataclass(slots=True)
class OpenShiftWatchSource:
    """List-then-watch of the BuildConfigs in one namespace.

    The watch holds a streaming request open and yields one event per line until
    the server closes the stream. Reconnecting is left to the caller.
    """

    config: WatchConfig = field(default_factory=get_watch_config)
    client_factory: Callable[[WatchConfig], httpx.Client] = field(
        default=_default_client_factory
    )

    def list_resources(self) -> ResourceListing:
        path = build_config_path(self.config.namespace)
        with self.client_factory(self.config) as client:
            try:
                response = client.get(path)
            except httpx.HTTPError as exc:
                raise WatchError(f"Listing BuildConfigs failed: {exc}") from exc
            self._raise_for_status(response)
            try:
                listing = parse_build_config_list(response.json())
            except (ValueError, ValidationError) as exc:
                raise WatchError(f"Unexpected BuildConfig list payload: {exc}") from exc
        log.info(
            "Listed %s BuildConfigs in namespace %s at resourceVersion %s",
            len(listing.items),
            self.config.namespace,
            listing.resource_version,
        )
        return listing

    def watch(self, resource_version: str | None = None) -> Iterator[WatchEvent]:
        path = build_config_path(self.config.namespace)
        params: dict[str, str] = {"watch": "true", "allowWatchBookmarks": "true"}
        if resource_version:
            params["resourceVersion"] = resource_version
        timeout = httpx.Timeout(self.config.timeout_seconds, read=None)

        with self.client_factory(self.config) as client:
            try:
                with client.stream("GET", path, params=params, timeout=timeout) as response:
                    if response.is_error:
                        response.read()
                    self._raise_for_status(response)
                    for line in response.iter_lines():
                        event = self._parse_line(line)
                        if event is not None:
                            yield event
            except httpx.HTTPError as exc:
                raise WatchError(f"Watching BuildConfigs failed: {exc}") from exc

    def _parse_line(self, line: str) -> WatchEvent | None:
        if not line.strip():
            return None
        try:
            payload = WatchEventPayload.model_validate(json.loads(line))
        except (ValueError, ValidationError):
            log.warning("Skipping malformed watch line: %.200s", line)
            return None

        if payload.type == ERROR_EVENT:
            try:
                status = StatusPayload.model_validate(payload.resource)
            except ValidationError as exc:
                raise WatchError("Watch returned an error") from exc
            raise WatchError(
                f"Watch returned an error: {status.message or status.reason}", code=status.code
            )
        if WatchAction.parse(payload.type) is WatchAction.UNKNOWN:
            log.debug("Skipping %s watch event", payload.type)
            return None
        try:
            return parse_watch_event(payload)
        except ValidationError:
            log.warning("Skipping %s event with an invalid BuildConfig", payload.type)
            return None

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if not response.is_error:
            return
        try:
            status: StatusPayload | None = StatusPayload.model_validate(response.json())
        except ValueError:
            status = None
        message = (status.message if status is not None else "") or response.reason_phrase
        log.error(f"OpenShift API error {response.status_code}: {message}")
        raise WatchError(message, code=response.status_code)


if TYPE_CHECKING:
    from buildsync.domain.ports.watching import WatchSource

    _source_check: WatchSource = OpenShiftWatchSource()
