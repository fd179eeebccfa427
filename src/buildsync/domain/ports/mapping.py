"""Port for turning watched resources into job definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from buildsync.domain.model import JobDefinition, WatchedResource


@runtime_checkable
class JobMapper(Protocol):
    def qualifies(self, resource: WatchedResource) -> bool: ...

    def derive_job_name(self, resource: WatchedResource, default_namespace: str) -> str: ...

    def map_to_job_definition(
        self,
        resource: WatchedResource,
        default_namespace: str,
    ) -> JobDefinition | None: ...
