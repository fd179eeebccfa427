"""Port for the build configuration watch transport."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from buildsync.domain.model import ResourceListing, WatchEvent


@runtime_checkable
class WatchSource(Protocol):
    """List-then-watch access to build configurations in one namespace scope."""

    def list_resources(self) -> ResourceListing: ...

    def watch(self, resource_version: str | None = None) -> Iterator[WatchEvent]: ...
