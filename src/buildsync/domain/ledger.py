"""In-memory record of the last processed resource version per key."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from buildsync.domain.model import NamespaceName


class VersionLedger:
    """Maps a ``NamespaceName`` to the last resource version that was processed.

    A key that is present with a ``None`` value was processed without a comparable
    version; that is different from a key that was never seen. The ledger is not
    thread-safe: callers hold the reconciler lock across read, decision and write.
    """

    __slots__ = ("_versions",)

    def __init__(self) -> None:
        self._versions: dict[NamespaceName, int | None] = {}

    def get(self, key: NamespaceName) -> int | None:
        return self._versions.get(key)

    def put(self, key: NamespaceName, version: int | None) -> None:
        self._versions[key] = version

    def remove(self, key: NamespaceName) -> None:
        self._versions.pop(key, None)

    def snapshot(self) -> dict[NamespaceName, int | None]:
        return dict(self._versions)

    def __contains__(self, key: object) -> bool:
        return key in self._versions

    def __len__(self) -> int:
        return len(self._versions)

    def __repr__(self) -> str:
        return f"VersionLedger({len(self._versions)} entries)"
