"""Pure decision helpers used by the reconciler."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from buildsync.domain.ledger import VersionLedger
    from buildsync.domain.model import NamespaceName, WatchedResource

log = getLogger(__name__)


def parse_resource_version(text: str | None) -> int | None:
    """Return the integer form of a resource version, or ``None`` when not comparable."""

    if text is None:
        return None
    stripped = text.strip()
    if not stripped:
        return None
    try:
        return int(stripped)
    except ValueError:
        log.debug("Resource version %r is not numeric; treating it as unversioned", text)
        return None


def should_process(
    key: NamespaceName,
    incoming_version: int | None,
    ledger: VersionLedger,
) -> bool:
    """Decide whether a notification is newer than the last one processed for ``key``.

    A key that was never processed is always accepted. Otherwise the incoming
    version must be present and strictly greater than the recorded one, so
    redelivered and out-of-order notifications are skipped. A recorded ``None``
    gives way to any concrete version.
    """

    if key not in ledger:
        return True
    if incoming_version is None:
        return False
    previous = ledger.get(key)
    return previous is None or incoming_version > previous


def derive_job_name(resource: WatchedResource, default_namespace: str) -> str:
    """Name of the job for ``resource``; namespaced unless it lives in the default namespace."""

    namespace = resource.namespace
    if not namespace or namespace == default_namespace:
        return resource.name
    return f"{namespace}-{resource.name}"


def qualifies(resource: WatchedResource) -> bool:
    """Whether ``resource`` describes a pipeline build that should have a job."""

    return resource.strategy is not None and resource.strategy.is_pipeline
