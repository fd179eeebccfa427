"""Reconciliation domain: ledger, guard, decisions and dispatch."""

from __future__ import annotations

from .errors import (
    BuildSyncError,
    JobAlreadyExistsError,
    JobNotFoundError,
    JobStoreError,
    WatchError,
)
from .guard import ReentrancyGuard
from .ledger import VersionLedger
from .listeners import JobChangeListener
from .mapping import BuildConfigJobMapper
from .model import (
    BuildStrategy,
    GitSource,
    Job,
    JobChange,
    JobDefinition,
    NamespaceName,
    ResourceListing,
    SyncOutcome,
    WatchAction,
    WatchedResource,
    WatchEvent,
)
from .reconciler import BootstrapResult, Reconciler

__all__ = [
    "BootstrapResult",
    "BuildConfigJobMapper",
    "BuildStrategy",
    "BuildSyncError",
    "GitSource",
    "Job",
    "JobAlreadyExistsError",
    "JobChange",
    "JobChangeListener",
    "JobDefinition",
    "JobNotFoundError",
    "JobStoreError",
    "NamespaceName",
    "Reconciler",
    "ReentrancyGuard",
    "ResourceListing",
    "SyncOutcome",
    "VersionLedger",
    "WatchAction",
    "WatchError",
    "WatchEvent",
    "WatchedResource",
]
