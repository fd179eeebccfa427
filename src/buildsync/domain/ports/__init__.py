"""Domain port definitions for adapters."""

from __future__ import annotations

from .job_store import JobChangeObserver, JobStore
from .mapping import JobMapper
from .watching import WatchSource

__all__ = [
    "JobChangeObserver",
    "JobMapper",
    "JobStore",
    "WatchSource",
]
