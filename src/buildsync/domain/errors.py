"""Domain exception hierarchy."""

from __future__ import annotations


class BuildSyncError(RuntimeError):
    """Base class for errors raised by buildsync components."""


class JobStoreError(BuildSyncError):
    """Raised when the job store fails to look up, write or delete a job."""

    def __init__(self, message: str, *, job_name: str | None = None) -> None:
        super().__init__(message)
        self.job_name = job_name


class JobNotFoundError(JobStoreError):
    """Raised when updating or deleting a job that no longer exists."""


class JobAlreadyExistsError(JobStoreError):
    """Raised when creating a job whose name is already taken."""


class WatchError(BuildSyncError):
    """Raised when the watch transport returns an unusable response."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
