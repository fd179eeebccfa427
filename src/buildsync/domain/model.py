"""Domain types for watched build configurations and their derived jobs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from buildsync.domain.decisions import parse_resource_version

if TYPE_CHECKING:
    from collections.abc import Mapping

JENKINS_PIPELINE_STRATEGY = "JenkinsPipeline"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class WatchAction(StrEnum):
    """Closed set of watch notification kinds understood by the reconciler."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, raw: object) -> WatchAction:
        """Map a raw action string onto a member; anything unrecognised is ``UNKNOWN``."""

        if not isinstance(raw, str):
            return cls.UNKNOWN
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return cls.UNKNOWN


class SyncOutcome(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    ABSENT = "absent"
    STALE = "stale"
    NOT_QUALIFYING = "not_qualifying"
    UNMAPPED = "unmapped"
    IGNORED = "ignored"
    FAILED = "failed"


class JobChange(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True, order=True)
class NamespaceName:
    """Composite ``(namespace, name)`` key shared by resources and their jobs."""

    namespace: str
    name: str

    @classmethod
    def of(cls, resource: WatchedResource) -> NamespaceName:
        return cls(namespace=resource.namespace, name=resource.name)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True, slots=True)
class GitSource:
    uri: str
    ref: str | None = None
    context_dir: str | None = None


@dataclass(frozen=True, slots=True)
class BuildStrategy:
    type: str
    jenkinsfile: str | None = None
    jenkinsfile_path: str | None = None
    env: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_pipeline(self) -> bool:
        return self.type == JENKINS_PIPELINE_STRATEGY


@dataclass(frozen=True, slots=True)
class WatchedResource:
    """A build configuration as observed on the watch stream."""

    namespace: str
    name: str
    resource_version: str | None = None
    strategy: BuildStrategy | None = None
    source: GitSource | None = None
    uid: str | None = None
    labels: Mapping[str, str] = field(default_factory=dict)
    annotations: Mapping[str, str] = field(default_factory=dict)

    @property
    def key(self) -> NamespaceName:
        return NamespaceName.of(self)

    @property
    def version(self) -> int | None:
        return parse_resource_version(self.resource_version)


@dataclass(frozen=True, slots=True)
class WatchEvent:
    action: WatchAction
    resource: WatchedResource


@dataclass(frozen=True, slots=True)
class ResourceListing:
    """Result of the bootstrap list call."""

    items: tuple[WatchedResource, ...]
    resource_version: str | None = None


@dataclass(frozen=True, slots=True)
class JobDefinition:
    """Target job configuration derived from a watched resource."""

    name: str
    description: str
    source_key: NamespaceName
    source_version: str | None = None
    source_uid: str | None = None
    jenkinsfile: str | None = None
    jenkinsfile_path: str | None = None
    git_uri: str | None = None
    git_ref: str | None = None
    env: Mapping[str, str] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "source": {
                "namespace": self.source_key.namespace,
                "name": self.source_key.name,
                "resourceVersion": self.source_version,
                "uid": self.source_uid,
            },
            "env": dict(self.env),
        }
        if self.jenkinsfile is not None:
            payload["definition"] = {"type": "inline", "script": self.jenkinsfile}
        else:
            payload["definition"] = {
                "type": "scm",
                "url": self.git_uri,
                "ref": self.git_ref,
                "scriptPath": self.jenkinsfile_path or "Jenkinsfile",
            }
        return payload

    def to_document(self) -> str:
        return json.dumps(self.to_payload(), sort_keys=True, separators=(",", ":"))


@dataclass(eq=False)
class Job:
    """A job held by the target job store; only ever referenced by name."""

    name: str
    config_document: str
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def replace_configuration(self, document: str) -> None:
        self.config_document = document
        self.updated_at = _utcnow()

    def configuration(self) -> dict[str, Any]:
        return json.loads(self.config_document)
