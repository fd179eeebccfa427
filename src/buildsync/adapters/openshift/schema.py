"""Pydantic models describing the OpenShift BuildConfig API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class OpenShiftBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectMeta(OpenShiftBaseModel):
    name: str
    namespace: str = ""
    resource_version: str | None = Field(default=None, alias="resourceVersion")
    uid: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)

    _normalize_version = field_validator("resource_version", mode="before")(_blank_to_none)

    @field_validator("labels", "annotations", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return {} if value is None else value


class EnvVar(OpenShiftBaseModel):
    name: str
    value: str = ""


class JenkinsPipelineStrategy(OpenShiftBaseModel):
    jenkinsfile: str | None = None
    jenkinsfile_path: str | None = Field(default=None, alias="jenkinsfilePath")
    env: list[EnvVar] = Field(default_factory=list)

    _normalize_jenkinsfile = field_validator("jenkinsfile", "jenkinsfile_path", mode="before")(
        _blank_to_none
    )


class BuildStrategyPayload(OpenShiftBaseModel):
    type: str | None = None
    jenkins_pipeline_strategy: JenkinsPipelineStrategy | None = Field(
        default=None, alias="jenkinsPipelineStrategy"
    )


class GitBuildSource(OpenShiftBaseModel):
    uri: str
    ref: str | None = None

    _normalize_ref = field_validator("ref", mode="before")(_blank_to_none)


class BuildSourcePayload(OpenShiftBaseModel):
    type: str | None = None
    git: GitBuildSource | None = None
    context_dir: str | None = Field(default=None, alias="contextDir")

    _normalize_context = field_validator("context_dir", mode="before")(_blank_to_none)


class BuildConfigSpec(OpenShiftBaseModel):
    strategy: BuildStrategyPayload | None = None
    source: BuildSourcePayload | None = None


class BuildConfigPayload(OpenShiftBaseModel):
    kind: str = "BuildConfig"
    metadata: ObjectMeta
    spec: BuildConfigSpec = Field(default_factory=BuildConfigSpec)


class ListMeta(OpenShiftBaseModel):
    resource_version: str | None = Field(default=None, alias="resourceVersion")

    _normalize_version = field_validator("resource_version", mode="before")(_blank_to_none)


class BuildConfigListPayload(OpenShiftBaseModel):
    kind: str = "BuildConfigList"
    metadata: ListMeta = Field(default_factory=ListMeta)
    items: list[BuildConfigPayload] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class StatusPayload(OpenShiftBaseModel):
    """``Status`` object carried by ``ERROR`` watch events and failed API calls."""

    kind: str = "Status"
    code: int | None = None
    reason: str | None = None
    message: str = ""


class WatchEventPayload(OpenShiftBaseModel):
    type: str
    resource: dict[str, Any] = Field(alias="object")
