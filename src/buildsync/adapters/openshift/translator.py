"""Translate OpenShift payloads into domain resources."""

from __future__ import annotations

from typing import TYPE_CHECKING

from buildsync.domain.model import (
    JENKINS_PIPELINE_STRATEGY,
    BuildStrategy,
    GitSource,
    ResourceListing,
    WatchAction,
    WatchedResource,
    WatchEvent,
)

from .schema import BuildConfigListPayload, BuildConfigPayload, WatchEventPayload

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .schema import BuildSourcePayload, BuildStrategyPayload


def parse_build_config(payload: BuildConfigPayload | Mapping[str, object]) -> WatchedResource:
    """Build a ``WatchedResource`` from a raw or validated BuildConfig payload."""

    model = (
        payload
        if isinstance(payload, BuildConfigPayload)
        else BuildConfigPayload.model_validate(payload)
    )
    metadata = model.metadata
    return WatchedResource(
        namespace=metadata.namespace,
        name=metadata.name,
        resource_version=metadata.resource_version,
        uid=metadata.uid,
        strategy=_translate_strategy(model.spec.strategy),
        source=_translate_source(model.spec.source),
        labels=dict(metadata.labels),
        annotations=dict(metadata.annotations),
    )


def parse_build_config_list(payload: Mapping[str, object]) -> ResourceListing:
    model = BuildConfigListPayload.model_validate(payload)
    return ResourceListing(
        items=tuple(parse_build_config(item) for item in model.items),
        resource_version=model.metadata.resource_version,
    )


def parse_watch_event(payload: WatchEventPayload) -> WatchEvent:
    return WatchEvent(
        action=WatchAction.parse(payload.type),
        resource=parse_build_config(payload.resource),
    )


def _translate_strategy(strategy: BuildStrategyPayload | None) -> BuildStrategy | None:
    if strategy is None:
        return None
    pipeline = strategy.jenkins_pipeline_strategy
    strategy_type = strategy.type
    # older API servers omit the type when the pipeline strategy is set
    if strategy_type is None and pipeline is not None:
        strategy_type = JENKINS_PIPELINE_STRATEGY
    if strategy_type is None:
        return None
    if pipeline is None:
        return BuildStrategy(type=strategy_type)
    return BuildStrategy(
        type=strategy_type,
        jenkinsfile=pipeline.jenkinsfile,
        jenkinsfile_path=pipeline.jenkinsfile_path,
        env={var.name: var.value for var in pipeline.env},
    )


def _translate_source(source: BuildSourcePayload | None) -> GitSource | None:
    if source is None or source.git is None:
        return None
    return GitSource(uri=source.git.uri, ref=source.git.ref, context_dir=source.context_dir)
