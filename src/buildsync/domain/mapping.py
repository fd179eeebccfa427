"""Default mapping from build configurations to pipeline job definitions."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from buildsync.domain import decisions
from buildsync.domain.model import JobDefinition

if TYPE_CHECKING:
    from buildsync.domain.model import WatchedResource

log = getLogger(__name__)

DESCRIPTION_ANNOTATION = "openshift.io/description"


class BuildConfigJobMapper:
    """Maps ``JenkinsPipeline`` build configurations onto job definitions.

    A pipeline carries either an inline Jenkinsfile or a git source plus a script
    path. A pipeline with neither cannot be turned into a job and maps to ``None``.
    """

    def qualifies(self, resource: WatchedResource) -> bool:
        return decisions.qualifies(resource)

    def derive_job_name(self, resource: WatchedResource, default_namespace: str) -> str:
        return decisions.derive_job_name(resource, default_namespace)

    def map_to_job_definition(
        self,
        resource: WatchedResource,
        default_namespace: str,
    ) -> JobDefinition | None:
        if not self.qualifies(resource) or resource.strategy is None:
            return None

        strategy = resource.strategy
        source = resource.source
        if strategy.jenkinsfile is None and (source is None or not source.uri):
            log.warning(
                "BuildConfig %s has neither an inline Jenkinsfile nor a git source",
                resource.key,
            )
            return None

        jenkinsfile_path = strategy.jenkinsfile_path
        if jenkinsfile_path and source is not None and source.context_dir:
            jenkinsfile_path = f"{source.context_dir.rstrip('/')}/{jenkinsfile_path}"

        return JobDefinition(
            name=self.derive_job_name(resource, default_namespace),
            description=resource.annotations.get(
                DESCRIPTION_ANNOTATION, f"Pipeline for BuildConfig {resource.key}"
            ),
            source_key=resource.key,
            source_version=resource.resource_version,
            source_uid=resource.uid,
            jenkinsfile=strategy.jenkinsfile,
            jenkinsfile_path=jenkinsfile_path,
            git_uri=source.uri if source is not None else None,
            git_ref=source.ref if source is not None else None,
            env=dict(strategy.env),
        )


if TYPE_CHECKING:
    from buildsync.domain.ports.mapping import JobMapper

    _mapper_check: JobMapper = BuildConfigJobMapper()
