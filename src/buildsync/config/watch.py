"""Watch configuration values for the OpenShift API."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .env import env_flag, env_float, optional_env_var, require_env_vars

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class WatchConfig:
    """Holds the namespace scope and API connection settings for one watcher."""

    namespace: str
    default_namespace: str
    api_url: str
    token: str | None = None
    verify_tls: bool = True
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def with_overrides(
        self,
        *,
        namespace: str | None = None,
        default_namespace: str | None = None,
    ) -> WatchConfig:
        updated = self
        if namespace:
            updated = replace(updated, namespace=namespace)
            if not default_namespace and self.default_namespace == self.namespace:
                updated = replace(updated, default_namespace=namespace)
        if default_namespace:
            updated = replace(updated, default_namespace=default_namespace)
        return updated


def get_watch_config() -> WatchConfig:
    values = require_env_vars(("BUILDSYNC_NAMESPACE", "KUBERNETES_API_URL"))
    namespace = values["BUILDSYNC_NAMESPACE"]
    return WatchConfig(
        namespace=namespace,
        default_namespace=optional_env_var("BUILDSYNC_DEFAULT_NAMESPACE") or namespace,
        api_url=values["KUBERNETES_API_URL"].rstrip("/"),
        token=optional_env_var("KUBERNETES_TOKEN"),
        verify_tls=env_flag("KUBERNETES_VERIFY_TLS", default=True),
        timeout_seconds=env_float("KUBERNETES_TIMEOUT_SECONDS", default=DEFAULT_TIMEOUT_SECONDS),
    )
