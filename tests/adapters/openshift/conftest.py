from __future__ import annotations

import pytest


@pytest.fixture
def build_config_payload() -> dict[str, object]:
    return {
        "kind": "BuildConfig",
        "apiVersion": "build.openshift.io/v1",
        "metadata": {
            "name": "app",
            "namespace": "ci",
            "resourceVersion": "1042",
            "uid": "7d2c0f9e",
            "labels": {"app": "app"},
            "annotations": None,
        },
        "spec": {
            "source": {
                "type": "Git",
                "git": {"uri": "https://git.example.com/app.git", "ref": "main"},
                "contextDir": "",
            },
            "strategy": {
                "type": "JenkinsPipeline",
                "jenkinsPipelineStrategy": {
                    "jenkinsfilePath": "Jenkinsfile",
                    "env": [{"name": "STAGE", "value": "dev"}, {"name": "EMPTY"}],
                },
            },
        },
    }


@pytest.fixture
def docker_build_config_payload() -> dict[str, object]:
    return {
        "kind": "BuildConfig",
        "metadata": {"name": "image", "namespace": "ci", "resourceVersion": "1043"},
        "spec": {"strategy": {"type": "Docker", "dockerStrategy": {}}},
    }
