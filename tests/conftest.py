from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from kubernetes import client


def _make_container(
    name: str = "ray-head",
    image: str = "rayproject/ray:2.0.0",
    requests: Optional[Dict[str, str]] = None,
    limits: Optional[Dict[str, str]] = None,
) -> client.V1Container:
    return client.V1Container(
        name=name,
        image=image,
        resources=client.V1ResourceRequirements(requests=requests, limits=limits),
    )


def _make_pod(
    containers: List[client.V1Container],
    phase: str = "Running",
    name: str = "raycluster-head-abcde",
    deleting: bool = False,
) -> client.V1Pod:
    return client.V1Pod(
        metadata=client.V1ObjectMeta(
            name=name,
            deletion_timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc) if deleting else None,
        ),
        spec=client.V1PodSpec(containers=containers),
        status=client.V1PodStatus(phase=phase),
    )


def _make_template(containers: List[client.V1Container]) -> client.V1PodTemplateSpec:
    return client.V1PodTemplateSpec(spec=client.V1PodSpec(containers=containers))


@pytest.fixture
def head_resources():
    return {"cpu": "1", "memory": "2Gi"}


@pytest.fixture
def make_container():
    return _make_container


@pytest.fixture
def make_pod():
    return _make_pod


@pytest.fixture
def make_template():
    return _make_template
