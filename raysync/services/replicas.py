# raysync/services/replicas.py
from typing import Iterable, List, Union

from ..schemas.cluster import RayClusterSpec, WorkerGroupSpec
from .pods import POD_PENDING, POD_RUNNING, pod_items, pod_phase

WorkerGroups = Union[RayClusterSpec, Iterable[WorkerGroupSpec]]


def _groups(worker_groups: WorkerGroups) -> List[WorkerGroupSpec]:
    if isinstance(worker_groups, RayClusterSpec):
        return worker_groups.worker_group_specs
    return list(worker_groups or [])


def _sum_field(worker_groups: WorkerGroups, field: str) -> int:
    # unset counts contribute 0
    return sum(getattr(g, field) or 0 for g in _groups(worker_groups))


def calculate_desired_replicas(worker_groups: WorkerGroups) -> int:
    """Desired worker replicas at the cluster level."""
    return _sum_field(worker_groups, "replicas")


def calculate_min_replicas(worker_groups: WorkerGroups) -> int:
    return _sum_field(worker_groups, "min_replicas")


def calculate_max_replicas(worker_groups: WorkerGroups) -> int:
    return _sum_field(worker_groups, "max_replicas")


def calculate_available_replicas(pods) -> int:
    """Pods that are Pending or Running; Failed/Succeeded/Unknown are not counted."""
    return sum(1 for p in pod_items(pods) if pod_phase(p) in (POD_PENDING, POD_RUNNING))
