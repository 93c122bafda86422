# raysync/services/pods.py
import logging
from typing import Dict, Iterable, List, Optional

from kubernetes import client
from kubernetes.utils import parse_quantity
from pydantic import BaseModel

from ..core.exceptions import ContainerNotFoundError

log = logging.getLogger(__name__)

POD_PENDING = "Pending"
POD_RUNNING = "Running"


class DriftCheck(BaseModel):
    drifted: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.drifted


_NO_DRIFT = DriftCheck(drifted=False)


def _drift(reason: str) -> DriftCheck:
    return DriftCheck(drifted=True, reason=reason)


def pod_items(pods) -> List[client.V1Pod]:
    # V1PodList or any iterable of V1Pod
    items = getattr(pods, "items", pods)
    return list(items or [])


def pod_phase(pod: client.V1Pod) -> str:
    return (pod.status.phase if pod.status else None) or ""


def _quantities_equal(q1, q2) -> bool:
    try:
        return parse_quantity(q1) == parse_quantity(q2)
    except ValueError:
        return str(q1) == str(q2)


def _resource_lists(container: client.V1Container):
    res = container.resources
    requests: Dict[str, str] = (res.requests if res else None) or {}
    limits: Dict[str, str] = (res.limits if res else None) or {}
    return requests, limits


def is_created(pod: client.V1Pod) -> bool:
    """True once the API server has assigned the pod a phase."""
    return pod_phase(pod) != ""


def check_all_pods_running(pods) -> bool:
    return all(pod_phase(p) == POD_RUNNING for p in pod_items(pods))


def filter_container_by_name(containers: Iterable[client.V1Container], name: str) -> client.V1Container:
    for container in containers or []:
        if container.name == name:
            return container
    raise ContainerNotFoundError(name)


def find_ray_container_index(spec: client.V1PodSpec) -> int:
    # TODO: look the Ray container up by name once sidecars are supported.
    if spec.containers and len(spec.containers) > 1:
        log.warning("Pod has multiple containers, we choose index=0 as Ray container")
    return 0


def get_head_group_service_account_name(cluster_name: str, head_template: client.V1PodTemplateSpec) -> str:
    spec = head_template.spec if head_template else None
    if spec is not None and spec.service_account_name:
        return spec.service_account_name
    return cluster_name


def check_pod_drift(pod: client.V1Pod, template: client.V1PodTemplateSpec) -> DriftCheck:
    """
    Decide whether a live pod no longer matches its desired template.

    Only running pods without a deletion timestamp are judged; anything
    mid-lifecycle is reported as not drifted. Containers are matched by name
    and compared on image and on request/limit quantities (by value, so
    "1000m" equals "1").
    """
    if pod_phase(pod) != POD_RUNNING:
        return _NO_DRIFT
    if pod.metadata is not None and pod.metadata.deletion_timestamp is not None:
        return _NO_DRIFT

    desired: List[client.V1Container] = (template.spec.containers if template.spec else None) or []
    observed: List[client.V1Container] = (pod.spec.containers if pod.spec else None) or []

    if len(desired) != len(observed):
        return _drift(f"container count differs: desired {len(desired)}, observed {len(observed)}")

    unmatched = {c.name: c for c in observed}
    for want in desired:
        have = unmatched.pop(want.name, None)
        if have is None:
            return _drift(f"container {want.name} not found in pod")

        if want.image != have.image:
            return _drift(f"container {want.name} image differs: {want.image} != {have.image}")

        want_req, want_lim = _resource_lists(want)
        have_req, have_lim = _resource_lists(have)
        if len(want_req) != len(have_req) or len(want_lim) != len(have_lim):
            return _drift(f"container {want.name} resource entries differ")

        for kind, want_list, have_list in (("request", want_req, have_req), ("limit", want_lim, have_lim)):
            for res_name, q_want in want_list.items():
                if res_name not in have_list:
                    return _drift(f"container {want.name} has no {kind} for {res_name}")
                if not _quantities_equal(q_want, have_list[res_name]):
                    return _drift(
                        f"container {want.name} {kind} {res_name} differs: {q_want} != {have_list[res_name]}"
                    )

    if unmatched:
        return _drift(f"unexpected containers in pod: {', '.join(sorted(unmatched))}")
    return _NO_DRIFT


def pod_not_matching_template(pod: client.V1Pod, template: client.V1PodTemplateSpec) -> bool:
    check = check_pod_drift(pod, template)
    if check.drifted:
        name = pod.metadata.name if pod.metadata else None
        log.info("pod %s drifted from template: %s", name, check.reason)
    return check.drifted
