import pytest
from kubernetes import client

from raysync.core.exceptions import ContainerNotFoundError
from raysync.services.pods import (
    check_all_pods_running,
    check_pod_drift,
    filter_container_by_name,
    find_ray_container_index,
    get_head_group_service_account_name,
    is_created,
    pod_not_matching_template,
)


def test_identical_running_pod_has_not_drifted(head_resources, make_container, make_pod, make_template):
    template = make_template([make_container(requests=head_resources, limits=head_resources)])
    pod = make_pod([make_container(requests=head_resources, limits=head_resources)])

    check = check_pod_drift(pod, template)
    assert not check.drifted
    assert check.reason is None
    assert pod_not_matching_template(pod, template) is False


def test_quantities_compared_by_value(make_container, make_pod, make_template):
    template = make_template([make_container(requests={"cpu": "1", "memory": "1Gi"})])
    pod = make_pod([make_container(requests={"cpu": "1000m", "memory": "1024Mi"})])
    assert not pod_not_matching_template(pod, template)


def test_image_change_is_drift(head_resources, make_container, make_pod, make_template):
    template = make_template([make_container(image="rayproject/ray:2.1.0", limits=head_resources)])
    pod = make_pod([make_container(image="rayproject/ray:2.0.0", limits=head_resources)])

    check = check_pod_drift(pod, template)
    assert check.drifted
    assert "image" in check.reason
    assert pod_not_matching_template(pod, template)


def test_extra_limit_entry_is_drift(make_container, make_pod, make_template):
    template = make_template([make_container(limits={"cpu": "1"})])
    pod = make_pod([make_container(limits={"cpu": "1", "memory": "2Gi"})])
    assert pod_not_matching_template(pod, template)


def test_quantity_change_is_drift(make_container, make_pod, make_template):
    template = make_template([make_container(requests={"cpu": "2"})])
    pod = make_pod([make_container(requests={"cpu": "1"})])

    check = check_pod_drift(pod, template)
    assert check.drifted
    assert "request cpu" in check.reason


def test_same_count_different_resource_name_is_drift(make_container, make_pod, make_template):
    template = make_template([make_container(limits={"cpu": "1"})])
    pod = make_pod([make_container(limits={"memory": "1"})])
    assert "no limit for cpu" in check_pod_drift(pod, template).reason


def test_request_and_limit_not_mixed_up(make_container, make_pod, make_template):
    template = make_template([make_container(requests={"cpu": "1"}, limits={"cpu": "2"})])
    pod = make_pod([make_container(requests={"cpu": "2"}, limits={"cpu": "1"})])
    assert pod_not_matching_template(pod, template)


def test_container_count_change_is_drift(make_container, make_pod, make_template):
    template = make_template([make_container(name="ray-head"), make_container(name="sidecar")])
    pod = make_pod([make_container(name="ray-head")])
    assert "count" in check_pod_drift(pod, template).reason


def test_renamed_container_is_drift(make_container, make_pod, make_template):
    template = make_template([make_container(name="ray-head")])
    pod = make_pod([make_container(name="ray-worker")])
    assert "ray-head not found" in check_pod_drift(pod, template).reason


def test_containers_matched_by_name_not_position(make_container, make_pod, make_template):
    template = make_template([make_container(name="a", image="img-a"), make_container(name="b", image="img-b")])
    pod = make_pod([make_container(name="b", image="img-b"), make_container(name="a", image="img-a")])
    assert not pod_not_matching_template(pod, template)


@pytest.mark.parametrize("phase", ["Pending", "Succeeded", "Failed", "Unknown", None])
def test_pod_not_running_is_never_judged(phase, make_container, make_pod, make_template):
    template = make_template([make_container(image="new")])
    pod = make_pod([make_container(image="old")], phase=phase)
    assert not pod_not_matching_template(pod, template)


def test_terminating_pod_is_never_judged(make_container, make_pod, make_template):
    template = make_template([make_container(image="new")])
    pod = make_pod([make_container(image="old")], deleting=True)
    assert not pod_not_matching_template(pod, template)


def test_filter_container_by_name(make_container):
    containers = [make_container(name="ray-head"), make_container(name="fluentbit")]
    assert filter_container_by_name(containers, "fluentbit").name == "fluentbit"

    with pytest.raises(ContainerNotFoundError) as exc:
        filter_container_by_name(containers, "missing")
    assert exc.value.container_name == "missing"
    assert "missing" in str(exc.value)


def test_is_created_and_all_running(make_container, make_pod):
    running = make_pod([make_container()])
    fresh = make_pod([make_container()], phase=None)
    assert is_created(running)
    assert not is_created(fresh)
    assert check_all_pods_running(client.V1PodList(items=[running, running]))
    assert not check_all_pods_running([running, fresh])
    assert check_all_pods_running([])


def test_find_ray_container_index_warns_on_sidecars(caplog, make_container):
    spec = client.V1PodSpec(containers=[make_container(name="ray"), make_container(name="sidecar")])
    with caplog.at_level("WARNING"):
        assert find_ray_container_index(spec) == 0
    assert "multiple containers" in caplog.text


def test_head_group_service_account_name(make_container, make_template):
    template = make_template([make_container()])
    assert get_head_group_service_account_name("rc", template) == "rc"

    template.spec.service_account_name = "ray-sa"
    assert get_head_group_service_account_name("rc", template) == "ray-sa"
