from kubernetes import client

from raysync.schemas.cluster import WorkerGroupSpec
from raysync.services.comparison import compare_json_struct


def test_field_order_irrelevant():
    assert compare_json_struct({"a": 1, "b": 2}, {"b": 2, "a": 1})


def test_int_and_float_with_same_value_are_equal():
    assert compare_json_struct({"a": 1}, {"a": 1.0})


def test_different_values_are_not_equal():
    assert not compare_json_struct({"a": 1}, {"a": 2})
    assert not compare_json_struct([1, 2], [2, 1])


def test_typed_model_equals_plain_dict():
    container = client.V1Container(name="ray-head", image="rayproject/ray:2.0.0")
    assert compare_json_struct(container, {"name": "ray-head", "image": "rayproject/ray:2.0.0"})


def test_unset_fields_do_not_matter():
    a = client.V1ObjectMeta(name="rc", labels={"ray.io/node-type": "head"})
    b = client.V1ObjectMeta(name="rc", labels={"ray.io/node-type": "head"}, annotations=None)
    assert compare_json_struct(a, b)


def test_pydantic_model_compared_by_alias():
    group = WorkerGroupSpec(group_name="small", replicas=2)
    assert compare_json_struct(group, {"groupName": "small", "replicas": 2})


def test_unserializable_value_is_not_equal():
    assert not compare_json_struct({"a": object()}, {"a": 1})


def test_bool_is_not_equal_to_number():
    assert not compare_json_struct({"a": True}, {"a": 1})
    assert not compare_json_struct({"a": 0}, {"a": False})
    assert not compare_json_struct([{"enabled": True}], [{"enabled": 1.0}])
    assert compare_json_struct({"a": [True, 1]}, {"a": [True, 1.0]})


def test_self_referencing_value_is_not_equal():
    a = []
    a.append(a)
    assert not compare_json_struct(a, [1])
    assert not compare_json_struct([1], a)
