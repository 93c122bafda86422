# raysync/services/comparison.py
import json
import logging
from typing import Any

from kubernetes import client
from pydantic import BaseModel

log = logging.getLogger(__name__)

_api_client = client.ApiClient()


def _to_plain(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    # handles V1Pod & co. plus nested lists/dicts of them
    return _api_client.sanitize_for_serialization(obj)


def _deep_equal(a: Any, b: Any) -> bool:
    # json true and 1 are different values; Python says True == 1
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_deep_equal(x, y) for x, y in zip(a, b))
    return a == b


def compare_json_struct(obj_a: Any, obj_b: Any) -> bool:
    """
    Compare two values through their JSON form rather than their Python types.

    A typed Kubernetes model and a plain dict with the same fields are equal
    here, and so are two models that only differ in unset (None) fields.
    Returns False if either side cannot be serialized.
    """
    try:
        a = json.loads(json.dumps(_to_plain(obj_a)))
        b = json.loads(json.dumps(_to_plain(obj_b)))
    except (AttributeError, RecursionError, TypeError, ValueError) as e:
        log.debug("compare_json_struct: serialization failed: %s", e)
        return False
    return _deep_equal(a, b)
