# raysync/services/naming.py
import logging
import random
import unicodedata
from typing import Iterable, Optional

from kubernetes import client

from ..core.config import settings

log = logging.getLogger(__name__)

# 63 - ("-worker-" or "-head-") - 5 generated chars
MAX_RESOURCE_NAME_LENGTH = 50
MAX_LABEL_VALUE_LENGTH = 63

RAY_CLUSTER_SUFFIX = "-raycluster-"
HEAD_NODE = "head"
DASHBOARD_NAME = "dashboard"

# same alphabet as k8s.io/apimachinery rand.String (no vowels, no confusables)
_RAND_ALPHANUMS = "bcdfghjklmnpqrstvwxz2456789"


def _is_punct(ch: str) -> bool:
    return unicodedata.category(ch).startswith("P")


def _shorten(s: str, max_len: int, what: str) -> str:
    if len(s) > max_len:
        offset = len(s) - max_len
        log.info("%s is too long: len = %d, shortening it by offset = %d", what, len(s), offset)
        s = s[offset:]
    return s


def check_name(s: str) -> str:
    """
    Make a generated resource name safe: at most 50 chars (the caller appends
    a role suffix and a random disambiguator), not starting with a digit or
    punctuation. Truncation keeps the tail of the name.
    """
    if not s:
        raise ValueError("name must not be empty")
    s = _shorten(s, MAX_RESOURCE_NAME_LENGTH, "pod name")

    # cannot start with a numeric value
    if s[0].isdecimal():
        s = "r" + s[1:]

    # cannot start with a punctuation
    if _is_punct(s[0]):
        s = "r" + s[1:]

    return s


def check_label(s: str) -> str:
    """Label values: at most 63 chars, no leading punctuation."""
    if not s:
        raise ValueError("label value must not be empty")
    s = _shorten(s, MAX_LABEL_VALUE_LENGTH, "label value")

    if _is_punct(s[0]):
        s = "r" + s[1:]

    return s


def before(value: str, a: str) -> str:
    pos = value.find(a)
    if pos == -1:
        return ""
    return value[:pos]


def contains(values: Iterable[str], term: str) -> bool:
    # linear scan: no sortedness precondition on the input
    return any(v == term for v in values)


def get_namespace(metadata: Optional[client.V1ObjectMeta]) -> str:
    if metadata is None or not metadata.namespace:
        return settings.default_namespace
    return metadata.namespace


def generate_service_name(cluster_name: str) -> str:
    return f"{cluster_name}-{HEAD_NODE}-svc"


def generate_dashboard_service_name(cluster_name: str) -> str:
    return f"{cluster_name}-{DASHBOARD_NAME}-svc"


def generate_dashboard_agent_label(cluster_name: str) -> str:
    return f"{cluster_name}-{DASHBOARD_NAME}"


def generate_ingress_name(cluster_name: str) -> str:
    return f"{cluster_name}-{HEAD_NODE}-ingress"


def generate_ray_cluster_name(service_name: str, *, rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    suffix = "".join(rng.choices(_RAND_ALPHANUMS, k=5))
    return f"{service_name}{RAY_CLUSTER_SUFFIX}{suffix}"


def generate_identifier(cluster_name: str, node_type: str) -> str:
    return f"{cluster_name}-{node_type}"
