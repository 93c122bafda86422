# raysync/services/serve_config.py
import logging
from typing import Any, Dict, Iterable, List, Optional

import yaml

from ..schemas.serve import (
    RayActorOptionsWire,
    ServeConfigSpec,
    ServeConfigWire,
    ServeDeploymentGraphSpec,
    ServingClusterDeployments,
)

log = logging.getLogger(__name__)


def decode_embedded_config(text: Optional[str], *, field: str = "config") -> Dict[str, Any]:
    """
    Parse a YAML (or JSON) blob from the custom resource into a mapping.

    Never raises: empty text, malformed text and documents that are not a
    mapping all come back as {} so one bad field does not block a whole push.
    """
    if not text or not text.strip():
        return {}
    try:
        value = yaml.safe_load(text)
    except yaml.YAMLError as e:
        log.warning("ignoring malformed %s: %s", field, e)
        return {}
    if value is None:
        return {}
    if not isinstance(value, dict):
        log.warning("ignoring %s: expected a mapping, got %s", field, type(value).__name__)
        return {}
    # wire field is a JSON object: keys must be strings
    return {str(k): v for k, v in value.items()}


def _convert_one(spec: ServeConfigSpec) -> ServeConfigWire:
    opts = spec.ray_actor_options
    where = f"deployment {spec.name}"
    return ServeConfigWire(
        name=spec.name,
        num_replicas=spec.num_replicas,
        route_prefix=spec.route_prefix,
        max_concurrent_queries=spec.max_concurrent_queries,
        user_config=decode_embedded_config(spec.user_config, field=f"{where} userConfig"),
        autoscaling_config=decode_embedded_config(spec.autoscaling_config, field=f"{where} autoscalingConfig"),
        graceful_shutdown_wait_loop_s=spec.graceful_shutdown_wait_loop_s,
        graceful_shutdown_timeout_s=spec.graceful_shutdown_timeout_s,
        health_check_period_s=spec.health_check_period_s,
        health_check_timeout_s=spec.health_check_timeout_s,
        ray_actor_options=RayActorOptionsWire(
            runtime_env=decode_embedded_config(opts.runtime_env, field=f"{where} rayActorOptions.runtimeEnv"),
            num_cpus=opts.num_cpus,
            num_gpus=opts.num_gpus,
            memory=opts.memory,
            object_store_memory=opts.object_store_memory,
            resources=decode_embedded_config(opts.resources, field=f"{where} rayActorOptions.resources"),
            accelerator_type=opts.accelerator_type,
        ),
    )


def convert_serve_config(specs: Iterable[ServeConfigSpec]) -> List[ServeConfigWire]:
    """Desired ServeConfigSpecs -> dashboard wire objects, order preserved."""
    return [_convert_one(s) for s in specs or []]


def build_serving_cluster_deployments(graph: ServeDeploymentGraphSpec) -> ServingClusterDeployments:
    return ServingClusterDeployments(
        import_path=graph.import_path,
        runtime_env=decode_embedded_config(graph.runtime_env, field="runtimeEnv"),
        deployments=convert_serve_config(graph.serve_config_specs),
    )
