# raysync/schemas/serve.py
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional
from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel


# -------- Desired state (RayService CRD, camelCase) --------
# Blob fields hold YAML/JSON text as written in the custom resource.

class _CrdModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RayActorOptionSpec(_CrdModel):
    runtime_env: Optional[str] = None
    num_cpus: Optional[float] = None
    num_gpus: Optional[float] = None
    memory: Optional[int] = None
    object_store_memory: Optional[int] = None
    resources: Optional[str] = None
    accelerator_type: Optional[str] = None


class ServeConfigSpec(_CrdModel):
    name: str
    num_replicas: Optional[int] = Field(default=None, ge=0)
    route_prefix: Optional[str] = None
    max_concurrent_queries: Optional[int] = None
    user_config: Optional[str] = None
    autoscaling_config: Optional[str] = None
    graceful_shutdown_wait_loop_s: Optional[int] = None
    graceful_shutdown_timeout_s: Optional[int] = None
    health_check_period_s: Optional[int] = None
    health_check_timeout_s: Optional[int] = None
    ray_actor_options: RayActorOptionSpec = Field(default_factory=RayActorOptionSpec)


class ServeDeploymentGraphSpec(_CrdModel):
    import_path: str
    runtime_env: Optional[str] = None
    serve_config_specs: List[ServeConfigSpec] = Field(default_factory=list, alias="serveConfigs")


# -------- Wire format (dashboard /api/serve/deployments/) --------

class _WireModel(BaseModel):
    """Drops None, "", {} and [] from the dumped dict, like Go's omitempty."""
    always_sent: ClassVar[FrozenSet[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        return {
            k: v
            for k, v in data.items()
            if k in self.always_sent or not (v is None or v == "" or v == {} or v == [])
        }


class RayActorOptionsWire(_WireModel):
    runtime_env: Dict[str, Any] = Field(default_factory=dict)
    num_cpus: Optional[float] = None
    num_gpus: Optional[float] = None
    memory: Optional[int] = None
    object_store_memory: Optional[int] = None
    resources: Dict[str, Any] = Field(default_factory=dict)
    accelerator_type: Optional[str] = None


class ServeConfigWire(_WireModel):
    always_sent: ClassVar[FrozenSet[str]] = frozenset({"name", "ray_actor_options"})

    name: str
    num_replicas: Optional[int] = None
    route_prefix: Optional[str] = None
    max_concurrent_queries: Optional[int] = None
    user_config: Dict[str, Any] = Field(default_factory=dict)
    autoscaling_config: Dict[str, Any] = Field(default_factory=dict)
    graceful_shutdown_wait_loop_s: Optional[int] = None
    graceful_shutdown_timeout_s: Optional[int] = None
    health_check_period_s: Optional[int] = None
    health_check_timeout_s: Optional[int] = None
    ray_actor_options: RayActorOptionsWire = Field(default_factory=RayActorOptionsWire)


class ServingClusterDeployments(_WireModel):
    always_sent: ClassVar[FrozenSet[str]] = frozenset({"import_path"})

    import_path: str
    runtime_env: Dict[str, Any] = Field(default_factory=dict)
    deployments: List[ServeConfigWire] = Field(default_factory=list)


# -------- Observed state (dashboard /api/serve/deployments/status) --------

class AppStatus(BaseModel):
    status: str = ""
    message: str = ""
    deployment_timestamp: Optional[float] = None


class ServeDeploymentStatus(BaseModel):
    name: str = ""
    status: str = ""
    message: str = ""


class ServeDeploymentStatuses(BaseModel):
    app_status: AppStatus = Field(default_factory=AppStatus)
    deployment_statuses: List[ServeDeploymentStatus] = Field(default_factory=list)
