# raysync/schemas/cluster.py
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WorkerGroupSpec(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    group_name: str = ""
    # None means "unset"; aggregation treats it as 0
    replicas: Optional[int] = Field(default=None, ge=0)
    min_replicas: Optional[int] = Field(default=None, ge=0)
    max_replicas: Optional[int] = Field(default=None, ge=0)


class RayClusterSpec(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    worker_group_specs: List[WorkerGroupSpec] = Field(default_factory=list)
