# raysync/services/serve_sync_service.py
import logging
from typing import Optional

from ..schemas.serve import ServeDeploymentGraphSpec, ServeDeploymentStatuses
from .dashboard_client import DashboardClientFactory, RayDashboardClient, get_ray_dashboard_client

log = logging.getLogger(__name__)


class ServeSyncService:
    """
    One reconcile step against a Ray dashboard: push the desired serve graph,
    read statuses back. The dashboard client comes from the injected factory.
    """

    def __init__(self, client_factory: DashboardClientFactory = get_ray_dashboard_client):
        self._client_factory = client_factory
        self._client: Optional[RayDashboardClient] = None
        self._dashboard_host: Optional[str] = None

    def _dashboard(self, dashboard_host: str) -> RayDashboardClient:
        # one client per dashboard host, reused across reconcile cycles
        if self._client is None or self._dashboard_host != dashboard_host:
            self.close()
            self._client = self._client_factory()
            self._client.init_client(dashboard_host)
            self._dashboard_host = dashboard_host
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            self._dashboard_host = None

    def current_deployments(self, *, dashboard_host: str) -> str:
        return self._dashboard(dashboard_host).get_deployments()

    def push(self, *, dashboard_host: str, graph: ServeDeploymentGraphSpec) -> None:
        log.info(
            "updating %d serve deployment(s) for %s on %s",
            len(graph.serve_config_specs), graph.import_path, dashboard_host,
        )
        self._dashboard(dashboard_host).update_deployments(graph)

    def status(self, *, dashboard_host: str) -> ServeDeploymentStatuses:
        return self._dashboard(dashboard_host).get_deployments_status()

    def push_and_get_status(self, *, dashboard_host: str, graph: ServeDeploymentGraphSpec) -> ServeDeploymentStatuses:
        self.push(dashboard_host=dashboard_host, graph=graph)
        return self.status(dashboard_host=dashboard_host)
