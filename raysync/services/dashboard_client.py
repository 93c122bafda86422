# raysync/services/dashboard_client.py
import logging
from typing import Callable, Optional

import httpx
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ..core.config import settings
from ..core.exceptions import (
    DashboardDecodingError,
    DashboardEncodingError,
    DashboardNotInitializedError,
    DashboardTransportError,
)
from ..schemas.serve import ServeDeploymentGraphSpec, ServeDeploymentStatuses
from .serve_config import build_serving_cluster_deployments

log = logging.getLogger(__name__)


class RayDashboardClient:
    """
    Talks to the Serve REST API of a Ray dashboard.

    Construct it, then call init_client("<host>:<port>") before any request.
    Requests are bounded by a short timeout and are never retried; failures
    surface as DashboardTransportError and the caller decides what to do.
    """

    def __init__(self, http_client: Optional[httpx.Client] = None, *, timeout: Optional[float] = None):
        self._client = http_client
        self._owns_client = http_client is None
        self._timeout = timeout if timeout is not None else settings.dashboard_timeout_seconds
        self.dashboard_url: Optional[str] = None

    def __enter__(self) -> "RayDashboardClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def init_client(self, url: str) -> None:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
            self._owns_client = True
        else:
            # injected clients get the same bound as our own
            self._client.timeout = httpx.Timeout(self._timeout)
        self.dashboard_url = f"{settings.dashboard_url_prefix}{url}"

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        if self._client is None or self.dashboard_url is None:
            raise DashboardNotInitializedError()
        url = self.dashboard_url + path
        try:
            resp = self._client.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DashboardTransportError(f"{method} {url} failed: {e}", cause=e) from e
        log.debug("%s %s -> %s", method, url, resp.status_code)
        return resp

    def get_deployments(self) -> str:
        """Current deployments, raw and unparsed."""
        return self._send("GET", settings.dashboard_deploy_path).text

    def update_deployments(self, specs: ServeDeploymentGraphSpec) -> None:
        # Only the round trip matters; the response status is not inspected,
        # callers poll get_deployments_status() instead.
        payload = build_serving_cluster_deployments(specs)
        try:
            body = payload.model_dump_json()
        except PydanticSerializationError as e:
            raise DashboardEncodingError(f"cannot encode deployments: {e}", cause=e) from e

        self._send(
            "PUT",
            settings.dashboard_deploy_path,
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    def get_deployments_status(self) -> ServeDeploymentStatuses:
        resp = self._send("GET", settings.dashboard_status_path)
        try:
            return ServeDeploymentStatuses.model_validate_json(resp.content)
        except ValidationError as e:
            raise DashboardDecodingError(f"cannot decode deployment statuses: {e}", cause=e) from e


DashboardClientFactory = Callable[[], RayDashboardClient]


def get_ray_dashboard_client() -> RayDashboardClient:
    """Default factory; reconcilers receive a factory instead of calling this directly."""
    return RayDashboardClient()
