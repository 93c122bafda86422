# raysync/core/exceptions.py
class ServiceError(Exception):
    """Generic service-layer error to avoid leaking provider details."""
    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ContainerNotFoundError(ServiceError):
    def __init__(self, container_name: str):
        super().__init__(f"can not find container {container_name}")
        self.container_name = container_name


class DashboardError(ServiceError):
    """Base for failures talking to the Ray dashboard."""


class DashboardNotInitializedError(DashboardError):
    def __init__(self):
        super().__init__("dashboard client used before init_client() was called")


class DashboardTransportError(DashboardError):
    """Connection refused, timeout, DNS... never retried here."""


class DashboardEncodingError(DashboardError):
    pass


class DashboardDecodingError(DashboardError):
    pass
