# raysync/core/config.py
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # -------- Ray dashboard (Serve REST API) --------
    dashboard_scheme: str = "http"
    # Calls run inline in a reconcile step; keep this short.
    dashboard_timeout_seconds: float = 2.0
    dashboard_deploy_path: str = "/api/serve/deployments/"
    dashboard_status_path: str = "/api/serve/deployments/status"

    # -------- Kubernetes --------
    default_namespace: str = "default"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("dashboard_timeout_seconds")
    @classmethod
    def _positive_timeout(cls, v):
        if v <= 0:
            raise ValueError("dashboard_timeout_seconds must be positive")
        return v

    @property
    def dashboard_url_prefix(self) -> str:
        return f"{self.dashboard_scheme}://"


settings = Settings()
