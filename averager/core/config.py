from pydantic import Field

from shared.config import BaseServiceConfig


class Settings(BaseServiceConfig):
    # Window
    window_size: int = Field(default=10, ge=1)

    otel_service_name: str = "averager"

    @property
    def upstream_timeout_seconds(self) -> float:
        return self.upstream_timeout_ms / 1000.0

    def upstream_url(self, category: str) -> str:
        base = self.upstream_base_url.rstrip("/")
        path = self.upstream_service_path.strip("/")
        return f"{base}/{path}/{category}"


settings = Settings()
