"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from keycache.core.constants import DEFAULT_SCAN_BATCH_SIZE

_TELEMETRY_EXPORTERS = frozenset({"console", "otlp", "none"})


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults suitable for a local Redis; see
    validate_ranges for the constraints enforced on load.
    """

    # App
    app_name: str = "keycache"
    app_version: str = "1.0.0"
    debug: bool = False

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_max_connections: int = 10
    # Seconds to wait for a free pooled connection (None = wait forever).
    redis_pool_timeout: int | None = 20
    redis_socket_timeout: float | None = 5.0
    redis_socket_connect_timeout: float | None = 5.0

    # Bulk prefix delete: COUNT hint per SCAN round
    scan_batch_size: int = DEFAULT_SCAN_BATCH_SIZE

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_ranges(self) -> "Settings":
        """Reject pool, scan and telemetry values the cache cannot work with."""
        if self.redis_max_connections <= 0:
            raise ValueError(
                f"redis_max_connections must be positive, got: {self.redis_max_connections}"
            )
        if self.scan_batch_size <= 0:
            raise ValueError(
                f"scan_batch_size must be positive, got: {self.scan_batch_size}"
            )
        if self.telemetry_exporter not in _TELEMETRY_EXPORTERS:
            raise ValueError(
                f"Invalid telemetry_exporter '{self.telemetry_exporter}'. "
                "Must be one of: 'console', 'otlp', 'none'"
            )
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError(
                f"telemetry_sample_rate must be within 0.0-1.0, got: {self.telemetry_sample_rate}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
