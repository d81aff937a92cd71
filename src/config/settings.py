"""Application settings loaded from environment variables via pydantic-settings.

Settings are read from environment variables first and from a ``.env`` file
in the project root second; defaults below apply when neither is present.
Field ``ban_check_ttl`` maps to env var ``BAN_CHECK_TTL`` and so on.

TTLs are per *class* of cached request, not per entry: volatile market data
expires quickly, semi-static ban statistics are kept for an hour.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ADMIN_KEY = "admin-secret-key"


class Settings(BaseSettings):
    """Tarkov Search API settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Upstream services ===
    tarkov_api_base: str = "https://api.tarkov.dev/graphql"
    flea_market_api: str = "https://api.tarkov.dev"
    ban_check_api: str = "https://tarkovmarketplace.com/api"
    graphql_timeout: float = Field(default=10.0, gt=0)
    ban_check_timeout: float = Field(default=8.0, gt=0)
    price_history_timeout: float = Field(default=10.0, gt=0)

    # === Cache TTLs (seconds) ===
    default_cache_ttl: float = Field(default=300, gt=0)
    ban_check_ttl: float = Field(default=900, gt=0)
    ban_stats_ttl: float = Field(default=3600, gt=0)
    trending_ttl: float = Field(default=600, gt=0)
    price_history_ttl: float = Field(default=3600, gt=0)

    # === Cache behaviour ===
    cache_max_entries: int = Field(default=10_000, gt=0)
    coalesce_requests: bool = False  # share one in-flight call per key

    # === Rate limiting ===
    rate_limit_window_seconds: float = Field(default=900, gt=0)
    rate_limit_max_requests: int = Field(default=100, gt=0)
    rate_limit_max_clients: int = Field(default=100_000, gt=0)

    # === Admin ===
    admin_key: str = DEFAULT_ADMIN_KEY

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 3001
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    def uses_default_admin_key(self) -> bool:
        """Return ``True`` when ``ADMIN_KEY`` was left at its insecure default."""
        return self.admin_key == DEFAULT_ADMIN_KEY
