from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    redis_socket_timeout_seconds: float = 2.0

    # Cache lifetimes (seconds)
    cache_default_ttl_seconds: int = 3600
    cache_expired_ttl_seconds: int = 300
    cache_stats_ttl_seconds: int = 300
    cache_listing_ttl_seconds: int = 300

    # Admission control
    rate_limit_requests: int = 10
    rate_limit_window_seconds: int = 60
    upload_quota: int = 10

    # Verification codes
    verification_code_ttl_seconds: int = 600
    verification_single_use: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
