from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # API Keys
    fred_api_key: str = ""
    hud_api_key: str = ""
    eia_api_key: str = ""
    anthropic_api_key: str = ""

    # Shared secret for the daily briefing trigger (empty = no check)
    cron_secret: str = ""

    # Cache
    redis_url: str = "redis://localhost:6379/0"
    cache_backend: str = "redis"  # "redis" | "memory"
    dashboard_cache_ttl_seconds: int = 300
    prices_cache_ttl_seconds: int = 3600
    briefing_cache_ttl_seconds: int = 86400

    # Upstream calls
    http_timeout_seconds: float = 15.0

    # Narrative
    briefing_model: str = "claude-sonnet-4-20250514"
    briefing_max_tokens: int = 500

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
