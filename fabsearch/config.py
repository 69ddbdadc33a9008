from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="FABSEARCH_")

    app_name: str = "Flesh and Blood Card Search API"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    # Upstream card database
    fab_origin: str = "https://cards.fabtcg.com"
    request_timeout: float = 30.0
    user_agent: str = "fabsearch/1.0"


settings = Settings()


# =============================================================================
# TOOL LIMITS
# =============================================================================

# Number of hits returned by the generic `search` tool
GENERIC_SEARCH_LIMIT = 10
