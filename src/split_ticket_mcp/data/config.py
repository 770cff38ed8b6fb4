from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderConfig(BaseSettings):
    """Configuration for the journey provider and the split optimizer.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    # transport.rest compatible endpoint (db-vendo-client behind a REST facade)
    base_url: str = Field(default="https://v6.db.transport.rest", alias="SPLIT_TICKET_API_URL")
    timeout_seconds: float = Field(default=30.0, alias="SPLIT_TICKET_TIMEOUT")
    user_agent: str = Field(default="split-ticket-mcp", alias="SPLIT_TICKET_USER_AGENT")
    timezone: str = Field(default="Europe/Berlin", alias="SPLIT_TICKET_TIMEZONE")

    # Optimizer tuning
    journey_batch_size: int = Field(default=2, alias="SPLIT_TICKET_JOURNEY_BATCH")
    max_candidates: int = Field(default=3, alias="SPLIT_TICKET_MAX_CANDIDATES")
    load_more_offset_seconds: int = Field(default=60, alias="SPLIT_TICKET_LOAD_MORE_OFFSET")

    location_cache_ttl_seconds: float = Field(
        default=300.0, alias="SPLIT_TICKET_LOCATION_CACHE_TTL"
    )


@lru_cache
def get_provider_config() -> ProviderConfig:
    """Get provider configuration (cached singleton).

    Returns:
        ProviderConfig with values from .env file or environment variables.
    """
    return ProviderConfig()
