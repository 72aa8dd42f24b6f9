from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RoutingConfig(BaseSettings):
    """Configuration for the road-routing service and the transit API.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # road-routing (OSRM) service
    osrm_base_url: str = Field(default="https://router.project-osrm.org", alias="ROUTING_OSRM_URL")
    osrm_profile: str = Field(default="driving", alias="ROUTING_OSRM_PROFILE")
    request_timeout_seconds: float = Field(default=10.0, alias="ROUTING_TIMEOUT")
    retry_attempts: int = Field(default=0, ge=0, alias="ROUTING_RETRY_ATTEMPTS")

    # transit API (planner, stops, per-trip stop listings)
    transit_api_url: str = Field(default="https://nyu-transit.vercel.app", alias="TRANSIT_API_URL")
    use_remote_catalog: bool = Field(default=False, alias="TRANSIT_REMOTE_CATALOG")
    catalog_cache_ttl_seconds: int = Field(default=300, alias="TRANSIT_CATALOG_TTL")
    trip_stops_cache_ttl_seconds: int = Field(default=300, alias="TRANSIT_TRIP_STOPS_TTL")


@lru_cache
def get_routing_config() -> RoutingConfig:
    """Get routing configuration (cached singleton).

    Returns:
        RoutingConfig with values from .env file or environment variables.
    """
    return RoutingConfig()
