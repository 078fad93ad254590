"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from ``SPIDERFY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SPIDERFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Logging format (console or json)")

    # Coincidence resolution
    spiderfy_radius: float = Field(default=30.0, description="Base ring radius used by spiderfy")
    jitter_factor: float = Field(default=0.00001, description="Multiplicative jitter factor")

    # Point synthesis (Murcia bounding box)
    max_points: int = Field(default=1_000_000, ge=0, description="Max points per synthesis call")
    lon_min: float = Field(default=-1.6, description="Western edge of the synthesis box")
    lon_max: float = Field(default=-0.8, description="Eastern edge of the synthesis box")
    lat_min: float = Field(default=37.5, description="Southern edge of the synthesis box")
    lat_max: float = Field(default=38.2, description="Northern edge of the synthesis box")
    coordinate_precision: int = Field(default=6, ge=0, description="Decimal digits kept on generated coordinates")

    # Search
    search_limit: int = Field(default=50, ge=0, description="Max station search results")


# Instantiate singleton settings object
settings = Settings()
