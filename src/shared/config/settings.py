"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)
"""

from enum import Enum
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class RegionConfig(BaseModel):
    """Connection parameters for one game-data API region."""

    base_url: str = Field(description="Regional API host, e.g. https://eu.api.blizzard.com")
    namespace: str = Field(description="Dynamic data namespace, e.g. dynamic-eu")
    locale: str = Field(description="Locale used for display labels, e.g. en_GB")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


DEFAULT_REGIONS: dict[str, RegionConfig] = {
    "US": RegionConfig(
        base_url="https://us.api.blizzard.com",
        namespace="dynamic-us",
        locale="en_US",
    ),
    "EU": RegionConfig(
        base_url="https://eu.api.blizzard.com",
        namespace="dynamic-eu",
        locale="en_GB",
    ),
}


class BattleNetSettings(BaseSettings):
    """Game-data API access configuration."""

    model_config = SettingsConfigDict(env_prefix="BNET_")

    access_token: str | None = Field(
        default=None,
        description="Bearer token for the game-data API (acquired out of band)",
    )
    request_delay_ms: int = Field(
        default=50,
        ge=0,
        description="Pause between consecutive connected-realm detail requests",
    )
    timeout_seconds: float = Field(default=10.0, gt=0, description="Request timeout")


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    For nested settings, use the appropriate prefix (e.g., BNET_ACCESS_TOKEN).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="azeroth-codex", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        alias="ENV",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8080, description="Server bind port")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Nested settings
    battlenet: BattleNetSettings = Field(default_factory=BattleNetSettings)

    # Region panels
    regions: dict[str, RegionConfig] = Field(
        default_factory=lambda: dict(DEFAULT_REGIONS),
        description="Region code to API connection parameters",
    )
    default_region: str = Field(default="EU", description="Region shown first")

    @field_validator("regions")
    @classmethod
    def normalize_region_codes(cls, v: dict[str, RegionConfig]) -> dict[str, RegionConfig]:
        """Region codes are matched case-insensitively, stored upper-case."""
        return {code.upper(): config for code, config in v.items()}

    @field_validator("default_region")
    @classmethod
    def normalize_default_region(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def check_default_region(self) -> "Settings":
        if self.default_region not in self.regions:
            raise ValueError(
                f"default_region {self.default_region!r} is not one of the configured "
                f"regions: {sorted(self.regions)}"
            )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    def get_region(self, region: str) -> RegionConfig | None:
        """Look up a region's connection parameters by code."""
        return self.regions.get(region.upper())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()
