"""Runtime configuration for Geode Predictor."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="GEODE_PREDICTOR_", env_file=".env", extra="ignore")

    app_name: str = "geode-predictor"
    log_level: str = "WARNING"
    game_unique_id: int = Field(
        default=0,
        ge=0,
        description="Unique id of the save being predicted; seeds the treasure roll.",
    )
    geodes_cracked: int = Field(default=0, ge=0, description="Geodes cracked so far in the save.")
    default_distance: int = Field(default=1, ge=0)
    default_range_ahead: int = Field(default=10, ge=0)
    default_range_behind: int = Field(default=0, ge=0)


settings = Settings()
